"""Transformer exceptions and JSON:API error objects."""

from typing import Any


class TransformerError(ValueError):
    """Base class for failures that abort a transformation."""


class MappingConfigurationError(TransformerError):
    """Raised when no usable type-to-mapping table was supplied."""


class UnmappedTypeError(TransformerError):
    """Raised when a type that must be mapped has no mapping."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"Provided type {type_name} has no mapping.")


class JSONAPIErrorBuilder:
    """Build JSON:API error objects and error documents."""

    def error_object(
        self,
        *,
        status: str | None = None,
        code: str | None = None,
        title: str | None = None,
        detail: str | None = None,
        source: dict[str, Any] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API error object."""
        error: dict[str, Any] = {}
        if status is not None:
            error["status"] = status
        if code is not None:
            error["code"] = code
        if title is not None:
            error["title"] = title
        if detail is not None:
            error["detail"] = detail
        if source is not None:
            error["source"] = source
        if meta is not None:
            error["meta"] = meta
        if not error:
            raise ValueError("Error object must include at least one field.")
        return error

    def from_exception(self, exc: Exception, *, status: str = "500") -> dict[str, Any]:
        """Return an error object describing a failed transformation."""
        meta = None
        if isinstance(exc, UnmappedTypeError):
            meta = {"type": exc.type_name}
        return self.error_object(
            status=status,
            code=type(exc).__name__,
            title="Transformation Failed" if isinstance(exc, TransformerError) else "Internal Server Error",
            detail=str(exc),
            meta=meta,
        )

    def error_document(self, errors: list[dict[str, Any]]) -> dict[str, Any]:
        """Return a JSON:API document with an errors array."""
        return {"errors": errors}

"""Type-to-mapping lookup table."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping

from pydantic import ValidationError

from jsonapi_transformer.core.errors import MappingConfigurationError, UnmappedTypeError

from .base import ResourceMapping

NO_MAPPINGS_MESSAGE = "No mappings were found. Mappings are required by the transformer to work."


class MappingRegistry:
    """Read-only table of ``ResourceMapping`` keyed by class identifier."""

    def __init__(self, mappings: Mapping[str, ResourceMapping]) -> None:
        self._mappings = dict(mappings)

    @classmethod
    def from_mappings(cls, mappings: Any) -> "MappingRegistry":
        """Validate user-supplied mappings and build a registry.

        Accepts a registry, an iterable of ``ResourceMapping`` or a mapping of
        class identifier to ``ResourceMapping`` (or a dict validating into
        one). Raises ``MappingConfigurationError`` for anything else.
        """
        if isinstance(mappings, MappingRegistry):
            if not mappings:
                raise MappingConfigurationError(NO_MAPPINGS_MESSAGE)
            return mappings
        if not mappings:
            raise MappingConfigurationError(NO_MAPPINGS_MESSAGE)
        if isinstance(mappings, Mapping):
            table = {}
            for class_name, mapping in mappings.items():
                if not isinstance(class_name, str):
                    raise MappingConfigurationError(
                        f"Mapping keys must be class identifiers, got {class_name!r}."
                    )
                table[class_name] = cls._validate(mapping, class_name)
            return cls(table)
        if isinstance(mappings, (str, bytes)) or not isinstance(mappings, Iterable):
            raise MappingConfigurationError(
                f"Mappings must be a table of class identifier to mapping, got {type(mappings).__name__}."
            )
        table = {}
        for mapping in mappings:
            validated = cls._validate(mapping, None)
            table[validated.class_name] = validated
        if not table:
            raise MappingConfigurationError(NO_MAPPINGS_MESSAGE)
        return cls(table)

    @staticmethod
    def _validate(mapping: Any, class_name: str | None) -> ResourceMapping:
        if isinstance(mapping, ResourceMapping):
            return mapping
        if not isinstance(mapping, Mapping):
            raise MappingConfigurationError(
                f"Mapping for {class_name or '<unknown>'} must be a ResourceMapping, "
                f"got {type(mapping).__name__}."
            )
        data = dict(mapping)
        if class_name is not None:
            data.setdefault("class_name", class_name)
        try:
            return ResourceMapping.model_validate(data)
        except ValidationError as exc:
            raise MappingConfigurationError(
                f"Invalid mapping for {class_name or data.get('class_name', '<unknown>')}: {exc}"
            ) from exc

    def __contains__(self, class_name: object) -> bool:
        return class_name in self._mappings

    def __iter__(self) -> Iterator[str]:
        return iter(self._mappings)

    def __len__(self) -> int:
        return len(self._mappings)

    def items(self) -> Iterable[tuple[str, ResourceMapping]]:
        return self._mappings.items()

    def get(self, class_name: str) -> ResourceMapping | None:
        return self._mappings.get(class_name)

    def require(self, class_name: str) -> ResourceMapping:
        """Return the mapping for ``class_name`` or raise ``UnmappedTypeError``."""
        mapping = self._mappings.get(class_name)
        if mapping is None:
            raise UnmappedTypeError(class_name)
        return mapping

    def id_properties(self, class_name: str) -> list[str]:
        mapping = self._mappings.get(class_name)
        return list(mapping.id_properties) if mapping else []

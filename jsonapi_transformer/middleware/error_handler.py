"""Render transformation failures as JSON:API error documents."""

import logging
from typing import Any

from jsonapi_transformer.core.errors import JSONAPIErrorBuilder, TransformerError
from jsonapi_transformer.responses import JSONAPIResponse

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware:
    """Convert exceptions into JSON:API error documents."""

    error_builder_class: type = JSONAPIErrorBuilder

    def __init__(self, app: Any) -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Handle exceptions and serialize JSON:API error documents."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return
        try:
            await self.app(scope, receive, send)
        except Exception as exc:  # noqa: BLE001 - last-resort handler
            builder = self.error_builder_class()
            if isinstance(exc, TransformerError):
                logger.warning("Transformation failed: %s", exc)
                error = builder.from_exception(exc)
            else:
                logger.exception("Unhandled error while serving %s", scope.get("path"))
                error = builder.error_object(
                    status="500", title="Internal Server Error", detail=str(exc)
                )
            response = JSONAPIResponse(builder.error_document([error]), status_code=500)
            await response(scope, receive, send)

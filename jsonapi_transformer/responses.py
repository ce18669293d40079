"""Text encoding and HTTP responses for JSON:API documents."""

from __future__ import annotations

import json
from typing import Any

from starlette.responses import JSONResponse

from jsonapi_transformer.config import get_settings

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"


def encode_document(document: Any, *, indent: int | None = None) -> str:
    """Encode a document as indented JSON, keeping Unicode and slashes as-is."""
    if indent is None:
        indent = get_settings().indent
    return json.dumps(document, indent=indent or None, ensure_ascii=False)


class JSONAPIResponse(JSONResponse):
    """JSONResponse rendering JSON:API documents with the JSON:API media type."""

    media_type = JSONAPI_MEDIA_TYPE

    def render(self, content: Any) -> bytes:
        return encode_document(content).encode("utf-8")

"""Transform serialized object trees into JSON:API v1.1 documents."""

from .config import TransformerConfig, TransformerSettings, get_settings
from .core.document import JSONAPIDocumentBuilder
from .core.errors import (
    JSONAPIErrorBuilder,
    MappingConfigurationError,
    TransformerError,
    UnmappedTypeError,
)
from .mapping import MappingRegistry, ResourceMapping
from .responses import JSONAPIResponse, encode_document
from .serializers.base import ValueTreeSerializer
from .transformers.base import JSONAPITransformer

__all__ = [
    "JSONAPIDocumentBuilder",
    "JSONAPIErrorBuilder",
    "JSONAPIResponse",
    "JSONAPITransformer",
    "MappingConfigurationError",
    "MappingRegistry",
    "ResourceMapping",
    "TransformerConfig",
    "TransformerError",
    "TransformerSettings",
    "UnmappedTypeError",
    "ValueTreeSerializer",
    "encode_document",
    "get_settings",
]

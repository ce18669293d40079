"""Core JSON:API document and error helpers."""

from .document import JSONAPIDocumentBuilder
from .errors import (
    JSONAPIErrorBuilder,
    MappingConfigurationError,
    TransformerError,
    UnmappedTypeError,
)

__all__ = [
    "JSONAPIDocumentBuilder",
    "JSONAPIErrorBuilder",
    "MappingConfigurationError",
    "TransformerError",
    "UnmappedTypeError",
]

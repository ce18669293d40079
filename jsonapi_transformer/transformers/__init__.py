"""Transformation stages for JSON:API documents."""

from .base import JSONAPITransformer
from .included import IncludedCollector
from .postprocessor import postprocess
from .preprocessor import TreePreprocessor
from .projector import ResourceProjector

__all__ = [
    "IncludedCollector",
    "JSONAPITransformer",
    "ResourceProjector",
    "TreePreprocessor",
    "postprocess",
]

"""Mapping configuration for JSON:API projection."""

from .base import ResourceMapping
from .registry import MappingRegistry

__all__ = ["MappingRegistry", "ResourceMapping"]

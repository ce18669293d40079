"""Serializers producing the value tree consumed by the transformer."""

from .base import ValueTreeSerializer

__all__ = ["ValueTreeSerializer"]

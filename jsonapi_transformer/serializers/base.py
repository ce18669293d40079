"""Serialize Python objects into the tagged value tree."""

from __future__ import annotations

import datetime
import decimal
import enum
import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.inspection import inspect
from sqlalchemy.orm.attributes import NO_VALUE

from jsonapi_transformer.nodes import CLASS_IDENTIFIER_KEY, MAP_TYPE, SCALAR_TYPE, SCALAR_VALUE

_SCALAR_TYPES = {
    bool: "boolean",
    int: "integer",
    float: "float",
    str: "string",
    type(None): "NULL",
}

_SKIP = object()


class ValueTreeSerializer:
    """Serialize SQLAlchemy models and plain objects into the value tree wire form.

    Objects already on the current path are left out, so bidirectional
    relationships serialize from the parent side only.
    """

    def serialize(self, value: Any) -> Any:
        """Return the ``@type``/``@scalar``/``@map`` tagged form of ``value``."""
        result = self._serialize(value, ())
        return None if result is _SKIP else result

    def class_identifier(self, instance: Any) -> str:
        """Return ``module.ClassName`` for ``instance``."""
        cls = instance.__class__
        return f"{cls.__module__}.{cls.__qualname__}"

    def get_properties(self, instance: Any) -> dict[str, Any]:
        """Return the raw properties of an object (override in subclasses)."""
        try:
            mapper = inspect(instance.__class__)
        except NoInspectionAvailable:
            mapper = None
        if mapper is None or not hasattr(mapper, "column_attrs"):
            if hasattr(instance, "__dict__"):
                return {
                    key: value
                    for key, value in vars(instance).items()
                    if not key.startswith("_")
                }
            return {}

        properties = {attr.key: getattr(instance, attr.key) for attr in mapper.column_attrs}
        state = inspect(instance)
        for relationship in mapper.relationships:
            if state.attrs[relationship.key].loaded_value is NO_VALUE:
                continue
            properties[relationship.key] = getattr(instance, relationship.key)
        return properties

    def _serialize(self, value: Any, path: tuple[int, ...]) -> Any:
        scalar_type = _SCALAR_TYPES.get(type(value))
        if scalar_type is not None:
            return {SCALAR_TYPE: scalar_type, SCALAR_VALUE: value}
        if isinstance(value, enum.Enum):
            return self._serialize(value.value, path)
        if isinstance(value, (datetime.date, datetime.time)):
            return {SCALAR_TYPE: type(value).__name__, SCALAR_VALUE: value.isoformat()}
        if isinstance(value, (decimal.Decimal, uuid.UUID)):
            return {SCALAR_TYPE: type(value).__name__, SCALAR_VALUE: str(value)}
        if isinstance(value, (bytes, bytearray, memoryview)):
            return {SCALAR_TYPE: "bytes", SCALAR_VALUE: bytes(value).decode("utf-8", errors="replace")}
        if isinstance(value, Mapping):
            items = {str(key): self._serialize(item, path) for key, item in value.items()}
            return {MAP_TYPE: "array", SCALAR_VALUE: {k: v for k, v in items.items() if v is not _SKIP}}
        if isinstance(value, (list, tuple, set, frozenset)):
            items = [self._serialize(item, path) for item in value]
            return {MAP_TYPE: "array", SCALAR_VALUE: [item for item in items if item is not _SKIP]}

        if not hasattr(value, "__dict__"):
            return {SCALAR_TYPE: type(value).__name__, SCALAR_VALUE: str(value)}

        if id(value) in path:
            return _SKIP
        path = path + (id(value),)
        serialized: dict[str, Any] = {CLASS_IDENTIFIER_KEY: self.class_identifier(value)}
        for key, item in self.get_properties(value).items():
            result = self._serialize(item, path)
            if result is not _SKIP:
                serialized[key] = result
        return serialized

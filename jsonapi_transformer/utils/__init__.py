"""Tree and naming utilities used by the transformer."""

from .casing import camel_to_underscore, namespace_as_key
from .tree import (
    contains_resource,
    delete_properties,
    filter_properties,
    flatten_values,
    iter_resources,
    map_objects,
    rename_properties,
    strip_class_identifiers,
)

__all__ = [
    "camel_to_underscore",
    "contains_resource",
    "delete_properties",
    "filter_properties",
    "flatten_values",
    "iter_resources",
    "map_objects",
    "namespace_as_key",
    "rename_properties",
    "strip_class_identifiers",
]

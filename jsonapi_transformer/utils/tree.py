"""Recursive helpers over the value tree."""

from __future__ import annotations

from typing import Any, Callable, Container, Iterable, Iterator, Mapping

from jsonapi_transformer.nodes import (
    CLASS_IDENTIFIER_KEY,
    MAP_TYPE,
    NODE_TYPES,
    SCALAR_TYPE,
    SCALAR_VALUE,
    CollectionNode,
    ObjectNode,
    ScalarNode,
    ValueNode,
)


def map_objects(node: ValueNode, func: Callable[[ObjectNode], ObjectNode]) -> ValueNode:
    """Rebuild the tree bottom-up, passing every object node through ``func``."""
    if isinstance(node, ObjectNode):
        rebuilt = ObjectNode(
            node.class_name,
            {key: map_objects(value, func) for key, value in node.properties.items()},
        )
        return func(rebuilt)
    if isinstance(node, CollectionNode):
        return CollectionNode(node.map_type, [map_objects(item, func) for item in node.items])
    if isinstance(node.value, list):
        return ScalarNode(node.scalar_type, [_map_any(item, func) for item in node.value])
    if isinstance(node.value, dict):
        return ScalarNode(
            node.scalar_type, {key: _map_any(item, func) for key, item in node.value.items()}
        )
    return node


def _map_any(value: Any, func: Callable[[ObjectNode], ObjectNode]) -> Any:
    return map_objects(value, func) if isinstance(value, NODE_TYPES) else value


def filter_properties(
    node: ValueNode, class_name: str, keep: Iterable[str], id_properties: Iterable[str] = ()
) -> ValueNode:
    """Drop properties of ``class_name`` objects that are not in ``keep``.

    Id properties always survive. An empty ``keep`` leaves the tree as is.
    """
    allowed = set(keep)
    if not allowed:
        return node
    allowed.update(id_properties)

    def apply(obj: ObjectNode) -> ObjectNode:
        if obj.class_name != class_name:
            return obj
        return ObjectNode(
            obj.class_name, {k: v for k, v in obj.properties.items() if k in allowed}
        )

    return map_objects(node, apply)


def delete_properties(node: ValueNode, class_name: str, hidden: Iterable[str]) -> ValueNode:
    """Remove the ``hidden`` properties from every ``class_name`` object."""
    dropped = set(hidden)
    if not dropped:
        return node

    def apply(obj: ObjectNode) -> ObjectNode:
        if obj.class_name != class_name:
            return obj
        return ObjectNode(
            obj.class_name, {k: v for k, v in obj.properties.items() if k not in dropped}
        )

    return map_objects(node, apply)


def rename_properties(node: ValueNode, class_name: str, aliases: Mapping[str, str]) -> ValueNode:
    """Rename properties of every ``class_name`` object, keeping their order."""
    if not aliases:
        return node

    def apply(obj: ObjectNode) -> ObjectNode:
        if obj.class_name != class_name:
            return obj
        return ObjectNode(
            obj.class_name, {aliases.get(k, k): v for k, v in obj.properties.items()}
        )

    return map_objects(node, apply)


def contains_resource(node: ValueNode, mapped: Container[str]) -> bool:
    """Return True when a mapped object is reachable without crossing an object.

    Collections and scalar wrappers are searched recursively; unmapped
    objects are opaque and never searched.
    """
    if isinstance(node, ObjectNode):
        return node.class_name in mapped
    if isinstance(node, ScalarNode):
        if node.scalar_type in mapped:
            return True
        children: Iterable[Any] = ()
        if isinstance(node.value, list):
            children = node.value
        elif isinstance(node.value, dict):
            children = node.value.values()
        return any(
            contains_resource(child, mapped) for child in children if isinstance(child, NODE_TYPES)
        )
    return any(contains_resource(item, mapped) for item in node.items)


def iter_resources(node: ValueNode, mapped: Container[str]) -> Iterator[ObjectNode]:
    """Yield mapped objects held by a collection, in order, at any list depth."""
    if isinstance(node, ObjectNode):
        if node.class_name in mapped:
            yield node
        return
    if isinstance(node, CollectionNode):
        children: Iterable[Any] = node.items
    elif isinstance(node.value, list):
        children = node.value
    elif isinstance(node.value, dict):
        children = node.value.values()
    else:
        return
    for child in children:
        if isinstance(child, NODE_TYPES):
            yield from iter_resources(child, mapped)


def flatten_values(value: Any) -> Any:
    """Replace scalar wrappers by their bare values, recursively.

    Handles node objects and raw wire wrappers, i.e. dicts made only of
    ``@value`` plus ``@scalar`` or ``@map``. Any other dict is user data and
    keeps its keys, even one named ``@value``.
    """
    if isinstance(value, ScalarNode):
        return flatten_values(value.value)
    if isinstance(value, CollectionNode):
        return [flatten_values(item) for item in value.items]
    if isinstance(value, ObjectNode):
        return {
            CLASS_IDENTIFIER_KEY: value.class_name,
            **{key: flatten_values(item) for key, item in value.properties.items()},
        }
    if isinstance(value, dict):
        if _is_raw_wrapper(value):
            return flatten_values(value[SCALAR_VALUE])
        return {key: flatten_values(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [flatten_values(item) for item in value]
    return value


def strip_class_identifiers(value: Any) -> Any:
    """Remove every class identifier key from plain nested data."""
    if isinstance(value, dict):
        return {
            key: strip_class_identifiers(item)
            for key, item in value.items()
            if key != CLASS_IDENTIFIER_KEY
        }
    if isinstance(value, list):
        return [strip_class_identifiers(item) for item in value]
    return value


def _is_raw_wrapper(value: dict[Any, Any]) -> bool:
    keys = set(value)
    return keys in ({SCALAR_TYPE, SCALAR_VALUE}, {MAP_TYPE, SCALAR_VALUE})

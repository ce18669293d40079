"""Value tree consumed by the transformer.

The upstream serializer emits a tagged, recursive structure:

* object nodes carry a ``@type`` key naming their source class,
* scalar wrappers are ``{"@scalar": <type>, "@value": <value>}``,
* collection wrappers are ``{"@map": <type>, "@value": [<node>, ...]}``.

``parse_value`` turns that wire form into the three node classes below so
the rest of the package dispatches on types instead of probing keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Union

CLASS_IDENTIFIER_KEY = "@type"
SCALAR_TYPE = "@scalar"
SCALAR_VALUE = "@value"
MAP_TYPE = "@map"


@dataclass
class ObjectNode:
    """One domain entity tagged with its class identifier."""

    class_name: str
    properties: dict[str, "ValueNode"] = field(default_factory=dict)

    def copy(self) -> "ObjectNode":
        """Return a shallow copy with its own property dict."""
        return ObjectNode(self.class_name, dict(self.properties))


@dataclass
class ScalarNode:
    """A primitive, or an opaque list/dict of nodes."""

    scalar_type: str
    value: Any = None


@dataclass
class CollectionNode:
    """A homogeneous list of nodes serialized independently."""

    map_type: str
    items: list["ValueNode"] = field(default_factory=list)


ValueNode = Union[ObjectNode, ScalarNode, CollectionNode]
NODE_TYPES = (ObjectNode, ScalarNode, CollectionNode)


def parse_value(raw: Any) -> ValueNode:
    """Build a value node from the serializer's wire form."""
    if isinstance(raw, NODE_TYPES):
        return raw
    if isinstance(raw, dict):
        if CLASS_IDENTIFIER_KEY in raw:
            return ObjectNode(
                str(raw[CLASS_IDENTIFIER_KEY]),
                {
                    key: parse_value(value)
                    for key, value in raw.items()
                    if key != CLASS_IDENTIFIER_KEY
                },
            )
        if MAP_TYPE in raw:
            items = raw.get(SCALAR_VALUE)
            if isinstance(items, dict):
                return ScalarNode(str(raw[MAP_TYPE]), _parse_scalar(items))
            return CollectionNode(
                str(raw[MAP_TYPE]), [parse_value(item) for item in items or []]
            )
        if SCALAR_TYPE in raw:
            return ScalarNode(str(raw[SCALAR_TYPE]), _parse_scalar(raw.get(SCALAR_VALUE)))
        return ScalarNode("array", _parse_scalar(raw))
    if isinstance(raw, (list, tuple)):
        return CollectionNode("array", [parse_value(item) for item in raw])
    return ScalarNode(type(raw).__name__, raw)


def _parse_scalar(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [parse_value(item) for item in value]
    if isinstance(value, dict):
        return {key: parse_value(item) for key, item in value.items()}
    return value


def iter_children(node: ValueNode) -> Iterator[ValueNode]:
    """Yield the direct child nodes of any node variant."""
    if isinstance(node, ObjectNode):
        yield from node.properties.values()
    elif isinstance(node, CollectionNode):
        yield from node.items
    elif isinstance(node.value, list):
        yield from (item for item in node.value if isinstance(item, NODE_TYPES))
    elif isinstance(node.value, dict):
        yield from (item for item in node.value.values() if isinstance(item, NODE_TYPES))

"""Apply per-type property filters and renames before projection."""

from __future__ import annotations

from jsonapi_transformer.mapping import MappingRegistry
from jsonapi_transformer.nodes import ValueNode
from jsonapi_transformer.utils.tree import delete_properties, filter_properties, rename_properties


class TreePreprocessor:
    """Filter, hide and rename properties of mapped objects anywhere in a tree."""

    def __init__(self, registry: MappingRegistry) -> None:
        self.registry = registry

    def process(self, node: ValueNode) -> ValueNode:
        """Return a new tree with every mapping's property rules applied."""
        for class_name, mapping in self.registry.items():
            node = filter_properties(node, class_name, mapping.filter_keys, mapping.id_properties)
            node = delete_properties(node, class_name, mapping.hidden_properties)
            node = rename_properties(node, class_name, mapping.aliased_properties)
        return node

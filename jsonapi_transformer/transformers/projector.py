"""Project one object node into a JSON:API resource object."""

from __future__ import annotations

import logging
from typing import Any

from jsonapi_transformer.mapping import MappingRegistry
from jsonapi_transformer.nodes import CollectionNode, ObjectNode, ScalarNode, ValueNode
from jsonapi_transformer.utils.casing import camel_to_underscore, namespace_as_key
from jsonapi_transformer.utils.tree import contains_resource, iter_resources

logger = logging.getLogger(__name__)

ID_SEPARATOR = "."


class ResourceProjector:
    """Build ``type``, ``id``, ``attributes``, ``links`` and ``relationships``.

    Attribute values are left as value nodes; the post-processor flattens
    them once the whole document is assembled.
    """

    def __init__(self, registry: MappingRegistry) -> None:
        self.registry = registry

    def project(self, node: ObjectNode) -> dict[str, Any]:
        """Return the resource object for ``node``."""
        resource: dict[str, Any] = self.identifier(node)
        resource["attributes"] = self.attributes(node)
        resource.update(self.links(node))
        relationships = self.relationships(node)
        if relationships:
            resource["relationships"] = relationships
        logger.debug(
            "Projected %s:%s with %d attributes and %d relationships",
            resource["type"],
            resource["id"],
            len(resource["attributes"]),
            len(relationships),
        )
        return resource

    def identifier(self, node: ObjectNode) -> dict[str, str]:
        """Return the ``{type, id}`` resource identifier of ``node``."""
        return {"type": self.resource_type(node), "id": self.resolve_id(node)}

    def resource_type(self, node: ObjectNode) -> str:
        mapping = self.registry.get(node.class_name)
        type_name = mapping.alias if mapping and mapping.alias else node.class_name
        return namespace_as_key(type_name)

    def resolve_id(self, node: ObjectNode) -> str:
        """Join the resolved id property values in declaration order."""
        return ID_SEPARATOR.join(self._id_values(node).values())

    def _id_values(self, node: ObjectNode) -> dict[str, str]:
        values = {}
        for name in self.registry.id_properties(node.class_name):
            if name in node.properties:
                values[name] = self._id_value(node.properties[name])
        return values

    def _id_value(self, value: Any) -> str:
        if isinstance(value, ObjectNode):
            if self.registry.id_properties(value.class_name):
                return self.resolve_id(value)
            parts = value.properties.values()
        elif isinstance(value, CollectionNode):
            parts = value.items
        elif isinstance(value, ScalarNode):
            return self._id_value(value.value)
        elif isinstance(value, list):
            parts = value
        elif isinstance(value, dict):
            parts = value.values()
        elif value is None:
            return ""
        elif isinstance(value, bool):
            return "true" if value else "false"
        else:
            return str(value)
        return ID_SEPARATOR.join(self._id_value(part) for part in parts)

    def is_attribute(self, value: ValueNode) -> bool:
        """Return True when ``value`` is an attribute rather than a relationship."""
        if isinstance(value, ObjectNode):
            return value.class_name not in self.registry
        return not contains_resource(value, self.registry)

    def attributes(self, node: ObjectNode) -> dict[str, Any]:
        id_properties = self.registry.id_properties(node.class_name)
        return {
            camel_to_underscore(name): value
            for name, value in node.properties.items()
            if name not in id_properties and self.is_attribute(value)
        }

    def links(self, node: ObjectNode) -> dict[str, Any]:
        """Return ``{"links": {"self": url}}`` when a resource URL is configured."""
        mapping = self.registry.get(node.class_name)
        if mapping is None or not mapping.resource_url:
            return {}
        url = mapping.resource_url
        id_values = self._id_values(node)
        for name in mapping.id_properties:
            url = url.replace(f"{{{name}}}", id_values.get(name, ""))
        return {"links": {"self": url}}

    def relationships(self, node: ObjectNode) -> dict[str, Any]:
        """Return relationship objects for the immediate children of ``node``."""
        id_properties = self.registry.id_properties(node.class_name)
        relationships: dict[str, Any] = {}
        for name, value in node.properties.items():
            if name in id_properties or self.is_attribute(value):
                continue
            if isinstance(value, ObjectNode):
                relationships[name] = {**self.links(value), "data": self.identifier(value)}
            else:
                relationships[name] = {
                    "data": [self.identifier(item) for item in iter_resources(value, self.registry)]
                }
        return relationships

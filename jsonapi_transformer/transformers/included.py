"""Collect nested resources into the top-level ``included`` array."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from jsonapi_transformer.nodes import ObjectNode, ValueNode, iter_children
from jsonapi_transformer.utils.casing import camel_to_underscore
from jsonapi_transformer.utils.tree import iter_resources

from .projector import ResourceProjector

logger = logging.getLogger(__name__)


class IncludedCollector:
    """Walk a root resource and flatten every nested resource it reaches.

    Discovery is depth-first and a resource is appended only after its own
    nested resources, so children precede their parents. Nothing is
    deduplicated: a resource reached through two paths is emitted twice.
    """

    def __init__(
        self, projector: ResourceProjector, relationships: Mapping[str, Any] | None = None
    ) -> None:
        self.projector = projector
        self.registry = projector.registry
        self.relationships = dict(relationships or {})

    def collect(self, root: ObjectNode) -> list[dict[str, Any]]:
        """Return included resources for ``root``, whose own identity is already stripped."""
        included: list[dict[str, Any]] = []
        for value in root.properties.values():
            self._visit(value, included)
        return included

    def _visit(self, value: ValueNode, included: list[dict[str, Any]]) -> None:
        if isinstance(value, ObjectNode):
            if value.class_name in self.registry:
                self._include(value, included)
            return
        for child in iter_children(value):
            self._visit(child, included)

    def _include(self, node: ObjectNode, included: list[dict[str, Any]]) -> None:
        mapping = self.registry.require(node.class_name)
        attributes: dict[str, Any] = {}
        relationships: dict[str, Any] = {}

        for name, value in node.properties.items():
            if name in mapping.id_properties:
                continue
            if self.projector.is_attribute(value):
                attributes[camel_to_underscore(name)] = value
                continue
            if isinstance(value, ObjectNode):
                self._include(value, included)
                # Static metadata comes from the parent mapping, not the child's.
                relationships[name] = {
                    **self.projector.links(value),
                    "data": {name: self.projector.identifier(value)},
                    **self.relationships,
                    **mapping.relationships,
                }
                continue
            resources = list(iter_resources(value, self.registry))
            for resource in resources:
                self._include(resource, included)
            relationships[name] = {
                "data": [self.projector.identifier(resource) for resource in resources]
            }

        if not attributes:
            return
        identifier = self.projector.identifier(node)
        if not identifier["id"]:
            logger.warning(
                "Skipping %s from included: resource has attributes but no id", identifier["type"]
            )
            return
        entry = {
            **identifier,
            "attributes": attributes,
            "relationships": relationships,
            **self.projector.links(node),
        }
        included.append({key: value for key, value in entry.items() if value})

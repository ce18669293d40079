"""JSON:API transformer entry point."""

from __future__ import annotations

import logging
from typing import Any, Dict

from jsonapi_transformer.config import TransformerConfig
from jsonapi_transformer.core.document import JSONAPIDocumentBuilder
from jsonapi_transformer.core.errors import TransformerError
from jsonapi_transformer.mapping import MappingRegistry
from jsonapi_transformer.nodes import CollectionNode, ObjectNode, parse_value
from jsonapi_transformer.responses import encode_document

from .included import IncludedCollector
from .postprocessor import postprocess
from .preprocessor import TreePreprocessor
from .projector import ResourceProjector

logger = logging.getLogger(__name__)


class JSONAPITransformer:
    """Turn a serialized value tree into a JSON:API document.

    Follows http://jsonapi.org/format/#document-structure. The transformer
    holds only configuration: the mapping table and an immutable
    ``TransformerConfig``. Setters swap in a new config value and return the
    transformer so they can be chained; a running call keeps the config it
    started with.
    """

    document_builder_class: type = JSONAPIDocumentBuilder

    def __init__(self, mappings: Any = None, config: TransformerConfig | None = None) -> None:
        self._registry: MappingRegistry | None = None
        self.mappings = mappings
        self.config = config or TransformerConfig.from_settings()

    @property
    def mappings(self) -> Any:
        return self._mappings

    @mappings.setter
    def mappings(self, mappings: Any) -> None:
        self._mappings = mappings
        self._registry = None

    @property
    def registry(self) -> MappingRegistry:
        """Validated mapping table; raises ``MappingConfigurationError`` if unusable."""
        if self._registry is None:
            self._registry = MappingRegistry.from_mappings(self.mappings)
        return self._registry

    def set_meta(self, meta: Dict[str, Any]) -> "JSONAPITransformer":
        self.config = self.config.with_meta(meta)
        return self

    def add_meta(self, key: str, value: Any) -> "JSONAPITransformer":
        self.config = self.config.with_meta_item(key, value)
        return self

    def set_api_version(self, api_version: str) -> "JSONAPITransformer":
        self.config = self.config.with_api_version(api_version)
        return self

    def set_relationships(self, relationships: Dict[str, Any]) -> "JSONAPITransformer":
        self.config = self.config.with_relationships(relationships)
        return self

    def set_related_url(self, related_url: str) -> "JSONAPITransformer":
        self.config = self.config.with_related_url(related_url)
        return self

    def serialize(self, value: Any) -> str:
        """Transform ``value`` and encode the document as JSON text."""
        return encode_document(self.transform(value))

    def transform(self, value: Any) -> dict[str, Any]:
        """Return the JSON:API document for a value tree.

        ``value`` is a value node or the serializer's wire form. An object
        root yields a single resource in ``data``; a collection root yields a
        list of independently projected resources.
        """
        config = self.config
        registry = self.registry
        node = TreePreprocessor(registry).process(parse_value(value))
        projector = ResourceProjector(registry)
        collector = IncludedCollector(projector, config.relationships)
        builder = self.document_builder_class()

        if isinstance(node, CollectionNode):
            roots = [self._require_object(item) for item in node.items]
            resources = []
            included: list[dict[str, Any]] = []
            for root in roots:
                registry.require(root.class_name)
                resources.append(projector.project(root))
                included.extend(collector.collect(self._remove_type_and_id(root, registry)))
            links = self._top_level_links(roots[0], registry, config) if roots else {}
            document = builder.build_collection(
                resources,
                included=included,
                links=links,
                meta=config.meta,
                version=config.api_version,
            )
        else:
            root = self._require_object(node)
            registry.require(root.class_name)
            resource = projector.project(root)
            included = collector.collect(self._remove_type_and_id(root, registry))
            document = builder.build_single(
                resource,
                included=included,
                links=self._top_level_links(root, registry, config),
                meta=config.meta,
                version=config.api_version,
            )

        logger.debug("Built document with %d included resources", len(included))
        return postprocess(document)

    @staticmethod
    def _require_object(node: Any) -> ObjectNode:
        if not isinstance(node, ObjectNode):
            raise TransformerError(
                f"Expected an object node, got {type(node).__name__}."
            )
        return node

    @staticmethod
    def _remove_type_and_id(root: ObjectNode, registry: MappingRegistry) -> ObjectNode:
        mapping = registry.require(root.class_name)
        copy = root.copy()
        for name in mapping.id_properties:
            copy.properties.pop(name, None)
        return copy

    def _top_level_links(
        self, root: ObjectNode, registry: MappingRegistry, config: TransformerConfig
    ) -> dict[str, str]:
        mapping = registry.require(root.class_name)
        candidates = mapping.top_level_links()
        if not candidates["related"]:
            candidates["related"] = config.related_url
        return self.document_builder_class().build_links(candidates)

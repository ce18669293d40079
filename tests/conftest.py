"""Shared fixtures for transformer tests."""

import pytest

from builders import COMMENT, POST, USER
from jsonapi_transformer import JSONAPITransformer, ResourceMapping, TransformerConfig
from jsonapi_transformer.mapping import MappingRegistry


@pytest.fixture
def mappings() -> list[ResourceMapping]:
    return [
        ResourceMapping(class_name=COMMENT, alias="comments", id_properties=["id"]),
        ResourceMapping(
            class_name=USER, alias="users", id_properties=["id"], resource_url="/users/{id}"
        ),
        ResourceMapping(
            class_name=POST,
            alias="posts",
            id_properties=["id"],
            resource_url="/posts/{id}",
            self_url="/posts",
        ),
    ]


@pytest.fixture
def registry(mappings: list[ResourceMapping]) -> MappingRegistry:
    return MappingRegistry.from_mappings(mappings)


@pytest.fixture
def transformer(mappings: list[ResourceMapping]) -> JSONAPITransformer:
    return JSONAPITransformer(mappings, config=TransformerConfig())

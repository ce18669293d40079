"""Tests for IncludedCollector."""

import pytest

from builders import COMMENT, POST, USER, collection, comment, obj, scalar, user
from jsonapi_transformer.mapping import MappingRegistry, ResourceMapping
from jsonapi_transformer.nodes import parse_value
from jsonapi_transformer.transformers import IncludedCollector, ResourceProjector, postprocess


def collect(collector: IncludedCollector, tree: dict) -> list[dict]:
    root = parse_value(tree)
    root.properties.pop("id", None)
    return postprocess({"included": collector.collect(root)})["included"]


@pytest.fixture
def collector(registry: MappingRegistry) -> IncludedCollector:
    return IncludedCollector(ResourceProjector(registry))


class TestIncludedOrder:
    """Tests for discovery order and duplication."""

    def test_nested_resources_precede_their_parent(self, collector):
        tree = obj(POST, id=scalar(1), latest=comment(5, "deep", author=user(9, "Zed")))
        included = collect(collector, tree)
        assert [(entry["type"], entry["id"]) for entry in included] == [
            ("users", "9"),
            ("comments", "5"),
        ]

    def test_same_entity_on_two_paths_is_emitted_twice(self, collector):
        joe = user(1, "Joe")
        tree = obj(POST, id=scalar(1), author=joe, editor=joe)
        included = collect(collector, tree)
        assert [entry["id"] for entry in included] == ["1", "1"]

    def test_collection_elements_are_visited(self, collector):
        tree = obj(POST, id=scalar(1), comments=collection(comment(1, "a"), comment(2, "b")))
        assert [entry["id"] for entry in collect(collector, tree)] == ["1", "2"]

    def test_root_is_not_included(self, collector):
        tree = obj(POST, id=scalar(1), title=scalar("t"))
        assert collect(collector, tree) == []


class TestIncludedFiltering:
    """Tests for which resources become entries."""

    def test_empty_id_is_never_included(self, collector):
        tree = obj(POST, id=scalar(1), author=obj(USER, name=scalar("Anonymous")))
        assert collect(collector, tree) == []

    def test_stub_without_attributes_is_recursed_but_not_included(self, collector):
        stub = obj(COMMENT, id=scalar(3), author=user(4, "Al"))
        tree = obj(POST, id=scalar(1), pinned=stub)
        included = collect(collector, tree)
        assert [(entry["type"], entry["id"]) for entry in included] == [("users", "4")]

    def test_unmapped_objects_are_ignored(self, collector):
        tree = obj(POST, id=scalar(1), price=obj("Acme\\Shop\\Money", amount=scalar(3)))
        assert collect(collector, tree) == []


class TestIncludedRelationships:
    """Tests for relationship summaries on included entries."""

    def test_summary_uses_property_keyed_data(self, collector):
        tree = obj(POST, id=scalar(1), latest=comment(5, "deep", author=user(9, "Zed")))
        entry = collect(collector, tree)[1]
        assert entry == {
            "type": "comments",
            "id": "5",
            "attributes": {"body": "deep"},
            "relationships": {
                "author": {
                    "links": {"self": "/users/9"},
                    "data": {"author": {"type": "users", "id": "9"}},
                }
            },
        }

    def test_parent_mapping_metadata_is_merged_into_child_summary(self):
        registry = MappingRegistry.from_mappings(
            [
                ResourceMapping(class_name=POST, alias="posts", id_properties=["id"]),
                ResourceMapping(
                    class_name=COMMENT,
                    alias="comments",
                    id_properties=["id"],
                    relationships={"meta": {"from": "comment"}},
                ),
                ResourceMapping(
                    class_name=USER,
                    alias="users",
                    id_properties=["id"],
                    relationships={"meta": {"from": "user"}},
                ),
            ]
        )
        collector = IncludedCollector(ResourceProjector(registry), {"meta": {"from": "config"}})
        tree = obj(POST, id=scalar(1), latest=comment(5, "deep", author=user(9, "Zed")))
        summary = collect(collector, tree)[1]["relationships"]["author"]
        assert summary == {
            "data": {"author": {"type": "users", "id": "9"}},
            "meta": {"from": "comment"},
        }

    def test_config_relationships_used_when_mapping_has_none(self, registry):
        collector = IncludedCollector(ResourceProjector(registry), {"meta": {"from": "config"}})
        tree = obj(POST, id=scalar(1), latest=comment(5, "deep", author=user(9, "Zed")))
        summary = collect(collector, tree)[1]["relationships"]["author"]
        assert summary["meta"] == {"from": "config"}

    def test_to_many_summary(self, collector):
        tree = obj(
            POST,
            id=scalar(1),
            thread=obj(
                COMMENT,
                id=scalar(2),
                body=scalar("root"),
                replies=collection(comment(3, "r1"), comment(4, "r2")),
            ),
        )
        included = collect(collector, tree)
        assert [entry["id"] for entry in included] == ["3", "4", "2"]
        assert included[2]["relationships"] == {
            "replies": {
                "data": [{"type": "comments", "id": "3"}, {"type": "comments", "id": "4"}]
            }
        }

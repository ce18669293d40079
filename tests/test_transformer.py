"""End-to-end tests for JSONAPITransformer."""

import json

import pytest

from builders import COMMENT, POST, USER, collection, comment, obj, scalar, user
from jsonapi_transformer import (
    JSONAPITransformer,
    MappingConfigurationError,
    ResourceMapping,
    TransformerConfig,
    TransformerError,
    UnmappedTypeError,
)


class TestTransformSingleResource:
    """Tests for object roots."""

    def test_comment_with_author(self, transformer):
        """A relationship is projected into data and its target into included."""
        document = transformer.transform(comment(9, "hi", author=user(1, "Joe")))

        assert document == {
            "data": {
                "type": "comments",
                "id": "9",
                "attributes": {"body": "hi"},
                "relationships": {
                    "author": {
                        "links": {"self": "/users/1"},
                        "data": {"type": "users", "id": "1"},
                    }
                },
            },
            "included": [
                {
                    "type": "users",
                    "id": "1",
                    "attributes": {"name": "Joe"},
                    "links": {"self": "/users/1"},
                }
            ],
        }

    def test_resource_without_relationships_has_no_included(self, transformer):
        document = transformer.transform(comment(3, "plain"))
        assert document == {
            "data": {"type": "comments", "id": "3", "attributes": {"body": "plain"}}
        }

    def test_self_link_on_data(self, transformer):
        document = transformer.transform(user(5, "Ann"))
        assert document["data"]["links"] == {"self": "/users/5"}

    def test_attribute_keys_are_snake_cased(self, transformer):
        tree = obj(COMMENT, id=scalar(1), createdAt=scalar("2024-01-01"))
        document = transformer.transform(tree)
        assert document["data"]["attributes"] == {"created_at": "2024-01-01"}

    def test_output_has_no_internal_markers(self, transformer):
        tree = obj(
            COMMENT,
            id=scalar(1),
            tags=collection(scalar("a"), scalar("b")),
            author=user(2, "Bo"),
        )
        encoded = json.dumps(transformer.transform(tree))
        assert "@type" not in encoded
        assert "@value" not in encoded
        assert "@scalar" not in encoded
        assert "@map" not in encoded

    def test_to_many_relationship(self, transformer):
        tree = obj(
            POST,
            id=scalar(7),
            title=scalar("Hello"),
            comments=collection(comment(1, "first"), comment(2, "second")),
        )
        document = transformer.transform(tree)

        assert document["data"]["attributes"] == {"title": "Hello"}
        assert document["data"]["relationships"] == {
            "comments": {
                "data": [{"type": "comments", "id": "1"}, {"type": "comments", "id": "2"}]
            }
        }
        assert [entry["id"] for entry in document["included"]] == ["1", "2"]


class TestTopLevelMembers:
    """Tests for links, meta and jsonapi members."""

    def test_links_keep_only_configured_urls(self, transformer):
        tree = obj(POST, id=scalar(1), title=scalar("t"))
        document = transformer.transform(tree)
        assert document["links"] == {"self": "/posts"}

    def test_links_omitted_when_all_empty(self, transformer):
        assert "links" not in transformer.transform(comment(1, "x"))

    def test_all_link_names_in_order(self):
        mapping = ResourceMapping(
            class_name=POST,
            id_properties=["id"],
            self_url="/posts?page=2",
            first_url="/posts?page=1",
            last_url="/posts?page=9",
            prev_url="/posts?page=1",
            next_url="/posts?page=3",
            related_url="",
        )
        transformer = JSONAPITransformer([mapping], config=TransformerConfig())
        links = transformer.transform(obj(POST, id=scalar(1)))["links"]
        assert list(links) == ["self", "first", "last", "prev", "next"]

    def test_related_url_falls_back_to_config(self, transformer):
        transformer.set_related_url("/comments/1/post")
        document = transformer.transform(comment(1, "x"))
        assert document["links"] == {"related": "/comments/1/post"}

    def test_meta_and_version(self, transformer):
        transformer.set_meta({"author": "Nil"}).add_meta("total", 1).set_api_version("1.1")
        document = transformer.transform(comment(1, "x"))
        assert document["meta"] == {"author": "Nil", "total": 1}
        assert document["jsonapi"] == {"version": "1.1"}

    def test_set_meta_replaces_previous_meta(self, transformer):
        transformer.add_meta("a", 1).set_meta({"b": 2})
        assert transformer.transform(comment(1, "x"))["meta"] == {"b": 2}

    def test_empty_meta_and_version_are_omitted(self, transformer):
        document = transformer.transform(comment(1, "x"))
        assert "meta" not in document
        assert "jsonapi" not in document


class TestCollectionRoot:
    """Tests for collection-wrapper roots."""

    def test_two_comments(self, transformer):
        tree = collection(comment(1, "one"), comment(2, "two"))
        document = transformer.transform(tree)
        assert document["data"] == [
            {"type": "comments", "id": "1", "attributes": {"body": "one"}},
            {"type": "comments", "id": "2", "attributes": {"body": "two"}},
        ]

    def test_included_concatenated_per_element(self, transformer):
        joe = user(1, "Joe")
        tree = collection(comment(1, "one", author=joe), comment(2, "two", author=joe))
        document = transformer.transform(tree)
        assert [entry["id"] for entry in document["included"]] == ["1", "1"]

    def test_links_from_element_type(self, transformer):
        tree = collection(obj(POST, id=scalar(1), title=scalar("t")))
        assert transformer.transform(tree)["links"] == {"self": "/posts"}

    def test_empty_collection(self, transformer):
        assert transformer.transform(collection()) == {"data": []}

    def test_accepts_plain_list(self, transformer):
        document = transformer.transform([comment(1, "one")])
        assert document["data"][0]["id"] == "1"


class TestErrors:
    """Tests for failure modes."""

    @pytest.mark.parametrize("mappings", [None, [], {}])
    def test_no_mappings(self, mappings):
        transformer = JSONAPITransformer(mappings, config=TransformerConfig())
        with pytest.raises(MappingConfigurationError, match="No mappings were found"):
            transformer.transform(comment(1, "x"))

    def test_mappings_not_a_table(self):
        transformer = JSONAPITransformer("Comment", config=TransformerConfig())
        with pytest.raises(MappingConfigurationError):
            transformer.transform(comment(1, "x"))

    def test_unmapped_root(self, transformer):
        with pytest.raises(UnmappedTypeError, match="Acme.Shop.Order has no mapping") as info:
            transformer.transform(obj("Acme.Shop.Order", id=scalar(1)))
        assert info.value.type_name == "Acme.Shop.Order"

    def test_unmapped_element_in_collection(self, transformer):
        tree = collection(comment(1, "x"), obj("Acme.Shop.Order", id=scalar(1)))
        with pytest.raises(UnmappedTypeError):
            transformer.transform(tree)

    def test_scalar_root(self, transformer):
        with pytest.raises(TransformerError, match="Expected an object node"):
            transformer.transform(scalar(1))

    def test_errors_are_value_errors(self):
        assert issubclass(TransformerError, ValueError)


class TestConfiguration:
    """Tests for configuration handling."""

    def test_setters_do_not_mutate_previous_config(self, transformer):
        before = transformer.config
        transformer.set_api_version("1.0")
        assert before.api_version == ""
        assert transformer.config.api_version == "1.0"

    def test_config_is_frozen(self):
        config = TransformerConfig()
        with pytest.raises(Exception):
            config.api_version = "1.0"  # type: ignore[misc]

    def test_defaults_from_settings(self, monkeypatch):
        from jsonapi_transformer.config import TransformerSettings

        monkeypatch.setenv("JSONAPI_API_VERSION", "1.1")
        monkeypatch.setenv("JSONAPI_RELATED_URL", "/related")
        config = TransformerConfig.from_settings(TransformerSettings())
        assert config.api_version == "1.1"
        assert config.related_url == "/related"

    def test_mappings_as_dict_of_dicts(self):
        transformer = JSONAPITransformer(
            {COMMENT: {"alias": "comments", "id_properties": ["id"]}},
            config=TransformerConfig(),
        )
        assert transformer.transform(comment(4, "x"))["data"]["type"] == "comments"


class TestSerialize:
    """Tests for text encoding."""

    def test_unicode_and_slashes_are_not_escaped(self, transformer):
        text = transformer.serialize(comment(1, "héllo", author=user(2, "Zoë")))
        assert "héllo" in text
        assert "/users/2" in text
        assert "\\/" not in text

    def test_pretty_printed(self, transformer):
        text = transformer.serialize(comment(1, "x"))
        assert text.startswith("{\n    ")
        assert json.loads(text)["data"]["id"] == "1"

    def test_reassigned_mappings_are_validated_again(self, transformer):
        """Swapping the table drops the cached registry."""
        transformer.transform(comment(1, "x"))
        transformer.mappings = []
        with pytest.raises(MappingConfigurationError):
            transformer.transform(comment(1, "x"))

    def test_reassigned_mappings_take_effect(self, transformer):
        assert transformer.transform(comment(1, "x"))["data"]["type"] == "comments"
        transformer.mappings = [
            ResourceMapping(class_name=COMMENT, alias="notes", id_properties=["id"])
        ]
        assert transformer.transform(comment(1, "x"))["data"]["type"] == "notes"

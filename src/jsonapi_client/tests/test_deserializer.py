import logging

import pytest

from ..exceptions import ApiError, MalformedDocumentError
from ..models import HasMany, HasOne
from ..registry import ModelRegistry
from ..resources import Resource, UnresolvedReference


@pytest.fixture
def registry():
    registry = ModelRegistry()
    registry.define(
        "article",
        {"title": {}, "author": HasOne("person"), "comments": HasMany("comment")},
    )
    registry.define("person", {"name": {}, "favorite": HasOne("article")})
    registry.define("comment", {"body": {}, "author": HasOne("person")})
    return registry


@pytest.fixture
def target(registry):
    from ..deserializer import Deserializer

    return Deserializer(registry)


def test_compound_document(target):
    result = target.deserialize(
        {
            "data": {
                "type": "articles",
                "id": "1",
                "attributes": {"title": "T"},
                "relationships": {"author": {"data": {"type": "people", "id": "9"}}},
            },
            "included": [{"type": "people", "id": "9", "attributes": {"name": "N"}}],
        }
    )
    assert isinstance(result, Resource)
    assert result.type == "articles"
    assert result.id == "1"
    assert result.attributes == {"title": "T"}
    author = result.relationships["author"]
    assert isinstance(author, Resource)
    assert author.type == "people"
    assert author["name"] == "N"


def test_shared_instances(target):
    result = target.deserialize(
        {
            "data": [
                {
                    "type": "articles",
                    "id": "1",
                    "relationships": {"author": {"data": {"type": "people", "id": "9"}}},
                },
                {
                    "type": "articles",
                    "id": "2",
                    "relationships": {
                        "author": {"data": {"type": "people", "id": "9"}},
                        "comments": {
                            "data": [
                                {"type": "comments", "id": "5"},
                            ]
                        },
                    },
                },
            ],
            "included": [
                {"type": "people", "id": "9", "attributes": {"name": "N"}},
                {
                    "type": "comments",
                    "id": "5",
                    "relationships": {"author": {"data": {"type": "people", "id": "9"}}},
                },
            ],
        }
    )
    first, second = result
    author = first.relationships["author"]
    assert second.relationships["author"] is author
    assert second.relationships["comments"][0].relationships["author"] is author


def test_cycle(target):
    result = target.deserialize(
        {
            "data": {
                "type": "articles",
                "id": "1",
                "relationships": {"author": {"data": {"type": "people", "id": "9"}}},
            },
            "included": [
                {
                    "type": "people",
                    "id": "9",
                    "relationships": {"favorite": {"data": {"type": "articles", "id": "1"}}},
                },
            ],
        }
    )
    assert result.relationships["author"].relationships["favorite"] is result


def test_self_reference(target):
    result = target.deserialize(
        {
            "data": {
                "type": "people",
                "id": "1",
                "relationships": {"favorite": {"data": {"type": "people", "id": "1"}}},
            },
        }
    )
    assert result.relationships["favorite"] is result


def test_primary_data_referenced_from_included(target):
    result = target.deserialize(
        {
            "data": [
                {"type": "comments", "id": "5", "attributes": {"body": "B"}},
                {
                    "type": "articles",
                    "id": "1",
                    "relationships": {"comments": {"data": [{"type": "comments", "id": "5"}]}},
                },
            ],
        }
    )
    comment, article = result
    assert article.relationships["comments"] == [comment]
    assert article.relationships["comments"][0] is comment


def test_to_many_order(target):
    result = target.deserialize(
        {
            "data": {
                "type": "articles",
                "id": "1",
                "relationships": {
                    "comments": {
                        "data": [
                            {"type": "comments", "id": "3"},
                            {"type": "comments", "id": "1"},
                            {"type": "comments", "id": "2"},
                        ]
                    },
                },
            },
            "included": [
                {"type": "comments", "id": "1"},
                {"type": "comments", "id": "2"},
                {"type": "comments", "id": "3"},
            ],
        }
    )
    assert [c.id for c in result.relationships["comments"]] == ["3", "1", "2"]


def test_collection_order(target):
    result = target.deserialize(
        {
            "data": [
                {"type": "people", "id": "2"},
                {"type": "people", "id": "1"},
            ]
        }
    )
    assert [p.id for p in result] == ["2", "1"]


def test_dangling_linkage(target):
    result = target.deserialize(
        {
            "data": {
                "type": "articles",
                "id": "1",
                "relationships": {
                    "author": {"data": {"type": "people", "id": "404"}},
                    "comments": {
                        "data": [
                            {"type": "comments", "id": "1"},
                            {"type": "comments", "id": "2"},
                        ]
                    },
                },
            },
            "included": [{"type": "comments", "id": "2", "attributes": {"body": "B"}}],
        }
    )
    assert result.relationships["author"] == UnresolvedReference("people", "404")
    missing, present = result.relationships["comments"]
    assert missing == UnresolvedReference("comments", "1")
    assert isinstance(present, Resource)
    assert present["body"] == "B"


def test_relationship_shapes(target):
    result = target.deserialize(
        {
            "data": {
                "type": "articles",
                "id": "1",
                "relationships": {
                    "author": {"data": None},
                    "comments": {"data": []},
                    "related": {"links": {"related": "/articles/1/related"}},
                },
            },
        }
    )
    assert result.relationships == {"author": None, "comments": []}


def test_empty_data(target):
    assert target.deserialize({"data": None}) is None
    assert target.deserialize({"data": []}) == []
    assert target.deserialize({"meta": {"total": 0}}) is None


def test_record_without_id(target):
    result = target.deserialize({"data": {"type": "articles", "attributes": {"title": "T"}}})
    assert result.id is None
    assert result["title"] == "T"


def test_duplicate_records_merge(target):
    result = target.deserialize(
        {
            "data": {"type": "people", "id": "9", "attributes": {"name": "N"}},
            "included": [{"type": "people", "id": "9", "meta": {"seen": True}}],
        }
    )
    assert result["name"] == "N"
    assert result.meta == {"seen": True}


def test_document_members(target):
    result = target.deserialize_document(
        {
            "data": [{"type": "people", "id": "1"}],
            "included": [{"type": "articles", "id": "2"}],
            "meta": {"total": 1},
            "links": {"next": "/people?page=2"},
        }
    )
    assert [p.id for p in result.data] == ["1"]
    assert [r.key for r in result.included] == [("articles", "2")]
    assert result.meta == {"total": 1}
    assert result.links == {"next": "/people?page=2"}


def test_errors_document(target):
    with pytest.raises(ApiError) as e:
        target.deserialize({"errors": [{"title": "Not Found", "status": "404"}]})
    assert e.value.errors[0].title == "Not Found"
    assert e.value.as_dict() == {"data": {"title": "Not Found", "detail": None}}


def test_missing_type(target):
    with pytest.raises(MalformedDocumentError) as e:
        target.deserialize({"data": {"type": "people", "id": "1"}, "included": [{"id": "2"}]})
    assert e.value.pointer == "/included/0/type"


def test_unknown_members_are_kept_and_logged(target, caplog):
    with caplog.at_level(logging.WARNING, logger="jsonapi_client"):
        result = target.deserialize(
            {
                "data": {
                    "type": "people",
                    "id": "1",
                    "attributes": {"name": "N", "age": 3},
                    "relationships": {
                        "name": {"data": None},
                        "pets": {"data": []},
                    },
                },
            }
        )
    assert result["age"] == 3
    assert result.relationships == {"name": None, "pets": []}
    messages = [r.getMessage() for r in caplog.records]
    assert any('attribute "age"' in m for m in messages)
    assert any('relationship "pets"' in m and "not present" in m for m in messages)
    assert any('relationship "name"' in m and "plain attribute" in m for m in messages)


def test_without_registry():
    from ..deserializer import Deserializer

    result = Deserializer().deserialize({"data": {"type": "anything", "id": "1"}})
    assert result.key == ("anything", "1")


def test_schema_lookup_skipped_when_logging_disabled():
    from ..deserializer import Deserializer
    from ..logger import ClientLogger

    calls = []

    def pluralize(name):
        calls.append(name)
        return name + "s"

    registry = ModelRegistry(pluralize=pluralize)
    registry.define("person", {"name": {}})
    document = {"data": {"type": "persons", "id": "1", "attributes": {"age": 3}}}

    result = Deserializer(registry, ClientLogger(enabled=False)).deserialize(document)
    assert result["age"] == 3
    assert calls == []

    Deserializer(registry, ClientLogger()).deserialize(document)
    assert calls == ["person"]

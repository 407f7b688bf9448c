import pytest

from ..exceptions import ConfigurationError, UnknownModelError
from ..models import Attr, HasMany, HasOne, ModelOptions


@pytest.fixture
def target():
    from ..registry import ModelRegistry

    return ModelRegistry


def test_define_and_lookup(target):
    registry = target()
    registry.define(
        "articles",
        {"title": {}, "author": {"jsonApi": "hasOne", "type": "people"}},
    )
    definition = registry.lookup("articles")
    assert definition.name == "articles"
    assert list(definition.fields) == ["title", "author"]
    assert isinstance(definition.fields["title"], Attr)
    author = definition.relationships["author"]
    assert isinstance(author, HasOne)
    assert author.type == "people"
    assert author.name == "author"
    assert author.parent is definition
    assert list(definition.attributes) == ["title"]


def test_paths(target):
    registry = target()
    registry.define(
        "articles",
        {"title": {}, "author": {"jsonApi": "hasOne", "type": "people"}},
    )
    assert registry.collection_path("articles") == "articles"
    assert registry.resource_path("articles", "1") == "articles/1"

    registry.define("person", {"name": Attr()})
    assert registry.collection_path("person") == "people"
    assert registry.resource_path("person", "a b/c") == "people/a%20b%2Fc"
    assert registry.resource_path("person", "it's(1)") == "people/it's(1)"

    # undefined models still get a path
    assert registry.collection_path("comment") == "comments"


def test_path_options(target):
    registry = target()
    registry.define(
        "product",
        {"name": {}},
        ModelOptions(collection_path="catalog/items"),
    )
    registry.define(
        "order",
        {"total": {}},
        {"collection_path": "orders", "template_path": "orders/:id/summary"},
    )
    assert registry.collection_path("product") == "catalog/items"
    assert registry.resource_path("product", 5) == "catalog/items/5"
    assert registry.resource_path("order", "7") == "orders/7/summary"


def test_wire_type(target):
    registry = target()
    registry.define("person", {})
    registry.define("thing", {}, ModelOptions(type="widgets"))
    assert registry.wire_type("person") == "people"
    assert registry.wire_type("thing") == "widgets"
    assert registry.definition_for_wire_type("people").name == "person"
    assert registry.definition_for_wire_type("widgets").name == "thing"
    assert registry.definition_for_wire_type("person").name == "person"
    assert registry.definition_for_wire_type("unknowns") is None


def test_last_definition_wins(target):
    registry = target()
    registry.define("tag", {"label": {}})
    registry.define("tag", {"name": {}, "posts": HasMany("posts")})
    assert list(registry.lookup("tag").fields) == ["name", "posts"]
    assert len(registry) == 1


def test_unknown_model(target):
    registry = target()
    registry.define("articles", {})
    registry.define("people", {})
    with pytest.raises(UnknownModelError) as e:
        registry.lookup("comments")
    assert isinstance(e.value, ConfigurationError)
    assert e.value.name == "comments"
    assert e.value.known == ("articles", "people")
    assert '"comments"' in str(e.value)
    assert '"articles", "people"' in str(e.value)


def test_pluralize_option(target):
    assert target(pluralize=False).collection_path("person") == "person"
    assert target(pluralize=lambda s: s + "z").collection_path("person") == "personz"


def test_invalid_field_spec(target):
    with pytest.raises(ConfigurationError):
        target().define("articles", {"author": {"jsonApi": "hasOne"}})
    with pytest.raises(ConfigurationError):
        target().define("articles", {"author": {"jsonApi": "belongsTo", "type": "people"}})
    with pytest.raises(ConfigurationError):
        target().define("articles", {"author": 42})


def test_definition_without_fields():
    from ..models import ModelDefinition

    first, second = ModelDefinition("tag"), ModelDefinition("label")
    assert dict(first.fields) == {}
    assert first.fields is not second.fields
    assert first.options == ModelOptions()

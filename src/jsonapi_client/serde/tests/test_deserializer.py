import pytest

from ..models import (
    CollectionDocumentRepr,
    ErrorRepr,
    LinkageRepr,
    Missing,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
    SourceRepr,
)


@pytest.fixture
def target():
    from ..deserializer import ReprDeserializer

    return ReprDeserializer


def test_basic(target):
    deser = target()

    result = deser(
        {
            "data": {
                "type": "foos",
                "id": "1",
                "attributes": {
                    "a": 1,
                    "b": 2,
                    "c": 3,
                },
            },
        },
    )

    assert result == SingletonDocumentRepr(
        data=ResourceRepr(
            type="foos",
            id="1",
            attributes=(
                ("a", 1),
                ("b", 2),
                ("c", 3),
            ),
            _source_="/data",
        ),
        _source_="/",
    )

    result = deser(
        {
            "links": {
                "self": "/foos/1",
            },
            "data": {
                "type": "foos",
                "id": "1",
                "attributes": {
                    "a": 1,
                },
                "relationships": {
                    "items": {
                        "links": {
                            "related": "/foos/1/items",
                        },
                        "data": [
                            {
                                "type": "bars",
                                "id": "1",
                            },
                            {
                                "type": "bars",
                                "id": "2",
                            },
                        ],
                    },
                },
            },
        },
    )

    assert result == SingletonDocumentRepr(
        links={"self": "/foos/1"},
        data=ResourceRepr(
            type="foos",
            id="1",
            attributes=(("a", 1),),
            relationships=(
                (
                    "items",
                    LinkageRepr(
                        links={"related": "/foos/1/items"},
                        data=[
                            ResourceIdRepr(
                                type="bars",
                                id="1",
                                _source_="/data/relationships/items/data/0",
                            ),
                            ResourceIdRepr(
                                type="bars",
                                id="2",
                                _source_="/data/relationships/items/data/1",
                            ),
                        ],
                        _source_="/data/relationships/items",
                    ),
                ),
            ),
            _source_="/data",
        ),
        _source_="/",
    )


def test_no_attributes(target):
    result = target()({"data": {"type": "foos", "id": "1"}})

    assert result == SingletonDocumentRepr(
        data=ResourceRepr(
            type="foos",
            id="1",
            attributes=(),
            _source_="/data",
        ),
        _source_="/",
    )


def test_null_and_missing_data(target):
    result = target()({"data": None, "meta": {"count": 0}})
    assert isinstance(result, SingletonDocumentRepr)
    assert result.data is None
    assert result.meta == {"count": 0}

    result = target()({"meta": {"count": 0}})
    assert result.data is None


def test_collection(target):
    result = target()(
        {
            "data": [
                {"type": "foos", "id": 1},
                {"type": "foos", "id": "2"},
            ],
            "included": [
                {"type": "bars", "id": "3", "attributes": {"x": True}},
            ],
        }
    )
    assert isinstance(result, CollectionDocumentRepr)
    assert [r.id for r in result.data] == ["1", "2"]
    assert result.included[0]._source_ == "/included/0"
    assert result.included[0].attributes["x"] is True


def test_relationship_forms(target):
    result = target()(
        {
            "data": {
                "type": "foos",
                "id": "1",
                "relationships": {
                    "one": {"data": {"type": "bars", "id": "1"}},
                    "none": {"data": None},
                    "empty": {"data": []},
                    "links_only": {"links": {"related": "/foos/1/links_only"}},
                },
            },
        }
    )
    rels = result.data.relationships
    assert rels["one"].data == ResourceIdRepr(
        type="bars", id="1", _source_="/data/relationships/one/data"
    )
    assert rels["none"].data is None
    assert rels["empty"].data == []
    assert rels["links_only"].data is Missing


def test_errors(target):
    result = target()(
        {
            "errors": [
                {
                    "status": 422,
                    "title": "Invalid Attribute",
                    "detail": "must not be blank",
                    "source": {"pointer": "/data/attributes/title"},
                },
            ],
        }
    )
    assert result.errors == (
        ErrorRepr(
            status="422",
            title="Invalid Attribute",
            detail="must not be blank",
            source=SourceRepr(pointer="/data/attributes/title", _source_="/errors/0/source"),
            _source_="/errors/0",
        ),
    )
    assert result.errors[0].field == "title"

    assert target().errors({"data": None}) == ()


def test_validation_error(target):
    from ...exceptions import MalformedDocumentError

    deser = target()

    with pytest.raises(MalformedDocumentError):
        deser([])

    with pytest.raises(MalformedDocumentError) as e:
        deser({"data": {"id": "1", "attributes": {"a": 1}}})
    assert e.value.pointer == "/data/type"

    with pytest.raises(MalformedDocumentError) as e:
        deser({"data": [{"type": "foos", "id": "1"}, {"id": "2"}]})
    assert e.value.pointer == "/data/1/type"

    with pytest.raises(MalformedDocumentError) as e:
        deser({"data": None, "included": [{"type": "foos", "id": "1"}, "bar"]})
    assert e.value.pointer == "/included/1"

    with pytest.raises(MalformedDocumentError) as e:
        deser(
            {
                "data": {
                    "type": "foos",
                    "id": "1",
                    "relationships": {"bar": {"data": {"type": "bars"}}},
                },
            }
        )
    assert e.value.pointer == "/data/relationships/bar/data/id"

    with pytest.raises(MalformedDocumentError):
        deser({"data": {"type": "foos", "id": "1", "attributes": []}})

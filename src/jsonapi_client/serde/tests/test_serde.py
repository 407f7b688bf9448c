import pytest


class TestSingletonDocumentBuilder:
    @pytest.fixture
    def target(self):
        from ..builders import SingletonDocumentBuilder

        return SingletonDocumentBuilder

    def test_basic(self, target):
        from ..models import LinkageRepr, ResourceIdRepr, ResourceRepr, SingletonDocumentRepr

        b = target()
        b.meta["x"] = 1
        rb = b.set("foos")
        rb.add_attribute("a", 1)
        rb.add_attribute("b", 2)
        rb.to_one("bar").link("bars", "1")
        rb.to_many("bazs").link("bazs", "2")
        assert b() == SingletonDocumentRepr(
            data=ResourceRepr(
                type="foos",
                id=None,
                attributes=(
                    ("a", 1),
                    ("b", 2),
                ),
                relationships=(
                    ("bar", LinkageRepr(data=ResourceIdRepr(type="bars", id="1"))),
                    ("bazs", LinkageRepr(data=(ResourceIdRepr(type="bazs", id="2"),))),
                ),
            ),
            meta={"x": 1},
        )

    def test_empty(self, target):
        assert target()().data is None


class TestCollectionDocumentBuilder:
    def test_order(self):
        from ..builders import CollectionDocumentBuilder

        b = CollectionDocumentBuilder()
        b.next("foos", "2")
        b.next("foos", "1")
        assert [r.id for r in b().data] == ["2", "1"]


class TestResourceReprBuilder:
    @pytest.fixture
    def target(self):
        from ..builders import ResourceReprBuilder

        return ResourceReprBuilder

    def test_to_one_nullify(self, target):
        b = target("foos", "1")
        rel = b.to_one("bar")
        rel.link("bars", "1")
        rel.nullify()
        assert b().relationships["bar"].data is None

    def test_empty_to_many(self, target):
        b = target("foos", "1")
        b.to_many("bars")
        assert b().relationships["bars"].data == ()

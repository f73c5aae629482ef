import pytest

from ..exceptions import DeserializationError, UnknownResourceTypeReferenceError
from ..models import (
    CollectionDocumentRepr,
    LinkageRepr,
    LinksRepr,
    Missing,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
)
from ..utils import JSONPointer


@pytest.fixture
def descriptors():
    from ...models import (
        ResourceAttributeDescriptor,
        ResourceDescriptor,
        ResourceToManyRelationshipDescriptor,
        ResourceToOneRelationshipDescriptor,
    )

    return {
        "foos": ResourceDescriptor(
            name="foos",
            attributes=[
                ResourceAttributeDescriptor(int, "a"),
                ResourceAttributeDescriptor(int, "b", allow_null=False),
                ResourceAttributeDescriptor(int, "c", key="see"),
            ],
            relationships=[
                ResourceToOneRelationshipDescriptor("bars", "item"),
                ResourceToManyRelationshipDescriptor("bars", "items"),
            ],
        ),
        "bars": ResourceDescriptor(name="bars"),
    }


@pytest.fixture
def target(descriptors):
    from ..deserializer import ReprDeserializer

    return ReprDeserializer(lambda name: descriptors[name])


def test_basic(target):
    result = target(
        {
            "data": {
                "type": "foos",
                "id": "1",
                "attributes": {
                    "a": 1,
                    "b": 2,
                    "see": 3,
                    "d": 4,
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
                ("see", 3),
            ),
            _source_=JSONPointer("/data"),
        ),
        _source_=JSONPointer("/"),
    )
    assert result.data.key == ("foos", "1")
    assert result.data["see"] == 3


def test_relationships(target):
    result = target(
        {
            "links": {
                "self": "/foos/1",
            },
            "data": {
                "type": "foos",
                "id": "1",
                "relationships": {
                    "item": {
                        "data": None,
                    },
                    "items": {
                        "links": {
                            "self": "/foos/1/relationships/items",
                            "related": {"href": "/foos/1/items"},
                        },
                        "data": [
                            {
                                "type": "bars",
                                "id": "1",
                            },
                            {
                                "type": "bars",
                                "id": 2,
                                "meta": {"x": 1},
                            },
                        ],
                    },
                },
            },
        },
    )

    assert result == SingletonDocumentRepr(
        links=LinksRepr(
            self_="/foos/1",
            _source_=JSONPointer("/links"),
        ),
        data=ResourceRepr(
            type="foos",
            id="1",
            relationships=(
                (
                    "item",
                    LinkageRepr(
                        data=None,
                        _source_=JSONPointer("/data/relationships/item"),
                    ),
                ),
                (
                    "items",
                    LinkageRepr(
                        links=LinksRepr(
                            self_="/foos/1/relationships/items",
                            related="/foos/1/items",
                            _source_=JSONPointer("/data/relationships/items/links"),
                        ),
                        data=(
                            ResourceIdRepr(
                                type="bars",
                                id="1",
                                _source_=JSONPointer("/data/relationships/items/data/0"),
                            ),
                            ResourceIdRepr(
                                type="bars",
                                id="2",
                                meta={"x": 1},
                                _source_=JSONPointer("/data/relationships/items/data/1"),
                            ),
                        ),
                        _source_=JSONPointer("/data/relationships/items"),
                    ),
                ),
            ),
            _source_=JSONPointer("/data"),
        ),
        _source_=JSONPointer("/"),
    )


def test_linkage_without_data(target):
    result = target(
        {
            "data": {
                "type": "foos",
                "id": "1",
                "relationships": {
                    "items": {"links": {"related": "/foos/1/items"}},
                },
            },
        },
    )
    linkage = result.data.relationships["items"]
    assert linkage.data is Missing
    assert linkage.links.related == "/foos/1/items"


def test_collection(target):
    result = target(
        {
            "data": [
                {"type": "foos", "attributes": {"a": 1}},
                {"type": "bars", "id": "1"},
            ],
            "included": [
                {"type": "bars", "id": "2"},
            ],
            "meta": {"total": 2},
        },
    )

    assert result == CollectionDocumentRepr(
        data=(
            ResourceRepr(
                type="foos",
                id=None,
                attributes=(("a", 1),),
                _source_=JSONPointer("/data/0"),
            ),
            ResourceRepr(
                type="bars",
                id="1",
                _source_=JSONPointer("/data/1"),
            ),
        ),
        included=(
            ResourceRepr(
                type="bars",
                id="2",
                _source_=JSONPointer("/included/0"),
            ),
        ),
        meta={"total": 2},
        _source_=JSONPointer("/"),
    )


def test_null_data(target):
    assert target({"data": None}) == SingletonDocumentRepr(data=None, _source_=JSONPointer("/"))


@pytest.mark.parametrize(
    ("document", "pointers"),
    [
        ({}, ["/"]),
        ({"data": 1}, ["/data"]),
        ({"data": {}}, ["/data"]),
        (
            {"data": {"type": "foos", "attributes": {"a": "x", "b": None}}},
            ["/data/attributes/a", "/data/attributes/b"],
        ),
        ({"data": {"type": "foos", "attributes": []}}, ["/data/attributes"]),
        ({"data": {"type": 1}}, ["/data/type"]),
        ({"data": {"type": "foos", "id": True}}, ["/data/id"]),
        ({"data": [], "included": [{"type": "bars"}]}, ["/included/0"]),
        ({"data": [], "included": {}}, ["/included"]),
        ({"data": [], "links": {"next": 1}}, ["/links/next"]),
        ({"data": [], "meta": []}, ["/meta"]),
        (
            {"data": {"type": "foos", "relationships": {"item": {"data": []}}}},
            ["/data/relationships/item/data"],
        ),
        (
            {"data": {"type": "foos", "relationships": {"items": {"data": {}}}}},
            ["/data/relationships/items/data"],
        ),
        (
            {
                "data": {
                    "type": "foos",
                    "relationships": {"item": {"data": {"type": "foos", "id": "1"}}},
                },
            },
            ["/data/relationships/item/data/type"],
        ),
        (
            {
                "data": {
                    "type": "foos",
                    "relationships": {"items": {"data": [{"type": "bars"}]}},
                },
            },
            ["/data/relationships/items/data/0"],
        ),
    ],
)
def test_validation_error(target, document, pointers):
    with pytest.raises(DeserializationError) as excinfo:
        target(document)
    assert not isinstance(excinfo.value, UnknownResourceTypeReferenceError)
    assert [str(e.pointer) for e in excinfo.value.errors] == pointers
    assert excinfo.value.payload is document


def test_unknown_type(target):
    with pytest.raises(UnknownResourceTypeReferenceError) as excinfo:
        target(
            {
                "data": [{"type": "bazs", "id": "1"}],
                "included": [{"type": "quxes", "id": "1"}, {"type": "bazs", "id": "2"}],
            }
        )
    assert excinfo.value.type_names == ["quxes", "bazs"]
    assert [str(e.pointer) for e in excinfo.value.errors] == [
        "/included/0/type",
        "/included/1/type",
        "/data/0/type",
    ]

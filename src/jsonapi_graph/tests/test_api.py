import datetime
import decimal

import pytest

from ..errors import ErrorCode
from ..exceptions import DuplicateResourceTypeError, UnknownResourceTypeError
from ..options import DeserializationOptions, SerializationOptions
from ..resource import Resource
from ..store import Store
from .testing import build_registry, comments_descr, people_descr, posts_descr


@pytest.fixture
def target():
    from ..api import JSONAPISerde

    return JSONAPISerde


def test_type_registration(target):
    serde = target()
    people = people_descr()
    serde.register_type(people)
    assert serde.lookup_type("people") is people
    with pytest.raises(DuplicateResourceTypeError):
        serde.register_type(people_descr())
    serde.unregister_type("people")
    with pytest.raises(UnknownResourceTypeError):
        serde.lookup_type("people")


def test_unregistered_type_is_rejected(target):
    serde = target()
    serde.register_type(posts_descr())
    result = serde.deserialize(
        {
            "data": {
                "type": "posts",
                "id": "1",
                "attributes": {"title": "Hello"},
                "relationships": {"author": {"data": {"type": "people", "id": "9"}}},
            }
        }
    )
    assert result.error.code == ErrorCode.UNKNOWN_RESOURCE_TYPE


def test_round_trip_of_changes(target):
    serde = target(build_registry())
    store = Store()
    result = serde.deserialize(
        b"""{
            "data": {
                "type": "posts",
                "id": "1",
                "attributes": {"title": "Hello", "body": "World"},
                "relationships": {
                    "author": {"data": {"type": "people", "id": "9"}},
                    "comments": {"data": []}
                }
            },
            "included": [
                {"type": "people", "id": "9", "attributes": {"name": "Alice"}}
            ]
        }""",
        store=store,
    )
    assert result.ok
    post = result.data
    post["title"] = "Hello again"
    assert serde.serialize(post, SerializationOptions(dirty_attributes_only=True)) == {
        "posts": {"type": "posts", "id": "1", "attributes": {"title": "Hello again"}},
    }

    serde.mark_clean(post)
    assert not post.is_dirty
    assert serde.serialize(
        post,
        SerializationOptions(
            dirty_attributes_only=True, include_to_one=True, include_to_many=True
        ),
    ) == {
        "posts": {
            "type": "posts",
            "id": "1",
            "relationships": {
                "author": {"data": {"type": "people", "id": "9"}},
                "comments": {"data": []},
            },
        },
    }


def test_create_flow(target):
    serde = target(build_registry())
    post = Resource(serde.lookup_type("posts"), attributes={"title": "Draft"})
    comment = Resource(serde.lookup_type("comments"), id="3")
    post.set_related("comments", [comment])
    store = Store([post, comment])

    assert serde.serialize(post, SerializationOptions(include_to_many=True)) == {
        "posts": {
            "type": "posts",
            "attributes": {"title": "Draft"},
            "relationships": {"comments": {"data": [{"type": "comments", "id": "3"}]}},
        },
    }

    result = serde.deserialize(
        {"data": {"type": "posts", "id": "10", "attributes": {"title": "Draft"}}},
        DeserializationOptions(map_onto_first_resource_in_store=True),
        store,
    )
    assert result.data is post
    assert post.id == "10"
    assert not post.is_dirty
    assert post.get_related("comments") == (comment,)


def test_serialization_settings(target):
    serde = target(
        build_registry(),
        render_decimal_as_str=False,
        assume_naive_timezone_as=datetime.timezone.utc,
    )

    post = Resource(
        serde.lookup_type("posts"),
        id="1",
        attributes={
            "rating": decimal.Decimal("4.5"),
            "published_at": datetime.datetime(2020, 1, 2),
        },
    )
    assert serde.serialize(post)["posts"]["attributes"] == {
        "rating": 4.5,
        "published-at": "2020-01-02T00:00:00+00:00",
    }


def test_decode_error(target):
    serde = target()
    error = serde.decode_error(b'{"errors": [{"id": "42", "title": "Not allowed"}]}', 403)
    assert error.code == 42
    assert error.message == "Not allowed"
    assert serde.decode_error(b"", 503).code == 503


def test_mark_clean_accepts_iterables(target):
    serde = target()
    resources = [
        Resource(comments_descr(), id=str(i), attributes={"body": "x"}) for i in range(2)
    ]
    serde.mark_clean(resources)
    assert not any(r.is_dirty for r in resources)

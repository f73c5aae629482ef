import pytest

from ..exceptions import InvalidDeclarationError
from ..models import (
    ResourceAttributeDescriptor,
    ResourceDescriptor,
    ResourceToManyRelationshipDescriptor,
    ResourceToOneRelationshipDescriptor,
)
from ..serde.interfaces import RelationshipType


def test_members_are_indexed_by_name_and_key():
    descr = ResourceDescriptor(
        name="posts",
        attributes=[
            ResourceAttributeDescriptor(name="title", type=str),
            ResourceAttributeDescriptor(name="published_at", key="published-at", type=str),
        ],
        relationships=[
            ResourceToOneRelationshipDescriptor(name="author", destination="people"),
            ResourceToManyRelationshipDescriptor(
                name="comments", key="post-comments", destination="comments"
            ),
        ],
    )
    assert list(descr.attributes) == ["title", "published_at"]
    assert list(descr.attributes_by_key) == ["title", "published-at"]
    assert descr.attributes["published_at"] is descr.attributes_by_key["published-at"]
    assert descr.attributes["title"].parent is descr
    assert descr.relationships["author"].type is RelationshipType.TO_ONE
    assert descr.relationships_by_key["post-comments"].type is RelationshipType.TO_MANY


def test_attribute_defaults():
    attr = ResourceAttributeDescriptor(name="title", type=str)
    assert attr.key == "title"
    assert attr.allow_null
    assert attr.track_dirty


@pytest.mark.parametrize(
    "attributes, relationships",
    [
        (
            [
                ResourceAttributeDescriptor(name="a", type=str),
                ResourceAttributeDescriptor(name="a", key="b", type=str),
            ],
            [],
        ),
        (
            [
                ResourceAttributeDescriptor(name="a", type=str),
                ResourceAttributeDescriptor(name="b", key="a", type=str),
            ],
            [],
        ),
        (
            [ResourceAttributeDescriptor(name="a", type=str)],
            [ResourceToOneRelationshipDescriptor(name="a", destination="foos")],
        ),
        (
            [ResourceAttributeDescriptor(name="kind", key="type", type=str)],
            [],
        ),
        (
            [],
            [ResourceToOneRelationshipDescriptor(name="ident", key="id", destination="foos")],
        ),
    ],
)
def test_conflicting_members(attributes, relationships):
    with pytest.raises(InvalidDeclarationError):
        ResourceDescriptor(name="foos", attributes=attributes, relationships=relationships)


def test_member_cannot_be_shared():
    attr = ResourceAttributeDescriptor(name="a", type=str)
    ResourceDescriptor(name="foos", attributes=[attr])
    with pytest.raises(InvalidDeclarationError):
        ResourceDescriptor(name="bars", attributes=[attr])

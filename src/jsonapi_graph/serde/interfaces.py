import enum
import typing


class RelationshipType(enum.Enum):
    TO_ONE = "to_one"
    TO_MANY = "to_many"


class ResourceAttributeDescriptor(typing.Protocol):
    type: typing.Any
    name: str
    key: str
    allow_null: bool


class ResourceRelationshipDescriptor(typing.Protocol):
    name: str
    key: str
    destination: typing.Optional[str]
    type: RelationshipType


class ResourceDescriptor(typing.Protocol):
    name: str
    attributes: typing.Mapping[str, ResourceAttributeDescriptor]
    relationships: typing.Mapping[str, ResourceRelationshipDescriptor]


class DescriptorQuerier(typing.Protocol):
    def __call__(self, name: str) -> ResourceDescriptor:
        ...  # pragma: nocover

import typing
from collections import OrderedDict

from .exceptions import InvalidDeclarationError
from .serde.interfaces import RelationshipType


class ResourceMemberDescriptor:
    parent: typing.Optional["ResourceDescriptor"] = None
    name: str
    key: str
    """
    The name of the member as it appears in the wire document.
    """

    T = typing.TypeVar("T", bound="ResourceMemberDescriptor")

    def bind(self: T, parent: "ResourceDescriptor") -> T:
        if self.parent is not None and self.parent is not parent:
            raise InvalidDeclarationError(
                f'"{self.name}" is already a member of "{self.parent.name}"'
            )
        self.parent = parent
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, key={self.key!r})"


class ResourceAttributeDescriptor(ResourceMemberDescriptor):
    type: typing.Any
    allow_null: bool
    track_dirty: bool

    def __init__(
        self,
        type: typing.Any,
        name: str,
        key: typing.Optional[str] = None,
        allow_null: bool = True,
        track_dirty: bool = True,
    ):
        """
        :param type: the Python type the wire value is converted to. ``typing.Any`` passes the value through.
        :param str name: the name of the attribute.
        :param Optional[str] key: the wire key of the attribute; defaults to ``name``.
        :param bool allow_null: whether ``null`` is an acceptable value.
        :param bool track_dirty: whether assignments mark the attribute as changed.
        """
        self.type = type
        self.name = name
        self.key = key if key is not None else name
        self.allow_null = allow_null
        self.track_dirty = track_dirty


class ResourceRelationshipDescriptor(ResourceMemberDescriptor):
    type: RelationshipType
    destination: typing.Optional[str]
    """
    The type name of the resources on the other side, or :py:const:`None` if the
    relationship is polymorphic.
    """

    def __init__(
        self,
        destination: typing.Optional[str],
        name: str,
        key: typing.Optional[str] = None,
    ):
        super().__init__()
        self.destination = destination
        self.name = name
        self.key = key if key is not None else name


class ResourceToOneRelationshipDescriptor(ResourceRelationshipDescriptor):
    type = RelationshipType.TO_ONE
    """
    Always set to :py:class:`RelationshipType`.``TO_ONE``
    """


class ResourceToManyRelationshipDescriptor(ResourceRelationshipDescriptor):
    type = RelationshipType.TO_MANY
    """
    Always set to :py:class:`RelationshipType`.``TO_MANY``
    """


class ResourceDescriptor:
    """
    A :py:class:`ResourceDescriptor` holds information about a JSON-API resource.

    :param str name: The wire type name of the resource.
    :param Iterable[ResourceAttributeDescriptor] attributes: The descriptors for the attributes the resource holds.
    :param Iterable[ResourceRelationshipDescriptor] relationships: The descriptors for the relationships the resource has.
    """

    name: str
    """
    The wire type name of the resource.
    """
    _attributes: typing.MutableMapping[str, ResourceAttributeDescriptor]
    _relationships: typing.MutableMapping[str, ResourceRelationshipDescriptor]
    _attributes_by_key: typing.MutableMapping[str, ResourceAttributeDescriptor]
    _relationships_by_key: typing.MutableMapping[str, ResourceRelationshipDescriptor]

    @property
    def attributes(self) -> typing.Mapping[str, ResourceAttributeDescriptor]:
        """
        The mapping of attribute names to :py:class:`ResourceAttributeDescriptor`s.
        """
        return self._attributes

    @property
    def relationships(self) -> typing.Mapping[str, ResourceRelationshipDescriptor]:
        """
        The mapping of relationship names to :py:class:`ResourceRelationshipDescriptor`s.
        """
        return self._relationships

    @property
    def attributes_by_key(self) -> typing.Mapping[str, ResourceAttributeDescriptor]:
        """
        The mapping of wire keys to :py:class:`ResourceAttributeDescriptor`s.
        """
        return self._attributes_by_key

    @property
    def relationships_by_key(self) -> typing.Mapping[str, ResourceRelationshipDescriptor]:
        """
        The mapping of wire keys to :py:class:`ResourceRelationshipDescriptor`s.
        """
        return self._relationships_by_key

    def _check_member(self, member: ResourceMemberDescriptor) -> None:
        name = member.name
        if name in self._attributes or name in self._relationships:
            raise InvalidDeclarationError(f'"{self.name}" already has a member named "{name}"')
        if member.key in self._attributes_by_key or member.key in self._relationships_by_key:
            raise InvalidDeclarationError(
                f'"{self.name}" already has a member keyed "{member.key}"'
            )
        if member.key in ("type", "id"):
            raise InvalidDeclarationError(f'"{member.key}" cannot be used as a member key')

    def add_attribute(self, attr: ResourceAttributeDescriptor) -> None:
        """
        Add an attribute to the resource descriptor.

        :param ResourceAttributeDescriptor attr: the attribute to add.
        """
        self._check_member(attr)
        self._attributes[attr.name] = attr.bind(self)
        self._attributes_by_key[attr.key] = attr

    def add_relationship(self, rel: ResourceRelationshipDescriptor) -> None:
        """
        Add an relationship to the resource descriptor.

        :param ResourceRelationshipDescriptor rel: the relationship to add.
        """
        self._check_member(rel)
        self._relationships[rel.name] = rel.bind(self)
        self._relationships_by_key[rel.key] = rel

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    def __init__(
        self,
        name: str,
        attributes: typing.Iterable[ResourceAttributeDescriptor] = (),
        relationships: typing.Iterable[ResourceRelationshipDescriptor] = (),
    ) -> None:
        self.name = name
        self._attributes = OrderedDict()
        self._relationships = OrderedDict()
        self._attributes_by_key = OrderedDict()
        self._relationships_by_key = OrderedDict()
        for attr in attributes:
            self.add_attribute(attr)
        for rel in relationships:
            self.add_relationship(rel)

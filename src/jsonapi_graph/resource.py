import typing
import weakref

from .exceptions import (
    AttributeNotFoundError,
    InvalidResourceStateError,
    RelationshipNotFoundError,
)
from .models import (
    ResourceAttributeDescriptor,
    ResourceDescriptor,
    ResourceRelationshipDescriptor,
)
from .serde.interfaces import RelationshipType

ResourceKey = typing.Tuple[str, str]

_Reference = typing.Callable[[], typing.Optional["Resource"]]
_RelationshipValue = typing.Union[None, _Reference, typing.Tuple[_Reference, ...]]


class Resource:
    """
    A :py:class:`Resource` is an in-memory instance of a JSON:API resource whose shape
    is given by a :py:class:`ResourceDescriptor`.

    Attribute values are accessed by subscription.  An attribute that has never been
    assigned is distinct from one assigned :py:const:`None`; see :py:meth:`is_set`.
    Assigning a value marks the attribute as dirty until :py:meth:`mark_clean` is called.

    Related resources are held by weak references.  The :py:class:`Store` the resources
    belong to is what keeps them alive.

    A resource known only by its identity, such as one referred to by a relationship but
    absent from the document, is a placeholder: its :py:attr:`loaded` is :py:const:`False`
    until a later deserialization fills it in.
    """

    descriptor: ResourceDescriptor
    loaded: bool
    self_link: typing.Optional[str]
    related_links: typing.Dict[str, str]
    meta: typing.Dict[str, typing.Any]
    _id: typing.Optional[str]
    _values: typing.Dict[str, typing.Any]
    _relationships: typing.Dict[str, _RelationshipValue]
    _dirty: typing.Set[str]

    @property
    def type(self) -> str:
        return self.descriptor.name

    @property
    def id(self) -> typing.Optional[str]:
        return self._id

    @property
    def key(self) -> typing.Optional[ResourceKey]:
        """
        The identity of the resource in a store, or :py:const:`None` if it has no id yet.
        """
        if self._id is None:
            return None
        return (self.descriptor.name, self._id)

    @property
    def dirty_attributes(self) -> typing.FrozenSet[str]:
        return frozenset(self._dirty)

    @property
    def is_dirty(self) -> bool:
        return bool(self._dirty)

    def _attribute_descr(self, name: str) -> ResourceAttributeDescriptor:
        try:
            return self.descriptor.attributes[name]
        except KeyError:
            raise AttributeNotFoundError(self.descriptor, name)

    def _relationship_descr(self, name: str) -> ResourceRelationshipDescriptor:
        try:
            return self.descriptor.relationships[name]
        except KeyError:
            raise RelationshipNotFoundError(self.descriptor, name)

    def is_set(self, name: str) -> bool:
        self._attribute_descr(name)
        return name in self._values

    def get(self, name: str, default: typing.Any = None) -> typing.Any:
        self._attribute_descr(name)
        return self._values.get(name, default)

    def __getitem__(self, name: str) -> typing.Any:
        return self.get(name)

    def __setitem__(self, name: str, value: typing.Any) -> None:
        attr_descr = self._attribute_descr(name)
        if name in self._values:
            old = self._values[name]
            # 1 == 1.0 == True, yet each renders differently
            if type(old) is type(value) and old == value:
                return
        self._values[name] = value
        if attr_descr.track_dirty:
            self._dirty.add(name)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def mark_clean(self) -> None:
        """
        Forgets which attributes have changed.  Call this once the changes are known
        to be stored on the server.
        """
        self._dirty.clear()

    def _check_destination(
        self, rel_descr: ResourceRelationshipDescriptor, target: "Resource"
    ) -> None:
        if not isinstance(target, Resource):
            raise TypeError(f"{target!r} is not a resource")
        if rel_descr.destination is not None and target.type != rel_descr.destination:
            raise InvalidResourceStateError(
                f'relationship "{rel_descr.name}" of "{self.type}" refers to '
                f'"{rel_descr.destination}", got "{target.type}"'
            )

    def set_related(
        self,
        name: str,
        target: typing.Union[None, "Resource", typing.Iterable["Resource"]],
    ) -> None:
        """
        Sets the resource(s) on the other side of the relationship.

        :param str name: the name of the relationship.
        :param target: a :py:class:`Resource` or :py:const:`None` for a to-one relationship,
                       an iterable of :py:class:`Resource`\\ s for a to-many relationship.
        """
        rel_descr = self._relationship_descr(name)
        if rel_descr.type is RelationshipType.TO_ONE:
            if target is None:
                self._relationships[name] = None
            else:
                target = typing.cast(Resource, target)
                self._check_destination(rel_descr, target)
                self._relationships[name] = weakref.ref(target)
        else:
            if target is None or isinstance(target, Resource):
                raise TypeError(f'relationship "{name}" expects an iterable of resources')
            targets = tuple(target)
            for t in targets:
                self._check_destination(rel_descr, t)
            self._relationships[name] = tuple(weakref.ref(t) for t in targets)

    def has_related(self, name: str) -> bool:
        """
        Returns :py:const:`True` if the relationship is known, that is either
        assigned or deserialized, even if it is empty.
        """
        self._relationship_descr(name)
        return name in self._relationships

    def _dereference(self, name: str, ref: _Reference) -> "Resource":
        target = ref()
        if target is None:
            raise InvalidResourceStateError(
                f'a resource related to "{self.type}" through "{name}" is no longer available'
            )
        return target

    def get_related(
        self, name: str
    ) -> typing.Union[None, "Resource", typing.Tuple["Resource", ...]]:
        """
        Returns the resource(s) on the other side of the relationship.  A relationship
        that is not known yields :py:const:`None` for to-one and an empty tuple for to-many.
        """
        rel_descr = self._relationship_descr(name)
        value = self._relationships.get(name)
        if rel_descr.type is RelationshipType.TO_ONE:
            if value is None:
                return None
            return self._dereference(name, typing.cast(_Reference, value))
        else:
            if value is None:
                return ()
            return tuple(
                self._dereference(name, ref)
                for ref in typing.cast(typing.Tuple[_Reference, ...], value)
            )

    def _update_attribute(self, name: str, value: typing.Any) -> None:
        self._values[name] = value
        self._dirty.discard(name)

    def _update_relationship(
        self,
        name: str,
        target: typing.Union[None, "Resource", typing.Sequence["Resource"]],
    ) -> None:
        if target is None or isinstance(target, Resource):
            self._relationships[name] = None if target is None else weakref.ref(target)
        else:
            self._relationships[name] = tuple(weakref.ref(t) for t in target)

    def _assign_id(self, id: str) -> None:
        self._id = id

    def __repr__(self) -> str:
        state = "" if self.loaded else ", loaded=False"
        return f"Resource(type={self.type!r}, id={self._id!r}{state})"

    def __init__(
        self,
        descriptor: ResourceDescriptor,
        id: typing.Optional[str] = None,
        attributes: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        loaded: bool = True,
    ):
        """
        :param ResourceDescriptor descriptor: the descriptor of the resource type.
        :param Optional[str] id: the identifier; :py:const:`None` for resources not yet stored on the server.
        :param Optional[Mapping[str, Any]] attributes: initial attribute values. They are marked dirty.
        :param bool loaded: :py:const:`False` to create a placeholder.
        """
        self.descriptor = descriptor
        self._id = id
        self.loaded = loaded
        self.self_link = None
        self.related_links = {}
        self.meta = {}
        self._values = {}
        self._relationships = {}
        self._dirty = set()
        if attributes is not None:
            for k, v in attributes.items():
                self[k] = v

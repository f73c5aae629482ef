"""
Classes in :py:mod:`jsonapi_graph.serde.models` represent the elements of a JSON:API
document, independently of how resources are held in memory.

Every node remembers where it was found in a parsed document through ``_source_``,
which is :py:const:`None` for nodes that were built rather than parsed.
"""

import dataclasses
import datetime
import decimal
import enum
import typing
from collections import OrderedDict

from .utils import JSONPointer


@dataclasses.dataclass
class Repr:
    """
    The base class for any model objects.
    """

    _source_: typing.Optional[JSONPointer] = None


@dataclasses.dataclass
class LinksRepr(Repr):
    """
    :py:class:`LinksRepr` represents a ``links`` object.  Link objects are reduced to their ``href``.

    Ref.

    * `Document Links <https://jsonapi.org/format/#document-links>`_
    * `Pagination <https://jsonapi.org/format/#fetching-pagination>`_
    """

    self_: typing.Optional[str] = None
    related: typing.Optional[str] = None
    next: typing.Optional[str] = None
    prev: typing.Optional[str] = None
    first: typing.Optional[str] = None
    last: typing.Optional[str] = None


@dataclasses.dataclass(init=False)
class MetaContainerRepr(Repr):
    meta: typing.Dict[str, typing.Any] = dataclasses.field(default_factory=dict)

    def __init__(
        self,
        *,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[JSONPointer] = None,
    ):
        super().__init__(_source_=_source_)
        self.meta = meta if meta is not None else {}


@dataclasses.dataclass(init=False)
class NodeRepr(MetaContainerRepr):
    links: typing.Optional[LinksRepr] = None

    def __init__(
        self,
        *,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[JSONPointer] = None,
    ):
        super().__init__(meta=meta, _source_=_source_)
        self.links = links


@dataclasses.dataclass(init=False)
class ResourceIdRepr(MetaContainerRepr):
    """
    A `resource identifier object <https://jsonapi.org/format/#document-resource-identifier-objects>`_.
    """

    type: str  # type: ignore
    id: str  # type: ignore

    @property
    def key(self) -> typing.Tuple[str, str]:
        return (self.type, self.id)

    def __init__(
        self,
        *,
        type: str,
        id: str,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[JSONPointer] = None,
    ):
        super().__init__(meta=meta, _source_=_source_)
        self.type = type
        self.id = id


class MissingType:
    def __bool__(self):
        return False

    def __repr__(self):
        return "Missing"

    def __init__(self):
        raise TypeError("Not directly instantiable")


Missing = object.__new__(MissingType)
"""
Stands for a member that is absent, as opposed to one that is ``null``.
"""

Linkage = typing.Union[None, MissingType, ResourceIdRepr, typing.Sequence[ResourceIdRepr]]


@dataclasses.dataclass(init=False)
class LinkageRepr(NodeRepr):
    """
    A relationship object.  ``data`` is the `resource linkage <https://jsonapi.org/format/#document-resource-object-linkage>`_:
    :py:const:`None` for an empty to-one relationship, a sequence for a to-many relationship,
    and :py:data:`Missing` when the relationship object carries links or meta only.
    """

    data: Linkage = None

    def __init__(
        self,
        *,
        data: Linkage,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[JSONPointer] = None,
    ):
        super().__init__(links=links, meta=meta, _source_=_source_)
        self.data = data


AttributeScalar = typing.Union[
    datetime.datetime, datetime.date, decimal.Decimal, enum.Enum, str, int, float, bytes, None
]
AttributeValue = typing.Union[
    typing.Sequence[typing.Any],
    typing.Mapping[str, typing.Any],
    AttributeScalar,
]


@dataclasses.dataclass(init=False)
class ResourceRepr(NodeRepr):
    """
    A `resource object <https://jsonapi.org/format/#document-resource-objects>`_.

    Attributes and relationships are keyed by their wire keys and keep the order in
    which the resource descriptor declares them.  ``id`` is :py:const:`None` for a
    resource that the server has not assigned one yet.
    """

    type: str  # type: ignore
    id: typing.Optional[str]  # type: ignore
    attributes: typing.Mapping[str, AttributeValue] = dataclasses.field(  # type: ignore
        default_factory=OrderedDict
    )
    relationships: typing.Mapping[str, LinkageRepr] = dataclasses.field(  # type: ignore
        default_factory=OrderedDict
    )

    @property
    def key(self) -> typing.Optional[typing.Tuple[str, str]]:
        if self.id is None:
            return None
        return (self.type, self.id)

    def __getitem__(self, key: str) -> AttributeValue:
        return self.attributes[key]

    def __init__(
        self,
        *,
        type: str,
        id: typing.Optional[str],
        attributes: typing.Iterable[typing.Tuple[str, AttributeValue]] = (),
        relationships: typing.Iterable[typing.Tuple[str, LinkageRepr]] = (),
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[JSONPointer] = None,
    ):
        """
        :param str type: the resource type.
        :param Optional[str] id: the identifier, if any.
        :param Iterable[Tuple[str, AttributeValue]] attributes: pairs of a wire key and a converted value.
        :param Iterable[Tuple[str, LinkageRepr]] relationships: pairs of a wire key and a relationship object.
        :param Optional[LinksRepr] links: the ``links`` of the resource object.
        :param Optional[Dict[str, Any]] meta: the ``meta`` of the resource object.
        :param Optional[JSONPointer] _source_: where the resource object was found.
        """
        super().__init__(links=links, meta=meta, _source_=_source_)
        self.type = type
        self.id = id
        self.attributes = OrderedDict(attributes)
        self.relationships = OrderedDict(relationships)


@dataclasses.dataclass(init=False)
class DocumentReprBase(NodeRepr):
    jsonapi: typing.Dict[str, typing.Any] = dataclasses.field(default_factory=dict)
    included: typing.Sequence[ResourceRepr] = ()

    def __init__(
        self,
        *,
        jsonapi: typing.Optional[typing.Dict[str, typing.Any]] = None,
        included: typing.Sequence[ResourceRepr] = (),
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[JSONPointer] = None,
    ):
        super().__init__(links=links, meta=meta, _source_=_source_)
        self.jsonapi = jsonapi if jsonapi is not None else {}
        self.included = included


@dataclasses.dataclass(init=False)
class SingletonDocumentRepr(DocumentReprBase):
    """
    A document whose primary data is a single resource object, or ``null``.
    """

    data: typing.Optional[ResourceRepr] = None

    def __init__(
        self,
        *,
        data: typing.Optional[ResourceRepr] = None,
        jsonapi: typing.Optional[typing.Dict[str, typing.Any]] = None,
        included: typing.Sequence[ResourceRepr] = (),
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[JSONPointer] = None,
    ):
        super().__init__(
            jsonapi=jsonapi, included=included, links=links, meta=meta, _source_=_source_
        )
        self.data = data


@dataclasses.dataclass(init=False)
class CollectionDocumentRepr(DocumentReprBase):
    """
    A document whose primary data is an array of resource objects.
    """

    data: typing.Sequence[ResourceRepr] = ()

    def __init__(
        self,
        *,
        data: typing.Sequence[ResourceRepr] = (),
        jsonapi: typing.Optional[typing.Dict[str, typing.Any]] = None,
        included: typing.Sequence[ResourceRepr] = (),
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[JSONPointer] = None,
    ):
        super().__init__(
            jsonapi=jsonapi, included=included, links=links, meta=meta, _source_=_source_
        )
        self.data = data


DocumentRepr = typing.Union[SingletonDocumentRepr, CollectionDocumentRepr]

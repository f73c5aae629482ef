"""
Builders assemble document representations step by step, for documents that are
generated rather than parsed.
"""

import abc
import typing
from collections import OrderedDict

from .interfaces import RelationshipType
from .models import (
    AttributeValue,
    CollectionDocumentRepr,
    LinkageRepr,
    LinksRepr,
    Repr,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
)


class ReprBuilder(metaclass=abc.ABCMeta):
    links: typing.Optional[LinksRepr]
    meta: typing.Dict[str, typing.Any]

    @abc.abstractmethod
    def __call__(self) -> Repr:
        ...  # pragma: nocover

    def __init__(self):
        self.links = None
        self.meta = {}


class LinkageReprBuilder(ReprBuilder):
    """
    Builds the linkage of a relationship.  A to-one linkage holds at most one identifier
    and is ``null`` when it holds none.
    """

    type: RelationshipType
    _identifiers: typing.List[ResourceIdRepr]

    def add(
        self, type: str, id: str, meta: typing.Optional[typing.Dict[str, typing.Any]] = None
    ) -> None:
        if self.type is RelationshipType.TO_ONE and self._identifiers:
            raise ValueError("a to-one relationship refers to a single resource")
        self._identifiers.append(ResourceIdRepr(type=type, id=id, meta=meta))

    def nullify(self) -> None:
        if self.type is not RelationshipType.TO_ONE:
            raise TypeError("only a to-one relationship can be null")
        self._identifiers.clear()

    def __call__(self) -> LinkageRepr:
        data: typing.Union[None, ResourceIdRepr, typing.Tuple[ResourceIdRepr, ...]]
        if self.type is RelationshipType.TO_MANY:
            data = tuple(self._identifiers)
        else:
            data = self._identifiers[0] if self._identifiers else None
        return LinkageRepr(data=data, links=self.links, meta=self.meta)

    def __init__(self, type: RelationshipType):
        super().__init__()
        self.type = type
        self._identifiers = []


class ResourceReprBuilder(ReprBuilder):
    type: str
    id: typing.Optional[str]
    attributes: "OrderedDict[str, AttributeValue]"
    relationships: "OrderedDict[str, LinkageReprBuilder]"

    def add_attribute(self, key: str, value: AttributeValue) -> None:
        self.attributes[key] = value

    def relationship(self, key: str, type: RelationshipType) -> LinkageReprBuilder:
        """
        Returns the builder of the relationship keyed ``key``, creating it on first use.

        :raises TypeError: if the relationship was created with another :py:class:`RelationshipType`.
        """
        builder = self.relationships.get(key)
        if builder is None:
            self.relationships[key] = builder = LinkageReprBuilder(type)
        elif builder.type is not type:
            raise TypeError(f'relationship "{key}" is not a {type.value} relationship')
        return builder

    def __call__(self) -> ResourceRepr:
        return ResourceRepr(
            type=self.type,
            id=self.id,
            attributes=self.attributes.items(),
            relationships=((k, b()) for k, b in self.relationships.items()),
            links=self.links,
            meta=self.meta,
        )

    def __init__(self, type: str, id: typing.Optional[str] = None):
        super().__init__()
        self.type = type
        self.id = id
        self.attributes = OrderedDict()
        self.relationships = OrderedDict()


class DocumentBuilder(ReprBuilder, metaclass=abc.ABCMeta):
    jsonapi: typing.Dict[str, typing.Any]

    def __init__(self):
        super().__init__()
        self.jsonapi = {}


class SingletonDocumentBuilder(DocumentBuilder):
    data: typing.Optional[ResourceReprBuilder]

    def set(self, type: str, id: typing.Optional[str] = None) -> ResourceReprBuilder:
        self.data = builder = ResourceReprBuilder(type, id)
        return builder

    def __call__(self) -> SingletonDocumentRepr:
        return SingletonDocumentRepr(
            data=self.data() if self.data is not None else None,
            jsonapi=self.jsonapi,
            links=self.links,
            meta=self.meta,
        )

    def __init__(self):
        super().__init__()
        self.data = None


class CollectionDocumentBuilder(DocumentBuilder):
    data: typing.List[ResourceReprBuilder]

    def next(self, type: str, id: typing.Optional[str] = None) -> ResourceReprBuilder:
        builder = ResourceReprBuilder(type, id)
        self.data.append(builder)
        return builder

    def __call__(self) -> CollectionDocumentRepr:
        return CollectionDocumentRepr(
            data=tuple(b() for b in self.data),
            jsonapi=self.jsonapi,
            links=self.links,
            meta=self.meta,
        )

    def __init__(self):
        super().__init__()
        self.data = []

"""
:py:mod:`jsonapi_graph.deserializer` turns JSON:API documents into graphs of
:py:class:`~jsonapi_graph.resource.Resource`\\ s.

Deserialization happens in two phases.  The document is first validated and converted
into wire representations by :py:class:`~jsonapi_graph.serde.deserializer.ReprDeserializer`;
only a document that passes is applied to the :py:class:`~jsonapi_graph.store.Store`, so a
rejected document never leaves a store half-updated.
"""

import collections.abc
import dataclasses
import logging
import typing

from .errors import (
    APIError,
    ErrorCode,
    ErrorDetail,
    RawDocument,
    error_from_document,
    load_document,
)
from .options import DeserializationOptions
from .registry import ResourceTypeRegistry
from .resource import Resource
from .serde.deserializer import ReprDeserializer
from .serde.exceptions import DeserializationError, UnknownResourceTypeReferenceError
from .serde.interfaces import RelationshipType
from .serde.models import (
    CollectionDocumentRepr,
    DocumentRepr,
    LinkageRepr,
    LinksRepr,
    MissingType,
    ResourceIdRepr,
    ResourceRepr,
)
from .serde.utils import english_enumerate, quote
from .store import Store

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class PaginationData:
    first: typing.Optional[str] = None
    last: typing.Optional[str] = None
    prev: typing.Optional[str] = None
    next: typing.Optional[str] = None

    @classmethod
    def from_links(cls, links: typing.Optional[LinksRepr]) -> typing.Optional["PaginationData"]:
        """
        Extracts the pagination links.  Returns :py:const:`None` if there is none of them.
        """
        if links is None:
            return None
        retval = cls(first=links.first, last=links.last, prev=links.prev, next=links.next)
        if retval == cls():
            return None
        return retval


PrimaryData = typing.Union[None, Resource, typing.Tuple[Resource, ...]]


@dataclasses.dataclass
class DeserializationResult:
    """
    The outcome of a deserialization.  Either :py:attr:`store` or :py:attr:`error` is set.

    The result can be unpacked as a ``(store, pagination, error)`` triple.
    """

    store: typing.Optional[Store] = None
    pagination: typing.Optional[PaginationData] = None
    error: typing.Optional[APIError] = None
    data: PrimaryData = None
    """
    The primary resource, or :py:const:`None` if the primary data was ``null``.
    A tuple of them if the primary data was an array.
    """
    meta: typing.Dict[str, typing.Any] = dataclasses.field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __iter__(self):
        return iter((self.store, self.pagination, self.error))


def _error_details(e: DeserializationError) -> typing.Tuple[ErrorDetail, ...]:
    return tuple(ErrorDetail(pointer=str(item.pointer), message=item.message) for item in e.errors)


class DocumentApplier:
    """
    Applies a validated document to a store.  An instance serves a single document.
    """

    registry: ResourceTypeRegistry
    store: Store
    map_target: typing.Optional[Resource]

    def resolve(self, type_: str, id_: str) -> Resource:
        resource = self.store.get(type_, id_)
        if resource is None:
            resource = Resource(self.registry.lookup(type_), id=id_, loaded=False)
            self.store.add(resource)
        return resource

    def _resolve_linkage(
        self, linkage: LinkageRepr
    ) -> typing.Union[None, Resource, typing.Tuple[Resource, ...]]:
        if linkage.data is None:
            return None
        if isinstance(linkage.data, ResourceIdRepr):
            return self.resolve(linkage.data.type, linkage.data.id)
        return tuple(
            self.resolve(item.type, item.id)
            for item in typing.cast(typing.Sequence[ResourceIdRepr], linkage.data)
        )

    def populate(self, resource: Resource, repr_: ResourceRepr) -> None:
        descr = resource.descriptor
        for key, value in repr_.attributes.items():
            resource._update_attribute(descr.attributes_by_key[key].name, value)

        for key, linkage in repr_.relationships.items():
            rel_descr = descr.relationships_by_key[key]
            if linkage.links is not None and linkage.links.related is not None:
                resource.related_links[rel_descr.name] = linkage.links.related
            if isinstance(linkage.data, MissingType):
                # links or meta only
                continue
            target = self._resolve_linkage(linkage)
            if rel_descr.type is RelationshipType.TO_MANY and target is None:
                target = ()
            resource._update_relationship(rel_descr.name, target)

        if repr_.links is not None and repr_.links.self_ is not None:
            resource.self_link = repr_.links.self_
        if repr_.meta:
            resource.meta.update(repr_.meta)
        resource.loaded = True

    def apply_primary(self, i: int, repr_: ResourceRepr) -> Resource:
        if i == 0 and self.map_target is not None:
            resource = self.map_target
            if repr_.id is not None and resource.id != repr_.id:
                self.store.assign_id(resource, repr_.id)
            logger.debug("mapped %s %s onto %r", repr_.type, repr_.id, resource)
        elif repr_.id is None:
            resource = self.store.add(Resource(self.registry.lookup(repr_.type)))
        else:
            resource = self.resolve(repr_.type, repr_.id)
        self.populate(resource, repr_)
        return resource

    def apply_included(self, repr_: ResourceRepr) -> Resource:
        resource = self.resolve(repr_.type, typing.cast(str, repr_.id))
        self.populate(resource, repr_)
        return resource

    def __init__(
        self,
        registry: ResourceTypeRegistry,
        store: Store,
        map_target: typing.Optional[Resource] = None,
    ):
        self.registry = registry
        self.store = store
        self.map_target = map_target


class ResourceDeserializer:
    """
    :py:class:`ResourceDeserializer` deserializes JSON:API documents into resources
    of the types registered with its :py:class:`ResourceTypeRegistry`.

    Errors in the document are never raised; they are reported through
    :py:attr:`DeserializationResult.error`.
    """

    registry: ResourceTypeRegistry

    def _check_map_target(
        self, store: Store, document: DocumentRepr
    ) -> typing.Tuple[typing.Optional[Resource], typing.Optional[APIError]]:
        primary = (
            document.data
            if isinstance(document, CollectionDocumentRepr)
            else ([document.data] if document.data is not None else [])
        )
        target = store.first()
        if target is None or not primary:
            return None, None
        repr_ = primary[0]
        if repr_.type != target.type:
            return None, APIError(
                code=ErrorCode.RESOURCE_TYPE_MISMATCH,
                message=f'cannot map "{repr_.type}" onto "{target.type}"',
            )
        if repr_.id is not None and repr_.id != target.id:
            existing = store.get(repr_.type, repr_.id)
            if existing is not None and existing is not target:
                return None, APIError(
                    code=ErrorCode.IDENTITY_CONFLICT,
                    message=f"another instance of {repr_.type} {repr_.id} is already in the store",
                )
        return target, None

    def __call__(
        self,
        raw: RawDocument,
        options: typing.Optional[DeserializationOptions] = None,
        store: typing.Optional[Store] = None,
    ) -> DeserializationResult:
        """
        Deserializes a document.

        :param raw: the document, either encoded or already decoded.
        :param Optional[DeserializationOptions] options: the options.
        :param Optional[Store] store: a store to merge the resources into. A new one is created if omitted.
        :return: a :py:class:`DeserializationResult`.
        """
        if options is None:
            options = DeserializationOptions()

        try:
            document = load_document(raw)
        except (TypeError, ValueError) as e:
            logger.debug("failed to decode a document (%s)", e)
            return DeserializationResult(
                error=APIError(
                    code=ErrorCode.INVALID_DOCUMENT,
                    details=(ErrorDetail(pointer="/", message=str(e)),),
                )
            )

        if (
            not isinstance(document, collections.abc.Mapping)
            or "errors" in document
            or "data" not in document
        ):
            return DeserializationResult(
                error=error_from_document(document, ErrorCode.INVALID_DOCUMENT)
            )

        try:
            document_repr = ReprDeserializer(self.registry.lookup)(document)
        except UnknownResourceTypeReferenceError as e:
            logger.debug("document refers to unknown resource types: %s", e.type_names)
            return DeserializationResult(
                error=APIError(
                    code=ErrorCode.UNKNOWN_RESOURCE_TYPE,
                    message=(
                        "unknown resource types: "
                        f"{english_enumerate([quote(n) for n in e.type_names])}"
                    ),
                    details=_error_details(e),
                )
            )
        except DeserializationError as e:
            logger.debug("document rejected: %s", e)
            return DeserializationResult(
                error=APIError(
                    code=ErrorCode.INVALID_DOCUMENT,
                    message=e.errors[0].message,
                    details=_error_details(e),
                )
            )

        map_target: typing.Optional[Resource] = None
        if store is not None and options.map_onto_first_resource_in_store:
            map_target, error = self._check_map_target(store, document_repr)
            if error is not None:
                return DeserializationResult(error=error)

        if store is None:
            store = Store()
        applier = DocumentApplier(self.registry, store, map_target)

        primary_data: PrimaryData
        if isinstance(document_repr, CollectionDocumentRepr):
            primary_data = tuple(
                applier.apply_primary(i, repr_) for i, repr_ in enumerate(document_repr.data)
            )
        elif document_repr.data is not None:
            primary_data = applier.apply_primary(0, document_repr.data)
        else:
            primary_data = None
        for repr_ in document_repr.included:
            applier.apply_included(repr_)

        logger.debug(
            "deserialized %d primary and %d included resources; %d resources in store",
            len(primary_data)
            if isinstance(primary_data, tuple)
            else (0 if primary_data is None else 1),
            len(document_repr.included),
            len(store),
        )
        return DeserializationResult(
            store=store,
            pagination=PaginationData.from_links(document_repr.links),
            data=primary_data,
            meta=document_repr.meta,
        )

    def __init__(self, registry: ResourceTypeRegistry):
        self.registry = registry


def deserialize(
    raw: RawDocument,
    registry: ResourceTypeRegistry,
    options: typing.Optional[DeserializationOptions] = None,
    existing_store: typing.Optional[Store] = None,
) -> DeserializationResult:
    return ResourceDeserializer(registry)(raw, options, existing_store)

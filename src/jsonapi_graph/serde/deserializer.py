import collections.abc
import typing

from .exceptions import (
    DeserializationError,
    DeserializationErrorItem,
    UnknownResourceTypeReferenceError,
)
from .interfaces import (
    DescriptorQuerier,
    RelationshipType,
    ResourceDescriptor,
    ResourceRelationshipDescriptor,
)
from .models import (
    AttributeValue,
    CollectionDocumentRepr,
    DocumentRepr,
    LinkageRepr,
    LinksRepr,
    Missing,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
)
from .types import LINK_MEMBERS, JSONObject, JSONValue
from .utils import AttributeValueConverter, JSONPointer

EMPTY_ATTRIBUTES_DICT: typing.Mapping[str, JSONValue] = {}


class ErrorCollectingContext:
    errors: typing.List[DeserializationErrorItem]
    unknown_types: typing.List[str]

    def validation_error_occurred(self, pointer: JSONPointer, message: str) -> None:
        self.errors.append(DeserializationErrorItem(pointer, message))

    def unknown_type_referred(self, pointer: JSONPointer, type_: str) -> None:
        if type_ not in self.unknown_types:
            self.unknown_types.append(type_)
        self.validation_error_occurred(pointer, f'unknown resource type "{type_}"')

    def __init__(self):
        self.errors = []
        self.unknown_types = []


class ReprDeserializer:
    """
    :py:class:`ReprDeserializer` validates a decoded JSON:API document and turns it into
    a :py:class:`SingletonDocumentRepr` or a :py:class:`CollectionDocumentRepr`.

    Attribute values are converted to the types declared by the resource descriptors
    that the querier hands out for each resource type. Attributes and relationships that
    no descriptor declares are dropped.

    Every problem found is collected, and all of them are reported at once by raising
    :py:class:`DeserializationError`.
    """

    _querier: DescriptorQuerier
    _converter: AttributeValueConverter

    def _query_descriptor(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, type_: str
    ) -> typing.Optional[ResourceDescriptor]:
        try:
            return self._querier(type_)
        except LookupError:
            ctx.unknown_type_referred(pointer, type_)
            return None

    def _convert_type_and_id(
        self,
        ctx: ErrorCollectingContext,
        pointer: JSONPointer,
        value: JSONObject,
        require_id: bool,
    ) -> typing.Tuple[typing.Optional[str], typing.Optional[str]]:
        type_ = value.get("type")
        if type_ is None:
            ctx.validation_error_occurred(pointer, 'value must have a property "type"')
        elif not isinstance(type_, str):
            ctx.validation_error_occurred(pointer / "type", f"type must be a string, got {type_!r}")
            type_ = None

        id_ = value.get("id")
        if id_ is None:
            if require_id:
                ctx.validation_error_occurred(pointer, 'value must have a property "id"')
        elif isinstance(id_, int) and not isinstance(id_, bool):
            # tolerate servers that emit numeric identifiers
            id_ = str(id_)
        elif not isinstance(id_, str):
            ctx.validation_error_occurred(pointer / "id", f"id must be a string, got {id_!r}")
            id_ = None
        return type_, id_

    def _convert_meta(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[typing.Dict[str, typing.Any]]:
        if value is None:
            return None
        if not isinstance(value, collections.abc.Mapping):
            ctx.validation_error_occurred(pointer, f"meta must be an object, got {value!r}")
            return None
        return dict(value)

    def _convert_links(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[LinksRepr]:
        if value is None:
            return None
        if not isinstance(value, collections.abc.Mapping):
            ctx.validation_error_occurred(pointer, f"links must be an object, got {value!r}")
            return None
        retval = LinksRepr(_source_=pointer)
        for k, attr in LINK_MEMBERS:
            link = value.get(k)
            if isinstance(link, collections.abc.Mapping):
                # link object
                link = link.get("href")
            if link is None:
                continue
            if not isinstance(link, str):
                ctx.validation_error_occurred(pointer / k, f"link must be a string, got {link!r}")
                continue
            setattr(retval, attr, link)
        return retval

    def _convert_resource_id_repr(
        self,
        ctx: ErrorCollectingContext,
        pointer: JSONPointer,
        rel_descr: ResourceRelationshipDescriptor,
        value: JSONValue,
    ) -> typing.Optional[ResourceIdRepr]:
        if not isinstance(value, collections.abc.Mapping):
            ctx.validation_error_occurred(
                pointer, f"resource identifier must be an object, got {value!r}"
            )
            return None
        type_, id_ = self._convert_type_and_id(ctx, pointer, value, require_id=True)
        if type_ is None or id_ is None:
            return None
        if rel_descr.destination is not None and type_ != rel_descr.destination:
            ctx.validation_error_occurred(
                pointer / "type",
                f'relationship "{rel_descr.key}" refers to "{rel_descr.destination}", '
                f'got "{type_}"',
            )
            return None
        if self._query_descriptor(ctx, pointer / "type", type_) is None:
            return None
        return ResourceIdRepr(
            type=type_,
            id=id_,
            meta=self._convert_meta(ctx, pointer / "meta", value.get("meta")),
            _source_=pointer,
        )

    def _convert_linkage_repr(
        self,
        ctx: ErrorCollectingContext,
        pointer: JSONPointer,
        rel_descr: ResourceRelationshipDescriptor,
        value: JSONValue,
    ) -> typing.Optional[LinkageRepr]:
        if not isinstance(value, collections.abc.Mapping):
            ctx.validation_error_occurred(
                pointer, f"relationship must be an object, got {value!r}"
            )
            return None

        data: typing.Any = Missing
        if "data" in value:
            data_ = value["data"]
            _pointer = pointer / "data"
            if rel_descr.type is RelationshipType.TO_ONE:
                if data_ is None:
                    data = None
                elif isinstance(data_, collections.abc.Mapping):
                    data = self._convert_resource_id_repr(ctx, _pointer, rel_descr, data_)
                else:
                    ctx.validation_error_occurred(
                        _pointer,
                        f'to-one relationship "{rel_descr.key}" must be an object or null',
                    )
            else:
                if data_ is None:
                    data = ()
                elif isinstance(data_, collections.abc.Sequence) and not isinstance(data_, str):
                    items = [
                        self._convert_resource_id_repr(ctx, _pointer[i], rel_descr, item)
                        for i, item in enumerate(data_)
                    ]
                    data = tuple(item for item in items if item is not None)
                else:
                    ctx.validation_error_occurred(
                        _pointer, f'to-many relationship "{rel_descr.key}" must be an array'
                    )

        return LinkageRepr(
            data=data,
            links=self._convert_links(ctx, pointer / "links", value.get("links")),
            meta=self._convert_meta(ctx, pointer / "meta", value.get("meta")),
            _source_=pointer,
        )

    def _convert_resource_repr(
        self,
        ctx: ErrorCollectingContext,
        pointer: JSONPointer,
        value: JSONValue,
        require_id: bool = True,
    ) -> typing.Optional[ResourceRepr]:
        if not isinstance(value, collections.abc.Mapping):
            ctx.validation_error_occurred(
                pointer, f"resource object must be an object, got {value!r}"
            )
            return None

        type_, id_ = self._convert_type_and_id(ctx, pointer, value, require_id)
        if type_ is None:
            return None
        resource_descr = self._query_descriptor(ctx, pointer / "type", type_)
        if resource_descr is None:
            return None

        attributes_ = value.get("attributes", EMPTY_ATTRIBUTES_DICT)
        attributes: typing.MutableSequence[typing.Tuple[str, AttributeValue]] = []
        if not isinstance(attributes_, collections.abc.Mapping):
            ctx.validation_error_occurred(
                pointer / "attributes", f"attributes must be an object, got {attributes_!r}"
            )
        else:
            _pointer = pointer / "attributes"
            for attr_descr in resource_descr.attributes.values():
                if attr_descr.key not in attributes_:
                    continue
                try:
                    v = self._converter(
                        attr_descr.type, attr_descr.allow_null, attributes_[attr_descr.key]
                    )
                except (TypeError, ValueError) as e:
                    ctx.validation_error_occurred(
                        _pointer / attr_descr.key,
                        f'attribute "{attr_descr.key}" of "{type_}" '
                        f"contains an invalid value ({e})",
                    )
                    continue
                attributes.append((attr_descr.key, v))

        relationships_ = value.get("relationships", EMPTY_ATTRIBUTES_DICT)
        relationships: typing.MutableSequence[typing.Tuple[str, LinkageRepr]] = []
        if not isinstance(relationships_, collections.abc.Mapping):
            ctx.validation_error_occurred(
                pointer / "relationships",
                f"relationships must be an object, got {relationships_!r}",
            )
        else:
            _pointer = pointer / "relationships"
            for rel_descr in resource_descr.relationships.values():
                if rel_descr.key not in relationships_:
                    continue
                linkage = self._convert_linkage_repr(
                    ctx, _pointer / rel_descr.key, rel_descr, relationships_[rel_descr.key]
                )
                if linkage is not None:
                    relationships.append((rel_descr.key, linkage))

        return ResourceRepr(
            type=type_,
            id=id_,
            attributes=attributes,
            relationships=relationships,
            links=self._convert_links(ctx, pointer / "links", value.get("links")),
            meta=self._convert_meta(ctx, pointer / "meta", value.get("meta")),
            _source_=pointer,
        )

    def _convert_included(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Sequence[ResourceRepr]:
        if value is None:
            return ()
        if isinstance(value, str) or not isinstance(value, collections.abc.Sequence):
            ctx.validation_error_occurred(pointer, f"included must be an array, got {value!r}")
            return ()
        items = [self._convert_resource_repr(ctx, pointer[i], item) for i, item in enumerate(value)]
        return tuple(item for item in items if item is not None)

    def __call__(self, document: JSONObject) -> DocumentRepr:
        ctx = ErrorCollectingContext()
        pointer = JSONPointer()

        retval: typing.Optional[DocumentRepr] = None
        if "data" not in document:
            ctx.validation_error_occurred(pointer, 'value must have a property "data"')
        else:
            included = self._convert_included(ctx, pointer / "included", document.get("included"))
            links = self._convert_links(ctx, pointer / "links", document.get("links"))
            meta = self._convert_meta(ctx, pointer / "meta", document.get("meta"))
            jsonapi = self._convert_meta(ctx, pointer / "jsonapi", document.get("jsonapi"))
            data = document["data"]
            if data is None or isinstance(data, collections.abc.Mapping):
                retval = SingletonDocumentRepr(
                    data=(
                        self._convert_resource_repr(ctx, pointer / "data", data, require_id=False)
                        if data is not None
                        else None
                    ),
                    included=included,
                    links=links,
                    meta=meta,
                    jsonapi=jsonapi,
                    _source_=pointer,
                )
            elif isinstance(data, collections.abc.Sequence) and not isinstance(data, str):
                items = [
                    self._convert_resource_repr(ctx, (pointer / "data")[i], item, require_id=False)
                    for i, item in enumerate(data)
                ]
                retval = CollectionDocumentRepr(
                    data=tuple(item for item in items if item is not None),
                    included=included,
                    links=links,
                    meta=meta,
                    jsonapi=jsonapi,
                    _source_=pointer,
                )
            else:
                ctx.validation_error_occurred(
                    pointer / "data", f"data must be an object, an array or null, got {data!r}"
                )

        if ctx.unknown_types:
            raise UnknownResourceTypeReferenceError(document, ctx.errors, ctx.unknown_types)
        if ctx.errors:
            raise DeserializationError(document, ctx.errors)
        assert retval is not None
        return retval

    def __init__(
        self,
        querier: DescriptorQuerier,
        converter: typing.Optional[AttributeValueConverter] = None,
    ):
        self._querier = querier
        self._converter = converter if converter is not None else AttributeValueConverter()

"""
:py:mod:`jsonapi_graph.serde.renderer` renders the internal representation of JSON:API
documents into JSON-compatible dictionaries.

Synopsis
--------

.. code-block:: python

   import json

   from jsonapi_graph.serde.renderer import ReprRenderer

   renderer = ReprRenderer()

   internal_repr = SingletonDocumentRepr(
       data=ResourceRepr(
           type="posts",
           id="1",
           attributes=[
               ("title", "Hello"),
           ],
           relationships=[
               (
                   "author",
                   LinkageRepr(
                       data=ResourceIdRepr(
                           type="people",
                           id="9",
                       ),
                   ),
               ),
           ],
       ),
   )

   print(json.dumps(renderer(internal_repr)))

"""

import base64
import collections.abc
import datetime
import decimal
import enum
import typing
from collections import OrderedDict

from .models import (
    AttributeValue,
    CollectionDocumentRepr,
    DocumentReprBase,
    LinkageRepr,
    LinksRepr,
    MissingType,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
)
from .types import LINK_MEMBERS, JSONValue, MutableJSONObject
from .utils import JSONPointer


class TZLocalizer(typing.Protocol):
    """
    Timezones that need help attaching themselves to a naive datetime, such as the ones from pytz.
    """

    def localize(self, dt: datetime.datetime) -> datetime.datetime:
        ...  # pragma: nocover


ValueRenderer = typing.Callable[["ReprRenderer", JSONPointer, typing.Any], JSONValue]


class ReprRenderer:
    """
    :py:class:`ReprRenderer` turns a document representation into a dictionary that
    :py:func:`json.dumps` accepts.

    Attribute values are rendered according to their Python type. Datetimes are rendered
    in UTC, so a naive datetime is refused unless ``assume_naive_timezone_as`` is given.
    Failures are reported by raising :py:class:`TypeError` or :py:class:`ValueError`
    whose message starts with the JSON pointer of the offending value.
    """

    _render_decimal_as_str: bool
    _render_embedded_links: bool
    _assume_naive_timezone_as: typing.Optional[datetime.tzinfo]

    def _object(self, items: typing.Iterable[typing.Tuple[str, typing.Any]]) -> MutableJSONObject:
        return OrderedDict(items)

    def _render_datetime(self, path: JSONPointer, value: datetime.datetime) -> JSONValue:
        if value.tzinfo is None:
            tz = self._assume_naive_timezone_as
            if tz is None:
                raise ValueError(f"{path}: naive datetime {value}")
            if hasattr(tz, "localize"):
                value = typing.cast(TZLocalizer, tz).localize(value)
            else:
                value = value.replace(tzinfo=tz)
        return value.astimezone(datetime.timezone.utc).isoformat()

    def _render_date(self, path: JSONPointer, value: datetime.date) -> JSONValue:
        return value.isoformat()

    def _render_decimal(self, path: JSONPointer, value: decimal.Decimal) -> JSONValue:
        if self._render_decimal_as_str:
            return str(value)
        return float(value)

    def _render_bytes(self, path: JSONPointer, value: bytes) -> JSONValue:
        return base64.b64encode(value).decode("ascii")

    def _render_enum(self, path: JSONPointer, value: enum.Enum) -> JSONValue:
        return self._render_value(path, value.value)

    def _render_mapping(
        self, path: JSONPointer, value: typing.Mapping[str, typing.Any]
    ) -> JSONValue:
        return self._object((k, self._render_value(path / k, v)) for k, v in value.items())

    def _render_sequence(self, path: JSONPointer, value: typing.Sequence[typing.Any]) -> JSONValue:
        return [self._render_value(path[i], v) for i, v in enumerate(value)]

    def _render_as_is(self, path: JSONPointer, value: typing.Any) -> JSONValue:
        return value

    # enum comes first so that IntEnum and str-based enums render as their values
    _value_renderers: typing.ClassVar[typing.Sequence[typing.Tuple[type, ValueRenderer]]] = (
        (enum.Enum, _render_enum),
        (datetime.datetime, _render_datetime),
        (datetime.date, _render_date),
        (decimal.Decimal, _render_decimal),
        (bytes, _render_bytes),
        (str, _render_as_is),
        (bool, _render_as_is),
        (int, _render_as_is),
        (float, _render_as_is),
        (type(None), _render_as_is),
        (collections.abc.Mapping, _render_mapping),
        (collections.abc.Sequence, _render_sequence),
    )
    _exact_value_renderers: typing.ClassVar[typing.Dict[type, ValueRenderer]] = dict(
        _value_renderers
    )

    def _render_value(self, path: JSONPointer, value: AttributeValue) -> JSONValue:
        r = self._exact_value_renderers.get(type(value))
        if r is None:
            for type_, candidate in self._value_renderers:
                if isinstance(value, type_):
                    r = candidate
                    break
            else:
                raise TypeError(f"{path}: unsupported type {value!r}")
        return r(self, path, value)

    def _render_links(self, path: JSONPointer, repr_: LinksRepr) -> MutableJSONObject:
        return self._object(
            (member, getattr(repr_, attr))
            for member, attr in LINK_MEMBERS
            if getattr(repr_, attr) is not None
        )

    def _render_resource_id(self, path: JSONPointer, repr_: ResourceIdRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {"type": repr_.type, "id": repr_.id}
        if repr_.meta:
            retval["meta"] = repr_.meta
        return retval

    def _render_linkage(self, path: JSONPointer, repr_: LinkageRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {}
        if repr_.links is not None:
            retval["links"] = self._render_links(path / "links", repr_.links)
        data = repr_.data
        if isinstance(data, MissingType):
            # links or meta only
            pass
        elif data is None:
            retval["data"] = None
        elif isinstance(data, ResourceIdRepr):
            retval["data"] = self._render_resource_id(path / "data", data)
        else:
            retval["data"] = [
                self._render_resource_id((path / "data")[i], item) for i, item in enumerate(data)
            ]
        if repr_.meta:
            retval["meta"] = repr_.meta
        return retval

    def _render_resource(self, path: JSONPointer, repr_: ResourceRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {"type": repr_.type}
        if repr_.id is not None:
            retval["id"] = repr_.id
        if self._render_embedded_links and repr_.links is not None:
            retval["links"] = self._render_links(path / "links", repr_.links)
        if repr_.attributes:
            retval["attributes"] = self._object(
                (k, self._render_value(path / "attributes" / k, v))
                for k, v in repr_.attributes.items()
            )
        if repr_.relationships:
            retval["relationships"] = self._object(
                (k, self._render_linkage(path / "relationships" / k, v))
                for k, v in repr_.relationships.items()
            )
        if repr_.meta:
            retval["meta"] = repr_.meta
        return retval

    def _render_document(self, repr_: DocumentReprBase, data: JSONValue) -> MutableJSONObject:
        path = JSONPointer()
        retval: MutableJSONObject = {}
        if repr_.jsonapi:
            retval["jsonapi"] = repr_.jsonapi
        if repr_.links is not None:
            retval["links"] = self._render_links(path / "links", repr_.links)
        if repr_.meta:
            retval["meta"] = repr_.meta
        if repr_.included:
            retval["included"] = [
                self._render_resource((path / "included")[i], r)
                for i, r in enumerate(repr_.included)
            ]
        retval["data"] = data
        return retval

    def render_resources_by_type(
        self, reprs: typing.Sequence[ResourceRepr], collection: bool = True
    ) -> MutableJSONObject:
        """
        Renders resource objects in the layout that keys them by their resource type.
        In a collection every type maps to an array of resource objects.  Otherwise
        the only resource object is rendered as is under its type.

        :param Sequence[ResourceRepr] reprs: resource objects to render.
        :param bool collection: whether the document is a collection.
        :return: the rendered document.
        :raises ValueError: if ``collection`` is false and ``reprs`` does not hold exactly one resource object.
        """
        if not collection:
            if len(reprs) != 1:
                raise ValueError(
                    f"a singleton document holds one resource object, not {len(reprs)}"
                )
            repr_ = reprs[0]
            return self._object(
                [(repr_.type, self._render_resource(JSONPointer() / repr_.type, repr_))]
            )
        grouped: "OrderedDict[str, typing.List[MutableJSONObject]]" = OrderedDict()
        for repr_ in reprs:
            items = grouped.setdefault(repr_.type, [])
            items.append(self._render_resource((JSONPointer() / repr_.type)[len(items)], repr_))
        return self._object(grouped.items())

    def __call__(
        self, repr_: typing.Union[SingletonDocumentRepr, CollectionDocumentRepr]
    ) -> MutableJSONObject:
        path = JSONPointer() / "data"
        data: JSONValue
        if isinstance(repr_, SingletonDocumentRepr):
            data = self._render_resource(path, repr_.data) if repr_.data is not None else None
        elif isinstance(repr_, CollectionDocumentRepr):
            data = [self._render_resource(path[i], r) for i, r in enumerate(repr_.data)]
        else:
            raise TypeError(f"unsupported document representation {repr_!r}")
        return self._render_document(repr_, data)

    def __init__(
        self,
        render_decimal_as_str: bool = True,
        render_embedded_links: bool = False,
        assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None,
    ):
        """
        :param bool render_decimal_as_str: whether :py:class:`decimal.Decimal`\\ s are rendered as strings rather than numbers.
        :param bool render_embedded_links: whether the ``links`` of resource objects are rendered.
        :param Optional[datetime.tzinfo] assume_naive_timezone_as: the timezone assumed for naive datetimes.
        """
        self._render_decimal_as_str = render_decimal_as_str
        self._render_embedded_links = render_embedded_links
        self._assume_naive_timezone_as = assume_naive_timezone_as

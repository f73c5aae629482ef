import datetime
import typing

from .deserializer import DeserializationResult, ResourceDeserializer
from .errors import APIError, RawDocument, decode_error
from .models import ResourceDescriptor
from .options import DeserializationOptions, SerializationOptions
from .registry import ResourceTypeRegistry
from .resource import Resource
from .serde.renderer import ReprRenderer
from .serde.types import MutableJSONObject
from .serializer import ResourceSerializer
from .store import Store


class JSONAPISerde:
    """
    :py:class:`JSONAPISerde` is the entry point that ties the resource type registry
    and the (de)serializers together.

    .. code-block:: python

       serde = JSONAPISerde()
       serde.register_type(posts)
       result = serde.deserialize(response_body)
       if result.error is not None:
           ...
       post = result.data
       post["title"] = "Updated"
       body = serde.serialize(post, SerializationOptions(dirty_attributes_only=True))

    :param Optional[ResourceTypeRegistry] registry: the registry to use. A new one is created if omitted.
    :param bool render_decimal_as_str: whether :py:class:`decimal.Decimal`\\ s are rendered as strings.
    :param Optional[datetime.tzinfo] assume_naive_timezone_as: the timezone assumed for naive datetimes.
    """

    registry: ResourceTypeRegistry
    _deserializer: ResourceDeserializer
    _serializer: ResourceSerializer

    def register_type(self, descr: ResourceDescriptor) -> None:
        self.registry.register(descr)

    def unregister_type(self, descr: typing.Union[ResourceDescriptor, str]) -> None:
        self.registry.unregister(descr)

    def lookup_type(self, name: str) -> ResourceDescriptor:
        return self.registry.lookup(name)

    def deserialize(
        self,
        data: RawDocument,
        options: typing.Optional[DeserializationOptions] = None,
        store: typing.Optional[Store] = None,
    ) -> DeserializationResult:
        """
        Deserializes a document.  Pass ``store`` to merge the resources into resources
        loaded earlier; references held to them stay valid.
        """
        return self._deserializer(data, options, store)

    def decode_error(self, data: RawDocument, fallback_status_code: int) -> APIError:
        """
        Decodes the body of a response outside the 2xx range.
        """
        return decode_error(data, fallback_status_code)

    def serialize(
        self,
        resources: typing.Union[Resource, typing.Iterable[Resource]],
        options: typing.Optional[SerializationOptions] = None,
    ) -> MutableJSONObject:
        return self._serializer(resources, options)

    def mark_clean(self, resources: typing.Union[Resource, typing.Iterable[Resource]]) -> None:
        """
        Clears the dirty flags of the resources after a successful write.
        """
        if isinstance(resources, Resource):
            resources = [resources]
        for resource in resources:
            resource.mark_clean()

    def __init__(
        self,
        registry: typing.Optional[ResourceTypeRegistry] = None,
        render_decimal_as_str: bool = True,
        assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None,
    ):
        self.registry = registry if registry is not None else ResourceTypeRegistry()
        self._deserializer = ResourceDeserializer(self.registry)
        self._serializer = ResourceSerializer(
            ReprRenderer(
                render_decimal_as_str=render_decimal_as_str,
                assume_naive_timezone_as=assume_naive_timezone_as,
            )
        )

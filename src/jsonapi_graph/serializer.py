import logging
import typing

from .exceptions import InvalidResourceStateError
from .options import SerializationOptions
from .resource import Resource
from .serde.builders import (
    CollectionDocumentBuilder,
    LinkageReprBuilder,
    ResourceReprBuilder,
    SingletonDocumentBuilder,
)
from .serde.interfaces import RelationshipType
from .serde.renderer import ReprRenderer
from .serde.types import MutableJSONObject

logger = logging.getLogger(__name__)


class ResourceSerializer:
    """
    :py:class:`ResourceSerializer` renders resources into a JSON:API document suitable
    for a write request.

    Related resources are emitted as resource identifiers only, never with their bodies.
    """

    _renderer: ReprRenderer

    def _link(self, builder: LinkageReprBuilder, resource: Resource, target: Resource) -> None:
        if target.id is None:
            raise InvalidResourceStateError(
                f"{resource!r} cannot refer to {target!r}, which has no id yet"
            )
        builder.add(target.type, target.id)

    def _build_resource(
        self,
        builder: ResourceReprBuilder,
        resource: Resource,
        options: SerializationOptions,
    ) -> None:
        dirty_attributes = resource.dirty_attributes
        for attr_descr in resource.descriptor.attributes.values():
            if not resource.is_set(attr_descr.name):
                continue
            if options.dirty_attributes_only and attr_descr.name not in dirty_attributes:
                continue
            builder.add_attribute(attr_descr.key, resource[attr_descr.name])

        for rel_descr in resource.descriptor.relationships.values():
            if not resource.has_related(rel_descr.name):
                continue
            if rel_descr.type is RelationshipType.TO_ONE:
                if not options.include_to_one:
                    continue
                linkage = builder.relationship(rel_descr.key, rel_descr.type)
                target = resource.get_related(rel_descr.name)
                if target is None:
                    linkage.nullify()
                else:
                    self._link(linkage, resource, typing.cast(Resource, target))
            else:
                if not options.include_to_many:
                    continue
                linkage = builder.relationship(rel_descr.key, rel_descr.type)
                for target in typing.cast(
                    typing.Tuple[Resource, ...], resource.get_related(rel_descr.name)
                ):
                    self._link(linkage, resource, target)

    def __call__(
        self,
        resources: typing.Union[Resource, typing.Iterable[Resource]],
        options: typing.Optional[SerializationOptions] = None,
    ) -> MutableJSONObject:
        """
        Serializes resources.  A single resource yields a singleton document, anything
        else a collection.  By default the resource objects are keyed by their type:
        ``{"posts": {...}}`` for a singleton, ``{"posts": [...], "people": [...]}`` for
        a collection.  With ``key_by_type`` unset they are put under ``data``.

        :param resources: a :py:class:`Resource` or an iterable of them.
        :param Optional[SerializationOptions] options: the options.
        :return: the document as a JSON-compatible dictionary.
        """
        if options is None:
            options = SerializationOptions()
        collection = not isinstance(resources, Resource)
        if isinstance(resources, Resource):
            resources = [resources]
        else:
            resources = list(resources)

        logger.debug("serializing %d resources with %r", len(resources), options)

        if options.key_by_type:
            builders = []
            for resource in resources:
                builder = ResourceReprBuilder(resource.type, resource.id)
                self._build_resource(builder, resource, options)
                builders.append(builder)
            return self._renderer.render_resources_by_type(
                [b() for b in builders], collection=collection
            )

        if not collection:
            resource = resources[0]
            singleton_builder = SingletonDocumentBuilder()
            self._build_resource(
                singleton_builder.set(resource.type, resource.id), resource, options
            )
            return self._renderer(singleton_builder())
        else:
            collection_builder = CollectionDocumentBuilder()
            for resource in resources:
                self._build_resource(
                    collection_builder.next(resource.type, resource.id), resource, options
                )
            return self._renderer(collection_builder())

    def __init__(self, renderer: typing.Optional[ReprRenderer] = None):
        self._renderer = renderer if renderer is not None else ReprRenderer()


def serialize(
    resources: typing.Union[Resource, typing.Iterable[Resource]],
    options: typing.Optional[SerializationOptions] = None,
) -> MutableJSONObject:
    return ResourceSerializer()(resources, options)

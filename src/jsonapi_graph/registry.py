import logging
import typing
from collections import OrderedDict

from .exceptions import DuplicateResourceTypeError, UnknownResourceTypeError
from .models import ResourceDescriptor

logger = logging.getLogger(__name__)


class ResourceTypeRegistry:
    """
    A :py:class:`ResourceTypeRegistry` maps wire type names to
    :py:class:`ResourceDescriptor`\\ s.  Each type name maps to exactly one descriptor.

    The registry is expected to be populated once at startup; it must not be
    mutated while a (de)serialization is in progress.
    """

    _descriptors: "OrderedDict[str, ResourceDescriptor]"

    def register(self, descr: ResourceDescriptor) -> None:
        """
        Registers a resource descriptor under its type name.

        :param ResourceDescriptor descr: the descriptor to register.
        :raises DuplicateResourceTypeError: if the type name is already registered.
        """
        if descr.name in self._descriptors:
            raise DuplicateResourceTypeError(descr.name)
        self._descriptors[descr.name] = descr
        logger.debug("registered resource type %s", descr.name)

    def unregister(self, descr: typing.Union[ResourceDescriptor, str]) -> None:
        """
        Removes a resource descriptor from the registry.

        :param descr: the descriptor to remove, or its type name.
        :raises UnknownResourceTypeError: if the type name is not registered.
        """
        name = descr if isinstance(descr, str) else descr.name
        try:
            del self._descriptors[name]
        except KeyError:
            raise UnknownResourceTypeError(name, tuple(self._descriptors))
        logger.debug("unregistered resource type %s", name)

    def lookup(self, name: str) -> ResourceDescriptor:
        """
        Returns the descriptor registered under the type name.

        :param str name: the wire type name.
        :raises UnknownResourceTypeError: if the type name is not registered.
        """
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownResourceTypeError(name, tuple(self._descriptors))

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __iter__(self) -> typing.Iterator[ResourceDescriptor]:
        return iter(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)

    def __init__(self, descrs: typing.Iterable[ResourceDescriptor] = ()):
        self._descriptors = OrderedDict()
        for descr in descrs:
            self.register(descr)

import typing

from .exceptions import InvalidResourceStateError
from .resource import Resource, ResourceKey


class Store:
    """
    A :py:class:`Store` owns resource instances and guarantees there is at most one
    instance per ``(type, id)`` pair.  It keeps the order in which resources were added.

    Resources without an id may be added as well; they are not reachable through
    :py:meth:`get` until they are given one.
    """

    _resources: typing.List[Resource]
    _index: typing.Dict[ResourceKey, Resource]

    def add(self, resource: Resource) -> Resource:
        """
        Adds a resource to the store.  Adding a resource that is already held is a no-op.

        :raises InvalidResourceStateError: if another instance with the same identity is held.
        """
        key = resource.key
        if key is not None:
            existing = self._index.get(key)
            if existing is resource:
                return resource
            if existing is not None:
                raise InvalidResourceStateError(
                    f"another instance of {resource.type} {resource.id} is already in the store"
                )
            self._index[key] = resource
        elif any(r is resource for r in self._resources):
            return resource
        self._resources.append(resource)
        return resource

    def get(self, type: str, id: str) -> typing.Optional[Resource]:
        return self._index.get((type, id))

    def first(self) -> typing.Optional[Resource]:
        return self._resources[0] if self._resources else None

    def resources_of_type(self, type: str) -> typing.Tuple[Resource, ...]:
        return tuple(r for r in self._resources if r.type == type)

    def remove(self, resource: Resource) -> None:
        for i, r in enumerate(self._resources):
            if r is resource:
                del self._resources[i]
                break
        else:
            raise InvalidResourceStateError(f"{resource!r} is not in the store")
        if resource.key is not None:
            self._index.pop(resource.key, None)

    def assign_id(self, resource: Resource, id: str) -> None:
        """
        Gives a resource held in the store a new id and re-indexes it.

        :raises InvalidResourceStateError: if the resource is not held or the new identity is taken.
        """
        if not any(r is resource for r in self._resources):
            raise InvalidResourceStateError(f"{resource!r} is not in the store")
        new_key = (resource.type, id)
        existing = self._index.get(new_key)
        if existing is not None and existing is not resource:
            raise InvalidResourceStateError(
                f"another instance of {resource.type} {id} is already in the store"
            )
        if resource.key is not None:
            self._index.pop(resource.key, None)
        resource._assign_id(id)
        self._index[new_key] = resource

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Resource):
            return any(r is item for r in self._resources)
        return item in self._index

    def __iter__(self) -> typing.Iterator[Resource]:
        return iter(self._resources)

    def __len__(self) -> int:
        return len(self._resources)

    def __repr__(self) -> str:
        return f"Store({self._resources!r})"

    def __init__(self, resources: typing.Iterable[Resource] = ()):
        self._resources = []
        self._index = {}
        for resource in resources:
            self.add(resource)

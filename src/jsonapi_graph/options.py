import dataclasses


@dataclasses.dataclass(frozen=True)
class SerializationOptions:
    dirty_attributes_only: bool = False
    """
    Only emit the attributes that have been changed since the resource was last synchronized.
    """

    include_to_one: bool = False
    """
    Emit the linkage of to-one relationships.
    """

    include_to_many: bool = False
    """
    Emit the linkage of to-many relationships.
    """

    key_by_type: bool = True
    """
    Key the resource objects by their type.  When unset, they are put under ``data`` instead.
    """


@dataclasses.dataclass(frozen=True)
class DeserializationOptions:
    map_onto_first_resource_in_store: bool = False
    """
    Merge the first primary resource onto the first resource of the supplied store,
    regardless of its identity.  Useful when the server echoes back a resource that
    was created on the client side and did not have an id yet.
    """

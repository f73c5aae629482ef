from .api import JSONAPISerde  # noqa
from .deserializer import DeserializationResult, PaginationData, deserialize  # noqa
from .errors import APIError, ErrorCode, ErrorDetail, decode_error  # noqa
from .exceptions import (  # noqa
    AttributeNotFoundError,
    ConfigurationError,
    DuplicateResourceTypeError,
    InvalidDeclarationError,
    InvalidResourceStateError,
    JSONAPIGraphException,
    RelationshipNotFoundError,
    UnknownResourceTypeError,
)
from .models import (  # noqa
    ResourceAttributeDescriptor,
    ResourceDescriptor,
    ResourceToManyRelationshipDescriptor,
    ResourceToOneRelationshipDescriptor,
)
from .options import DeserializationOptions, SerializationOptions  # noqa
from .registry import ResourceTypeRegistry  # noqa
from .resource import Resource  # noqa
from .serializer import serialize  # noqa
from .store import Store  # noqa

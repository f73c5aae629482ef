import dataclasses
import typing

from .types import JSONValue
from .utils import JSONPointer


class JSONAPISerdeError(Exception):
    pass


@dataclasses.dataclass(frozen=True)
class DeserializationErrorItem:
    pointer: JSONPointer
    message: str

    def __str__(self) -> str:
        return f"{self.pointer}: {self.message}"


class DeserializationError(JSONAPISerdeError):
    payload: JSONValue
    errors: typing.Sequence[DeserializationErrorItem]

    def __str__(self) -> str:
        return "; ".join(str(e) for e in self.errors)

    def __init__(self, payload: JSONValue, errors: typing.Sequence[DeserializationErrorItem]):
        super().__init__(payload, errors)
        self.payload = payload
        self.errors = errors


class UnknownResourceTypeReferenceError(DeserializationError):
    """
    Raised instead of :py:class:`DeserializationError` when at least one of the problems
    is a resource object or a linkage of an unregistered type.
    """

    type_names: typing.Sequence[str]

    def __init__(
        self,
        payload: JSONValue,
        errors: typing.Sequence[DeserializationErrorItem],
        type_names: typing.Sequence[str],
    ):
        super().__init__(payload, errors)
        self.type_names = type_names

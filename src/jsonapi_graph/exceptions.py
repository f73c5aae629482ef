import abc
import typing

from .serde.utils import english_enumerate


class JSONAPIGraphException(Exception, metaclass=abc.ABCMeta):
    pass


class ConfigurationError(JSONAPIGraphException, metaclass=abc.ABCMeta):
    """
    The base class of errors that signal a programming mistake in how resource types
    are declared or registered.  These are meant to abort the setup rather than to be
    caught on a per-call basis.
    """

    @property
    @abc.abstractmethod
    def message(self) -> str:
        ...  # pragma: nocover

    def __str__(self):
        return self.message


class InvalidDeclarationError(ConfigurationError):
    _message: str

    @property
    def message(self) -> str:
        return self._message

    def __init__(self, message: str):
        super().__init__(message)
        self._message = message


class DuplicateResourceTypeError(ConfigurationError):
    name: str

    @property
    def message(self) -> str:
        return f'resource type "{self.name}" is already registered'

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name


class UnknownResourceTypeError(ConfigurationError, LookupError):
    name: str
    known_names: typing.Sequence[str]

    @property
    def message(self) -> str:
        if self.known_names:
            known = english_enumerate(self.known_names)
            return f'no resource known as "{self.name}" (known: {known})'
        else:
            return f'no resource known as "{self.name}"'

    def __init__(self, name: str, known_names: typing.Sequence[str] = ()):
        super().__init__(name)
        self.name = name
        self.known_names = known_names


class InvalidResourceStateError(JSONAPIGraphException):
    message: str

    def __str__(self):
        return self.message

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class JSONAPIMemberError(JSONAPIGraphException, metaclass=abc.ABCMeta):
    resource: "models.ResourceDescriptor"
    name: str

    @property
    @abc.abstractmethod
    def message(self) -> str:
        ...  # pragma: nocover

    def __str__(self):
        return self.message

    def __init__(self, resource: "models.ResourceDescriptor", name: str):
        super().__init__(resource, name)
        self.resource = resource
        self.name = name


class AttributeNotFoundError(JSONAPIMemberError):
    @property
    def message(self):
        return f'no attribute "{self.name}" is declared in "{self.resource.name}"'


class RelationshipNotFoundError(JSONAPIMemberError):
    @property
    def message(self):
        return f'no relationship "{self.name}" is declared in "{self.resource.name}"'


if typing.TYPE_CHECKING:
    from . import models  # noqa: E402

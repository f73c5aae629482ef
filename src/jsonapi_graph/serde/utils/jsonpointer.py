import typing


def _escape(component: str) -> str:
    return component.replace("~", "~0").replace("/", "~1")


def _unescape(component: str) -> str:
    return component.replace("~1", "/").replace("~0", "~")


class JSONPointer:
    """
    An immutable `JSON Pointer <https://tools.ietf.org/html/rfc6901>`_ used to
    tell where in a document a node came from.

    The root is rendered as ``/`` rather than the empty string.
    """

    components: typing.Tuple[str, ...]

    def __truediv__(self, component: str) -> "JSONPointer":
        return JSONPointer(components=self.components + (str(component),))

    def __getitem__(self, index: int) -> "JSONPointer":
        return JSONPointer(components=self.components + (str(index),))

    @property
    def parent(self) -> typing.Optional["JSONPointer"]:
        if not self.components:
            return None
        return JSONPointer(components=self.components[:-1])

    def __eq__(self, other: typing.Any) -> bool:
        if not isinstance(other, JSONPointer):
            return NotImplemented
        return self.components == other.components

    def __hash__(self) -> int:
        return hash(self.components)

    def __str__(self) -> str:
        return "/" + "/".join(_escape(c) for c in self.components)

    def __repr__(self) -> str:
        return f"JSONPointer({str(self)!r})"

    def __init__(
        self,
        pointer: typing.Optional[str] = None,
        *,
        components: typing.Iterable[str] = (),
    ):
        parsed: typing.Tuple[str, ...] = ()
        if pointer is not None:
            if pointer and not pointer.startswith("/"):
                raise ValueError(f"invalid JSON pointer: {pointer!r}")
            parsed = tuple(_unescape(c) for c in pointer[1:].split("/") if c != "")
        self.components = parsed + tuple(components)

import base64
import binascii
import collections.abc
import datetime
import decimal
import enum
import typing

from ..types import JSONValue


def _is_number(value: typing.Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_iso8601_datetime(value: str) -> datetime.datetime:
    # datetime.fromisoformat() only accepts a trailing "Z" since Python 3.11
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.datetime.fromisoformat(value)


class AttributeValueConverter:
    """
    :py:class:`AttributeValueConverter` converts a JSON value found in the ``attributes``
    member of a resource object to a Python value of the type declared for the attribute.

    Failures are reported by raising either :py:class:`TypeError` or :py:class:`ValueError`.
    """

    def _convert_str(self, typ: type, value: JSONValue) -> typing.Any:
        if not isinstance(value, str):
            raise TypeError(f"expected a string, got {value!r}")
        return value

    def _convert_bool(self, typ: type, value: JSONValue) -> typing.Any:
        if not isinstance(value, bool):
            raise TypeError(f"expected a boolean, got {value!r}")
        return value

    def _convert_int(self, typ: type, value: JSONValue) -> typing.Any:
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"expected an integer, got {value!r}")
        return value

    def _convert_float(self, typ: type, value: JSONValue) -> typing.Any:
        if not _is_number(value):
            raise TypeError(f"expected a number, got {value!r}")
        return float(typing.cast(float, value))

    def _convert_decimal(self, typ: type, value: JSONValue) -> typing.Any:
        if not (_is_number(value) or isinstance(value, str)):
            raise TypeError(f"expected a number or a numeric string, got {value!r}")
        try:
            return decimal.Decimal(str(value))
        except decimal.InvalidOperation:
            raise ValueError(f"{value!r} is not a valid decimal")

    def _convert_datetime(self, typ: type, value: JSONValue) -> typing.Any:
        if not isinstance(value, str):
            raise TypeError(f"expected an ISO 8601 string, got {value!r}")
        return parse_iso8601_datetime(value)

    def _convert_date(self, typ: type, value: JSONValue) -> typing.Any:
        if not isinstance(value, str):
            raise TypeError(f"expected an ISO 8601 string, got {value!r}")
        return datetime.date.fromisoformat(value)

    def _convert_bytes(self, typ: type, value: JSONValue) -> typing.Any:
        if not isinstance(value, str):
            raise TypeError(f"expected a base64 string, got {value!r}")
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as e:
            raise ValueError(f"{value!r} is not a valid base64 string ({e})")

    def _convert_dict(self, typ: type, value: JSONValue) -> typing.Any:
        if not isinstance(value, collections.abc.Mapping):
            raise TypeError(f"expected an object, got {value!r}")
        return dict(value)

    def _convert_list(self, typ: type, value: JSONValue) -> typing.Any:
        if isinstance(value, str) or not isinstance(value, collections.abc.Sequence):
            raise TypeError(f"expected an array, got {value!r}")
        return list(value)

    def _convert_enum(self, typ: type, value: JSONValue) -> typing.Any:
        try:
            return typing.cast(typing.Type[enum.Enum], typ)(value)
        except ValueError:
            raise ValueError(f"{value!r} is not a valid value for the enum {typ.__name__}")

    _supported_types: typing.ClassVar[typing.Dict[type, typing.Callable]] = {
        # enum first so that IntEnum and str-based enums are not taken for scalars
        enum.Enum: _convert_enum,
        str: _convert_str,
        bool: _convert_bool,
        int: _convert_int,
        float: _convert_float,
        decimal.Decimal: _convert_decimal,
        datetime.datetime: _convert_datetime,
        datetime.date: _convert_date,
        bytes: _convert_bytes,
        dict: _convert_dict,
        list: _convert_list,
    }

    def __call__(self, typ: typing.Any, allow_null: bool, value: JSONValue) -> typing.Any:
        if value is None:
            if not allow_null:
                raise TypeError("null is not allowed")
            return None

        if typ is typing.Any or typ is object:
            return value

        # fast pass
        c = self._supported_types.get(typ)
        if c is not None:
            return c(self, typ, value)

        for type_, c in self._supported_types.items():
            if isinstance(typ, type) and issubclass(typ, type_):
                return c(self, typ, value)

        if isinstance(typ, type) and isinstance(value, typ):
            return value

        raise TypeError(f"unsupported conversion from {type(value).__name__} to {typ!r}")

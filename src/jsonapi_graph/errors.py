"""
:py:mod:`jsonapi_graph.errors` turns JSON:API error documents into :py:class:`APIError`\\ s.
"""

import collections.abc
import dataclasses
import enum
import json
import logging
import typing

logger = logging.getLogger(__name__)

RawDocument = typing.Union[bytes, bytearray, str, typing.Mapping[str, typing.Any]]


class ErrorCode(enum.IntEnum):
    """
    Codes of the errors found while deserializing a document, as opposed to
    the ones the server reports.
    """

    INVALID_DOCUMENT = 4000
    UNKNOWN_RESOURCE_TYPE = 4001
    RESOURCE_TYPE_MISMATCH = 4002
    IDENTITY_CONFLICT = 4003


@dataclasses.dataclass(frozen=True)
class ErrorDetail:
    pointer: str
    message: str


@dataclasses.dataclass(frozen=True)
class APIError:
    code: int
    message: typing.Optional[str] = None
    details: typing.Tuple[ErrorDetail, ...] = ()

    def __str__(self) -> str:
        if self.message is None:
            return f"error {self.code}"
        return f"error {self.code}: {self.message}"


def load_document(raw: RawDocument) -> typing.Any:
    """
    Decodes a raw document.  Mappings are returned as they are.

    :raises ValueError: if the document is not valid UTF-8 encoded JSON, or nests too deeply
                        to be decoded.
    """
    if isinstance(raw, collections.abc.Mapping):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if not isinstance(raw, str):
        raise TypeError(f"unsupported document type: {type(raw).__name__}")
    try:
        return json.loads(raw)
    except RecursionError:
        raise ValueError("document nests too deeply") from None


def _numeric_code(value: typing.Any) -> typing.Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    # str.isdigit() also holds for superscripts and other non-decimal digits
    if isinstance(value, str) and value.isascii() and value.isdigit():
        try:
            return int(value)
        except ValueError:
            # beyond sys.get_int_max_str_digits()
            return None
    return None


def error_from_document(document: typing.Any, fallback_status_code: int) -> APIError:
    """
    Builds an :py:class:`APIError` out of the first entry of the ``errors`` member of
    an already decoded document.  Only that entry is taken into account.
    """
    errors = (
        document.get("errors") if isinstance(document, collections.abc.Mapping) else None
    )
    if (
        isinstance(errors, str)
        or not isinstance(errors, collections.abc.Sequence)
        or not errors
        or not isinstance(errors[0], collections.abc.Mapping)
    ):
        logger.debug("no error object available; falling back to %d", fallback_status_code)
        return APIError(code=fallback_status_code)

    error = errors[0]
    code = _numeric_code(error.get("id"))
    if code is None:
        code = _numeric_code(error.get("code"))
    title = error.get("title")
    return APIError(
        code=code if code is not None else fallback_status_code,
        message=title if isinstance(title, str) else None,
    )


def decode_error(raw: RawDocument, fallback_status_code: int) -> APIError:
    """
    Decodes an error document.  This never fails: if the document cannot be
    decoded or carries no usable error object, the result bears
    ``fallback_status_code`` and no message.

    :param raw: the error document.
    :param int fallback_status_code: the code to use when the document specifies none,
                                     typically the HTTP status of the response.
    :return: the :py:class:`APIError`.
    """
    try:
        document = load_document(raw)
    except (TypeError, ValueError) as e:
        logger.warning("failed to decode an error document (%s)", e)
        return APIError(code=fallback_status_code)
    return error_from_document(document, fallback_status_code)

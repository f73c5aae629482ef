"""
Type aliases for JSON values as produced by :py:func:`json.loads` and consumed by
:py:func:`json.dumps`.
"""

import typing

JSONScalar = typing.Union[bool, int, float, str]
JSONObject = typing.Mapping[str, typing.Any]
MutableJSONObject = typing.MutableMapping[str, typing.Any]
JSONValue = typing.Union[JSONScalar, typing.Sequence[typing.Any], JSONObject, None]

LINK_MEMBERS: typing.Sequence[typing.Tuple[str, str]] = (
    ("self", "self_"),
    ("related", "related"),
    ("first", "first"),
    ("prev", "prev"),
    ("next", "next"),
    ("last", "last"),
)
"""
Pairs of a member name in a links object and the corresponding attribute of
:py:class:`~jsonapi_graph.serde.models.LinksRepr`.
"""

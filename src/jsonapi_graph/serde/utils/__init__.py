from .jsonpointer import JSONPointer  # noqa
from .formatting import english_enumerate, quote  # noqa
from .converter import AttributeValueConverter, parse_iso8601_datetime  # noqa

"""Typed access to playlist tag values."""

import re
import struct
from typing import Any

from .errors import HeaderAccessError

_INT_REGEX = re.compile(r"[+-]?[0-9]+")
_ATTRIBUTE_SPLIT_REGEX = re.compile(r" *, *")
_VALID_PRECISIONS = (32, 64)


class HeaderValue:
    """The value part of a '#NAME:VALUE' tag line.

    The raw string is kept as is; the accessors parse it on demand into the
    sub-grammars that M3U8 tags use.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str = "") -> None:
        """Wrap a raw tag value."""
        self._value = value

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"HeaderValue({self._value!r})"

    def __eq__(self, other: Any) -> bool:  # noqa: ANN401 Anything can be compared
        if isinstance(other, HeaderValue):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    @property
    def value(self) -> str:
        """The raw value."""
        return self._value

    def as_bool(self) -> bool:
        """True for 'yes' or 'true' in any case, otherwise False."""
        return self._value.lower() in ("yes", "true")

    def as_float(self, precision: int = 64) -> float:
        """Parse as a float of the given bit size."""
        _check_precision(precision)

        if self._value != self._value.strip() or "_" in self._value:
            msg = f"Header value '{self._value}' is not a float"
            raise HeaderAccessError(msg)

        try:
            number = float(self._value)
        except ValueError:
            msg = f"Header value '{self._value}' is not a float"
            raise HeaderAccessError(msg) from None

        if precision == 32:  # noqa: PLR2004 Bit size
            try:
                number = struct.unpack("f", struct.pack("f", number))[0]
            except OverflowError:
                msg = f"Header value '{self._value}' is out of range for a {precision} bit float"
                raise HeaderAccessError(msg) from None

        return number

    def as_int(self, precision: int = 64) -> int:
        """Parse as a base 10 signed integer of the given bit size."""
        _check_precision(precision)

        if not _INT_REGEX.fullmatch(self._value):
            msg = f"Header value '{self._value}' is not an integer"
            raise HeaderAccessError(msg)

        number = int(self._value)
        limit = 2 ** (precision - 1)
        if not -limit <= number < limit:
            msg = f"Header value '{self._value}' is out of range for a {precision} bit integer"
            raise HeaderAccessError(msg)

        return number

    def as_range(self) -> tuple[int, int]:
        """Parse 'start@end', anything unexpected gives (0, 0)."""
        start, sep, end = self._value.partition("@")
        if not sep or not _INT_REGEX.fullmatch(start) or not _INT_REGEX.fullmatch(end):
            return 0, 0

        return int(start), int(end)

    def as_param(self) -> tuple[str, "HeaderValue"]:
        """Parse 'key=value'."""
        key, sep, value = self._value.partition("=")
        if not sep:
            msg = f"Header value '{self._value}' is not a key=value parameter"
            raise HeaderAccessError(msg)

        return key, HeaderValue(value)

    def as_attribute_set(self) -> dict[str, "HeaderValue"]:
        """Parse 'KEY=VALUE, KEY=VALUE', the last duplicate key wins."""
        attributes: dict[str, HeaderValue] = {}

        for piece in _ATTRIBUTE_SPLIT_REGEX.split(self._value):
            key, value = HeaderValue(piece).as_param()
            attributes[key] = value

        return attributes


def parse_header_line(line: str) -> tuple[str, HeaderValue]:
    """Split a '#NAME:VALUE' tag line, a tag with no ':' has an empty value."""
    name, _, value = line.removeprefix("#").partition(":")
    return name, HeaderValue(value)


def _check_precision(precision: int) -> None:
    if precision not in _VALID_PRECISIONS:
        msg = f"Unsupported precision {precision}, must be one of {_VALID_PRECISIONS}"
        raise ValueError(msg)

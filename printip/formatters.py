"""
Dot-separated formatters for each rendering category.

Top-level fixed-width integers are split into bytes, while elements of
sequences and tuples are always converted plainly, even when they are
fixed-width integers themselves:

    UInt32(3232235521)          -> 192.168.0.1
    (UInt32(3232235521), 7)     -> 3232235521.7

fmt_ip() dispatches by type through renderer_for(), which binds one formatter
per type and rejects unsupported types at binding time.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import ctypes
import functools
from typing import Any, Callable, Iterable

# Local ----------------------------------------------------------------------------------------------------------------
from .fixed import to_octets
from .traits import Category, UnsupportedTypeError, classify, numeric_width

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = [
    "fmt_ip",
    "fmt_numeric",
    "fmt_sequence",
    "fmt_text",
    "fmt_tuple",
    "renderer_for",
]

SEPARATOR = "."


# Methods --------------------------------------------------------------------------------------------------------------


def fmt_ip(value: Any) -> str:
    """Format any supported value as a dot-separated string, without a line terminator.

    Dispatch Logic:
        - list, deque      → fmt_sequence()
        - tuple            → fmt_tuple()
        - str, UserString  → fmt_text()
        - fixed-width int  → fmt_numeric()

    Raises:
        UnsupportedTypeError: If type(value) matches no category.

    Examples:
        >>> from printip.fixed import UInt32
        >>> fmt_ip(UInt32(3232235521))
        '192.168.0.1'
        >>> fmt_ip([10, 0, 0, 1])
        '10.0.0.1'
        >>> fmt_ip((172, 16, 254, 1))
        '172.16.254.1'
        >>> fmt_ip("::1")
        '::1'
    """
    return renderer_for(type(value))(value)


def renderer_for(tp: type) -> Callable[[Any], str]:
    """
    Bind the formatter for a type.

    Resolving the formatter ahead of use moves the rejection of unsupported
    types to the binding point:

        >>> from printip.fixed import UInt16
        >>> port = renderer_for(UInt16)
        >>> port(UInt16(8080))
        '31.144'

    Raises:
        UnsupportedTypeError: If tp matches no category.
    """
    category = classify(tp)

    if category is Category.SEQUENCE:
        return fmt_sequence
    if category is Category.TUPLE:
        return fmt_tuple
    if category is Category.TEXT:
        return fmt_text

    width = numeric_width(tp)
    return functools.partial(fmt_numeric, width=width)


def fmt_sequence(value: Iterable[Any]) -> str:
    """Join elements in iteration order. An empty sequence gives an empty string."""
    return SEPARATOR.join(_fmt_plain(item) for item in value)


def fmt_tuple(value: tuple) -> str:
    """Join tuple positions in declaration order, the first one without a leading dot."""
    return SEPARATOR.join(_fmt_plain(item) for item in value)


def fmt_text(value: Any) -> str:
    return str(value)


def fmt_numeric(value: Any, width: int | None = None) -> str:
    """
    Format a fixed-width integer as its bytes, most significant first.

    The bytes come from the two's-complement bit pattern of the value, so
    signed values are not shown by magnitude: Int8(-1) gives '255' and
    Int16(-2) gives '255.254'.

    Args:
        value: Fixed-width integral value.
        width: Width in bytes. Detected from the type of value if None.

    Raises:
        UnsupportedTypeError: If width is None and type(value) has no fixed width.
    """
    if width is None:
        width = numeric_width(type(value))
        if width is None:
            raise UnsupportedTypeError(type(value), "no fixed byte width")
    return SEPARATOR.join(str(octet) for octet in to_octets(value, width))


# Private Methods ------------------------------------------------------------------------------------------------------


def _fmt_plain(item: Any) -> str:
    """Plain text of an aggregate element: str() for everything, .value for ctypes scalars."""
    if isinstance(item, ctypes._SimpleCData):
        return str(item.value)
    return str(item)

"""
Print values as IP-address-like dotted strings.

    >>> from printip.fixed import UInt32, Int8
    >>> from printip.render import render
    >>> render(UInt32(3232235521))
    192.168.0.1
    '192.168.0.1'
    >>> render(Int8(-1))
    255
    '255'
    >>> render([192, 168, 0, 1])
    192.168.0.1
    '192.168.0.1'

render() is declared with overloads, one per category, so a static type
checker flags unsupported arguments before the code runs. At runtime the same
types are rejected with UnsupportedTypeError before anything is written.

The overloads name the built-in shapes only. NumPy integer scalars and types
added with printip.traits.register() render at runtime but are not covered
statically; an overload on SupportsIndex would also admit plain int, which has
no fixed width. Call fmt_ip() or renderer_for() for those types when running a
type checker in strict mode.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import ctypes
import sys
import threading
from collections import UserString, deque
from typing import IO, Any, overload

# Local ----------------------------------------------------------------------------------------------------------------
from .fixed import FixedInt
from .formatters import fmt_ip

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["render", "print_ip"]

# Serializes writes so concurrent callers never interleave partial lines
_output_lock = threading.Lock()


# Methods --------------------------------------------------------------------------------------------------------------


@overload
def render(value: list[Any] | deque[Any], *, file: IO[str] | None = None, flush: bool = False) -> str: ...


@overload
def render(value: tuple[Any, ...], *, file: IO[str] | None = None, flush: bool = False) -> str: ...


@overload
def render(value: str | UserString, *, file: IO[str] | None = None, flush: bool = False) -> str: ...


@overload
def render(value: FixedInt | ctypes._SimpleCData, *, file: IO[str] | None = None, flush: bool = False) -> str: ...


def render(value, *, file=None, flush=False):
    """
    Write value as one dot-separated line and return the text.

    Args:
        value: list/deque, tuple, str/UserString, or a fixed-width integer
            (FixedInt, ctypes or numpy integer, or a type registered with
            printip.traits.register).
        file: Text stream to write to, sys.stdout if None.
        flush: Flush the stream after writing.

    Returns:
        The formatted text, without the line terminator.

    Raises:
        UnsupportedTypeError: If the type of value matches no category. Nothing
            is written in that case.
    """
    text = fmt_ip(value)
    stream = sys.stdout if file is None else file
    with _output_lock:
        stream.write(text + "\n")
        if flush:
            stream.flush()
    return text


print_ip = render

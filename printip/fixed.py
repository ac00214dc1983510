"""
Fixed-width integral types and their byte representation.

Python ints have arbitrary precision, so the byte width of a value is carried
by its type: the FixedInt family defined here, ctypes integer types, or NumPy
integer scalars. Detection works on types and never imports third-party
libraries.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import ctypes
import operator
import sys
from typing import Any, ClassVar, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = [
    "FixedInt",
    "Int8",
    "UInt8",
    "Int16",
    "UInt16",
    "Int32",
    "UInt32",
    "Int64",
    "UInt64",
    "byte_width",
    "raw_int",
    "to_unsigned",
    "to_octets",
]

# ctypes format codes of integer simple types: signed/unsigned char, short, int, long, long long
CTYPES_INT_CODES = frozenset("bBhHiIlLqQ")


# Private Methods ------------------------------------------------------------------------------------------------------


def _whole_bytes(bits: Any) -> bool:
    return isinstance(bits, int) and not isinstance(bits, bool) and bits > 0 and bits % 8 == 0


# Classes --------------------------------------------------------------------------------------------------------------


class FixedInt(int):
    """
    Integer with a fixed bit width and signedness.

    Values are range-checked at construction, so an out-of-range value is
    rejected where it is created rather than silently misrendered later.
    Arithmetic returns plain int, as with any int subclass.

    Examples:
        >>> UInt32(3232235521)
        UInt32(3232235521)
        >>> str(Int8(-1))
        '-1'
        >>> UInt8(256)
        Traceback (most recent call last):
            ...
        OverflowError: UInt8 out of range [0, 255]: 256
    """

    bits: ClassVar[int] = 0
    signed: ClassVar[bool] = True

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "bits" in cls.__dict__ and not _whole_bytes(cls.bits):
            raise TypeError(f"{class_name(cls)}.bits must be a positive multiple of 8, got {cls.bits!r}")

    def __new__(cls, value: Any = 0) -> Self:
        if not _whole_bytes(cls.bits):
            raise TypeError(f"{class_name(cls)} has no bit width, use a concrete subclass like UInt32")
        if isinstance(value, (bool, float)):
            raise TypeError(f"{class_name(cls)} requires an integral value, got {class_name(value)}")
        value = operator.index(value)
        if not cls.min_value() <= value <= cls.max_value():
            raise OverflowError(
                f"{class_name(cls)} out of range [{cls.min_value()}, {cls.max_value()}]: {value}"
            )
        return super().__new__(cls, value)

    @classmethod
    def min_value(cls) -> int:
        return -(1 << (cls.bits - 1)) if cls.signed else 0

    @classmethod
    def max_value(cls) -> int:
        return (1 << (cls.bits - 1)) - 1 if cls.signed else (1 << cls.bits) - 1

    @classmethod
    def wrap(cls, value: Any) -> Self:
        """Truncate value to this width, like a C integer cast: UInt8.wrap(300) == 44."""
        value = operator.index(value) & ((1 << cls.bits) - 1)
        if cls.signed and value > cls.max_value():
            value -= 1 << cls.bits
        return cls(value)

    def __repr__(self) -> str:
        return f"{class_name(self)}({int(self)})"

    # int subclasses inherit object.__str__, which would route through __repr__
    __str__ = int.__repr__


class Int8(FixedInt):
    bits = 8


class UInt8(FixedInt):
    bits = 8
    signed = False


class Int16(FixedInt):
    bits = 16


class UInt16(FixedInt):
    bits = 16
    signed = False


class Int32(FixedInt):
    bits = 32


class UInt32(FixedInt):
    bits = 32
    signed = False


class Int64(FixedInt):
    bits = 64


class UInt64(FixedInt):
    bits = 64
    signed = False


# Methods --------------------------------------------------------------------------------------------------------------


def byte_width(tp: type) -> int | None:
    """
    Return the width in bytes of a fixed-width integral type, or None.

    Detection Priority:
        1. FixedInt subclasses with a bit width
        2. ctypes integer types (c_int8 ... c_uint64, c_int, c_long, ...)
        3. NumPy integer scalar types (np.int8 ... np.uint64, np.intc, ...)

    bool, plain int and float have no fixed integral width and return None.

    Examples:
        >>> byte_width(UInt32)
        4
        >>> byte_width(ctypes.c_int16)
        2
        >>> byte_width(int) is None
        True
    """
    if not isinstance(tp, type):
        return None

    # Priority 1: own fixed-width ints
    if issubclass(tp, FixedInt):
        return tp.bits // 8 if _whole_bytes(tp.bits) else None

    # Priority 2: ctypes simple integer types, c_bool and c_char are excluded by format code
    if issubclass(tp, ctypes._SimpleCData):
        if getattr(tp, "_type_", None) in CTYPES_INT_CODES:
            return ctypes.sizeof(tp)
        return None

    # Priority 3: NumPy integer scalars, detected without importing numpy.
    # If the type comes from numpy, numpy is already in sys.modules.
    if getattr(tp, "__module__", "") == "numpy":
        np = sys.modules.get("numpy")
        if np is None:
            return None
        try:
            dtype = np.dtype(tp)
        except TypeError:
            return None
        if dtype.kind in ("i", "u"):
            return int(dtype.itemsize)

    return None


def raw_int(value: Any) -> int:
    """Extract the integral value of a fixed-width scalar as plain int."""
    if isinstance(value, ctypes._SimpleCData):
        return int(value.value)
    return operator.index(value)


def to_unsigned(value: Any, width: int) -> int:
    """
    Reinterpret value as the same-width unsigned integer.

    Negative values map to their two's-complement bit pattern:
    to_unsigned(-1, 1) == 255, to_unsigned(-2, 2) == 65534.
    """
    if width <= 0:
        raise ValueError(f"width must be a positive number of bytes, got {width}")
    return raw_int(value) & ((1 << (8 * width)) - 1)


def to_octets(value: Any, width: int) -> tuple[int, ...]:
    """Return the bytes of value, most significant first, as ints in [0, 255]."""
    return tuple(to_unsigned(value, width).to_bytes(width, "big"))


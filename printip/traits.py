"""
Type traits that sort types into rendering categories.

Classification looks at types only, never at the contents of a value, and the
result for every type is computed once and cached. Precedence is fixed:

    SEQUENCE > TUPLE > TEXT > NUMERIC

so a type that is both text-like and byte-pattern representable always
classifies as TEXT. Types outside the built-in shapes can join a category
through register().
"""

# Standard library -----------------------------------------------------------------------------------------------------
import ctypes
import functools
import logging
import threading
from collections import UserString, deque
from enum import StrEnum, unique

# Local ----------------------------------------------------------------------------------------------------------------
from .fixed import FixedInt, byte_width
from .utils import class_name

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = [
    "Category",
    "UnsupportedTypeError",
    "classify",
    "is_numeric_type",
    "is_sequence_type",
    "is_text_type",
    "is_tuple_type",
    "numeric_width",
    "register",
    "unregister",
]

logger = logging.getLogger(__name__)

SEQUENCE_TYPES = (list, deque)
TEXT_TYPES = (str, UserString)

# Registered types: {type: (Category, width or None)}
_registry: dict[type, tuple["Category", int | None]] = {}
_registry_lock = threading.Lock()

# Bumped on every registry change; part of the classification cache key
_generation = 0


# Classes --------------------------------------------------------------------------------------------------------------


@unique
class Category(StrEnum):
    """
    Shape categories, listed in precedence order.

    Attributes:
        SEQUENCE (str) : list or deque, elements joined in iteration order
        TUPLE (str)    : fixed-arity tuple, positions joined in declaration order
        TEXT (str)     : str-like, emitted unchanged
        NUMERIC (str)  : fixed-width integral, bytes joined most significant first
    """
    SEQUENCE = "sequence"
    TUPLE = "tuple"
    TEXT = "text"
    NUMERIC = "numeric"


class UnsupportedTypeError(TypeError):
    """Raised when a type matches none of the rendering categories."""

    def __init__(self, tp: type, reason: str | None = None):
        self.type = tp
        message = (
            f"cannot render {class_name(tp, fully_qualified=True)}: expected list or deque, tuple, "
            f"str or UserString, or a fixed-width integer (FixedInt, ctypes or numpy integer)"
        )
        if reason:
            message = f"{message}; {reason}"
        super().__init__(message)


# Methods --------------------------------------------------------------------------------------------------------------


def register(tp: type, category: Category | str, *, width: int | None = None) -> None:
    """
    Add a type to a rendering category.

    Registration is how a user type opts into a category it does not reach
    structurally, for example a custom container as SEQUENCE or a bit-field
    wrapper as NUMERIC. Subclasses of a registered type inherit the registration.
    The type must support what its category needs, so a bad registration fails
    here rather than on the first render.

    Args:
        tp: The class to register.
        category: Target category.
        width: Width in bytes, required for NUMERIC and rejected otherwise.

    Raises:
        TypeError: If tp is not a class.
        ValueError: If category is unknown or width does not fit the category.
        UnsupportedTypeError: If tp lacks __iter__ (SEQUENCE, TUPLE) or
            __index__ (NUMERIC, unless tp is a ctypes scalar).

    Examples:
        >>> class Octets(list): ...
        >>> register(Octets, Category.SEQUENCE)
        >>> class Port:
        ...     def __init__(self, n): self.n = n
        ...     def __index__(self): return self.n
        >>> register(Port, "numeric", width=2)
    """
    global _generation

    if not isinstance(tp, type):
        raise TypeError(f"tp must be a class, got {class_name(tp)}")
    category = Category(category)

    if category is Category.NUMERIC:
        if not isinstance(width, int) or isinstance(width, bool) or width <= 0:
            raise ValueError(f"NUMERIC registration requires a positive byte width, got {width!r}")
        if not hasattr(tp, "__index__") and not issubclass(tp, ctypes._SimpleCData):
            raise UnsupportedTypeError(tp, "NUMERIC registration requires __index__")
    elif width is not None:
        raise ValueError(f"width applies to NUMERIC registrations only, not {category}")
    elif category in (Category.SEQUENCE, Category.TUPLE) and not hasattr(tp, "__iter__"):
        raise UnsupportedTypeError(tp, f"{category.upper()} registration requires __iter__")

    with _registry_lock:
        _registry[tp] = (category, width)
        _generation += 1
        _classify.cache_clear()
    logger.debug("registered %s as %s (width=%s)", class_name(tp, fully_qualified=True), category, width)


def unregister(tp: type) -> None:
    """Remove a registration made by register(). Unknown types are ignored."""
    global _generation

    with _registry_lock:
        removed = _registry.pop(tp, None)
        _generation += 1
        _classify.cache_clear()
    if removed is not None:
        logger.debug("unregistered %s", class_name(tp, fully_qualified=True))


def is_sequence_type(tp: type) -> bool:
    return issubclass(tp, SEQUENCE_TYPES) or _registered(tp, Category.SEQUENCE) is not None


def is_tuple_type(tp: type) -> bool:
    return issubclass(tp, tuple) or _registered(tp, Category.TUPLE) is not None


def is_text_type(tp: type) -> bool:
    return issubclass(tp, TEXT_TYPES) or _registered(tp, Category.TEXT) is not None


def is_numeric_type(tp: type) -> bool:
    return numeric_width(tp) is not None


def numeric_width(tp: type) -> int | None:
    """Byte width of a NUMERIC type: registered width first, then structural detection."""
    entry = _registered(tp, Category.NUMERIC)
    if entry is not None:
        return entry[1]
    return byte_width(tp)


def classify(tp: type) -> Category:
    """
    Return the rendering category of a type.

    The predicate chain is evaluated in precedence order and the first match
    wins; NUMERIC is the fallback and only accepts fixed-width integral types.
    Results are cached per type and registry generation, so a classification
    computed while register() runs is never served afterwards.

    Raises:
        UnsupportedTypeError: If no category matches, e.g. for plain int, float,
            dict, set, bytes or dataclasses.

    Examples:
        >>> classify(list)
        <Category.SEQUENCE: 'sequence'>
        >>> classify(str)
        <Category.TEXT: 'text'>
    """
    if not isinstance(tp, type):
        raise TypeError(f"classify() expects a class, got {class_name(tp)}")
    return _classify(tp, _generation)


# Private Methods ------------------------------------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def _classify(tp: type, generation: int) -> Category:
    if is_sequence_type(tp):
        category = Category.SEQUENCE
    elif is_tuple_type(tp):
        category = Category.TUPLE
    elif is_text_type(tp):
        category = Category.TEXT
    elif is_numeric_type(tp):
        category = Category.NUMERIC
    else:
        raise UnsupportedTypeError(tp, _rejection_hint(tp))

    logger.debug("classified %s as %s", class_name(tp, fully_qualified=True), category)
    return category


def _registered(tp: type, category: Category) -> tuple[Category, int | None] | None:
    """Look up a registration for tp or its nearest registered base in the given category."""
    for base in tp.__mro__:
        entry = _registry.get(base)
        if entry is not None:
            return entry if entry[0] is category else None
    return None


def _rejection_hint(tp: type) -> str | None:
    if tp is bool:
        return "bool has no fixed byte width"
    if issubclass(tp, FixedInt):
        return f"{class_name(tp)} declares no bit width"
    if issubclass(tp, int):
        return "plain int has no fixed width, wrap it in a FixedInt such as UInt32"
    return None

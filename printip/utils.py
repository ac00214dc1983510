"""
Printip utilities shared across the package.

Contains helpers used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself,
    so both `class_name(10)` and `class_name(int)` return 'int'.
    Builtins are never qualified with their module.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the module-qualified name for non-builtin classes.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> from collections import deque
        >>> class_name(deque, fully_qualified=True)
        'collections.deque'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    name = cls.__name__

    if cls.__module__ == "builtins" or not fully_qualified:
        return name
    return f"{cls.__module__}.{name}"


"""
Import-time rejection of unrenderable parameter annotations.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import functools
import inspect
import types
import typing
from typing import Any, Callable, TypeVar

# Local imports --------------------------------------------------------------------------------------------------------
from .traits import Category, UnsupportedTypeError, classify
from .utils import class_name

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["renderable_params"]

UNION_TYPES = (typing.Union, types.UnionType)


# Methods --------------------------------------------------------------------------------------------------------------


def renderable_params(func=None, *, skip: typing.Iterable[str] = None, only: typing.Iterable[str] = None):
    """
    Decorator that checks, at decoration time, that annotated parameters are renderable.

    Every selected parameter annotation is resolved to a rendering category
    while the decorated function is being defined, normally at module import.
    A parameter annotated with a type that render() cannot handle makes the
    import fail instead of a later call. The function itself is returned
    unchanged, with the resolved categories in ``__printip_categories__``.

    Args:
        func: The function to check (automatically provided when used as @renderable_params).
        skip: Parameter names to exclude from the check. Cannot be used with `only`.
        only: Parameter names to check (all others ignored). Cannot be used with `skip`.

    Returns:
        The original function.

    Raises:
        UnsupportedTypeError: If a checked annotation names an unrenderable type.
        ValueError: If both `skip` and `only` are provided, or they name unknown parameters.

    Examples:
        Check all parameters:

            @renderable_params
            def log_peer(addr: UInt32, name: str) -> None:
                render(addr)

        Rejected while the module is imported:

            @renderable_params
            def log_peer(addr: dict) -> None:  # UnsupportedTypeError
                ...

    Notes:
        - Only parameters with type hints are checked; ``typing.Any`` and TypeVars are ignored
        - Generic aliases resolve to their origin, ``list[int]`` checks ``list``
        - ``Optional`` and unions require every non-None member to be renderable
        - ``self``/``cls`` and the return annotation are never checked
    """
    if func is None:
        return functools.partial(renderable_params, skip=skip, only=only)

    if skip is not None and only is not None:
        raise ValueError(
            f"@renderable_params: Cannot use both 'skip' and 'only' on function '{func.__name__}'."
        )

    annotations = typing.get_type_hints(func)
    params = inspect.signature(func).parameters

    skip_set = set(skip) if skip else set()
    only_set = set(only) if only is not None else None

    for label, names in (("only", only_set), ("skip", skip_set)):
        invalid = (names or set()) - set(params)
        if invalid:
            raise ValueError(
                f"@renderable_params on '{func.__name__}': '{label}' contains invalid parameter names: {invalid}"
            )

    categories: dict[str, Category | tuple[Category, ...]] = {}
    for name in params:
        if name in ("self", "cls") or name not in annotations:
            continue
        if only_set is not None and name not in only_set:
            continue
        if name in skip_set:
            continue

        resolved = _resolve_hint(annotations[name], func, name)
        if resolved is not None:
            categories[name] = resolved

    func.__printip_categories__ = categories
    return func


# Private Methods ------------------------------------------------------------------------------------------------------


def _resolve_hint(hint: Any, func: Callable, name: str) -> Category | tuple[Category, ...] | None:
    """Resolve a type hint to its category, or a tuple of categories for unions."""
    if hint is Any or isinstance(hint, TypeVar):
        return None

    origin = typing.get_origin(hint)

    if origin in UNION_TYPES:
        members = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        resolved = tuple(_resolve_hint(arg, func, name) for arg in members)
        return None if any(r is None for r in resolved) else resolved

    # list[int] -> list, tuple[int, ...] -> tuple
    check_type = origin if origin is not None else hint

    if not isinstance(check_type, type):
        raise UnsupportedTypeError(
            type(check_type), f"parameter '{name}' of '{func.__name__}' is annotated with {check_type!r}"
        )
    try:
        return classify(check_type)
    except UnsupportedTypeError as e:
        raise UnsupportedTypeError(
            check_type, f"parameter '{name}' of '{func.__name__}' expects {class_name(check_type)}"
        ) from e

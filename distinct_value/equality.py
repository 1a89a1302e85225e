"""
Equality Policy
===============

The equality policy decides whether an incoming value is a duplicate of the
cached one. It is a plain function value injected at construction time and
never reassigned afterwards.
"""

from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")

Equals = Callable[[T, T], bool]


def default_equals(previous: Any, next: Any) -> bool:
    """
    Structural equality with an identity fallback.

    ``==`` is used first. Types whose comparison raises, or does not produce
    a plain truth value (numpy arrays compare elementwise, for instance),
    fall back to identity.
    """
    if previous is next:
        return True
    try:
        result = previous == next
        if isinstance(result, bool):
            return result
        return bool(result)
    except (TypeError, ValueError):
        return False


DEFAULT_EQUALS: Equals = default_equals


def resolve_equals(equals: Optional[Equals]) -> Equals:
    """Return ``equals`` or the default policy, rejecting non-callables."""
    if equals is None:
        return DEFAULT_EQUALS
    if not callable(equals):
        raise TypeError(f"equals must be callable, got {type(equals).__name__}")
    return equals

"""
Value Cache
===========

The latest-value cell shared by the broadcast subject, its listeners and the
synchronous ``value`` accessor.
"""

from typing import Any, Generic, TypeVar

from .errors import EmptyValueError

T = TypeVar("T")


class _NOT_SET:
    """Sentinel for 'no seed value' (``None`` is a legal element)."""

    def __repr__(self):
        return "NOT_SET"


NOT_SET: Any = _NOT_SET()


class ValueCell(Generic[T]):
    """
    Holds the most recently accepted value.

    Once a value has been written the cell never becomes empty again.
    """

    __slots__ = ("_value", "_has_value")

    def __init__(self, seed_value: Any = NOT_SET) -> None:
        self._has_value = seed_value is not NOT_SET
        self._value = seed_value if self._has_value else None

    @property
    def has_value(self) -> bool:
        return self._has_value

    @property
    def value(self) -> T:
        """The cached value; raises EmptyValueError when nothing is cached."""
        if not self._has_value:
            raise EmptyValueError()
        return self._value

    def value_or(self, default: Any = None) -> Any:
        return self._value if self._has_value else default

    def write(self, value: T) -> None:
        self._value = value
        self._has_value = True

    def __repr__(self) -> str:
        if not self._has_value:
            return "ValueCell(<empty>)"
        return f"ValueCell({self._value!r})"

"""
DistinctValueStream - Abstract Base for Value-Caching Distinct Streams
======================================================================

This module provides the DistinctValueStream abstract base class shared by
every stream in the package that exposes its latest value synchronously and
suppresses consecutive duplicates according to an equality policy.
"""

from abc import ABC, abstractmethod
from typing import Any, TypeVar

from reactivex import Observable

from ..equality import Equals

T = TypeVar("T")


class DistinctValueStream(Observable[T], ABC):
    """
    An observable with synchronous access to its latest distinct value.

    Subclasses must implement:
    - `value` - the latest value, raising EmptyValueError when there is none
    - `has_value` - whether a value is cached
    - `equals` - the equality policy used to suppress duplicates

    Streams that can be listened to by several observers sharing a single
    upstream subscription override `is_broadcast` to return True.
    """

    @property
    @abstractmethod
    def value(self) -> T:
        pass

    @property
    @abstractmethod
    def has_value(self) -> bool:
        pass

    @property
    @abstractmethod
    def equals(self) -> Equals:
        pass

    @property
    def is_broadcast(self) -> bool:
        return False

    def value_or(self, default: Any = None) -> Any:
        """Return the latest value, or ``default`` when nothing is cached."""
        return self.value if self.has_value else default

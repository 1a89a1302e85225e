"""
DistinctValue Errors
====================

Exception hierarchy shared by every layer of the package.

Errors raised at a call site (reading an empty cache, activating an adapter
twice, pushing an error into the cache layer) derive from
``DistinctValueError``. Errors produced by the upstream producer are never
wrapped: they reach listeners verbatim through the Rx ``on_error`` channel.
"""

from typing import Any


class DistinctValueError(Exception):
    """Base class for all errors raised by distinct_value."""

    pass


class EmptyValueError(DistinctValueError, LookupError):
    """Synchronous value read before any value has been cached."""

    def __init__(self, message: str = "No value has been cached yet") -> None:
        super().__init__(message)


class ReuseError(DistinctValueError):
    """A lifecycle mode was activated on an adapter that is already in use."""

    pass


class ValueCacheStateError(DistinctValueError, RuntimeError):
    """Invalid operation on the value cache / distinct filter layer."""

    pass


class ClosedSubjectError(DistinctValueError, RuntimeError):
    """Event pushed into a broadcast subject that has already been closed."""

    pass


class PolicyEvaluationError(DistinctValueError):
    """
    The equality policy raised while comparing two values.

    The original exception is available as ``__cause__``.

    Attributes:
        previous: The value held by the cache when the comparison failed.
        incoming: The value that was being filtered.
    """

    def __init__(self, previous: Any, incoming: Any, cause: BaseException) -> None:
        super().__init__(
            f"Equality policy failed comparing {previous!r} with {incoming!r}: {cause}"
        )
        self.previous = previous
        self.incoming = incoming
        self.__cause__ = cause

"""
Distinct Filter
===============

This module wraps the write path of a ValueSubject so that a value is only
cached and broadcast when the equality policy reports it as different from
the value currently cached ("distinct until changed").
"""

import logging
from typing import Generic, TypeVar

from .equality import Equals
from .errors import PolicyEvaluationError, ValueCacheStateError
from .subject import ValueSubject

T = TypeVar("T")

logger = logging.getLogger(__name__)


class DistinctFilter(Generic[T]):
    """
    Accepts values into a ValueSubject only when they differ from its cache.

    The filter is the only writer of the subject's value cell. Errors cannot
    be written through it: upstream errors go straight to the subject's
    error channel.
    """

    __slots__ = ("_subject", "_equals")

    def __init__(self, subject: ValueSubject[T], equals: Equals) -> None:
        self._subject = subject
        self._equals = equals

    @property
    def equals(self) -> Equals:
        return self._equals

    def accept(self, incoming: T) -> bool:
        """
        Cache and broadcast ``incoming`` unless it equals the cached value.

        Returns:
            True if the value was accepted, False if it was dropped.

        Raises:
            PolicyEvaluationError: The equality policy raised. The value is
                neither cached nor broadcast.
        """
        subject = self._subject
        if subject.has_value:
            previous = subject.value
            try:
                is_equal = self._equals(previous, incoming)
            except Exception as e:
                raise PolicyEvaluationError(previous, incoming, e) from e
            if is_equal:
                logger.debug("Dropped duplicate value %r", incoming)
                return False

        subject.on_next(incoming)
        return True

    def forward(self, incoming: T) -> None:
        """Cache and broadcast ``incoming`` without comparing it."""
        self._subject.on_next(incoming)

    def add_error(self, error: Exception) -> None:
        """Always raises: errors cannot be stored in the value cache."""
        raise ValueCacheStateError(
            f"Cannot add an error to the value cache: {error!r}"
        )

"""
DistinctValue Operators
=======================

Factory functions and pipeable operators for building distinct value
adapters from plain Rx observables:

    state = source.pipe(publish_value_distinct(0))
    connection = state.connect()

    shared = source.pipe(share_value_distinct())
"""

from typing import Any, Callable, Optional, TypeVar

from reactivex import Observable

from .cache import NOT_SET
from .connectable import DistinctValueConnectableObservable
from .equality import Equals

T = TypeVar("T")


def distinct_value_connectable(
    source: Observable[T],
    seed_value: Any = NOT_SET,
    equals: Optional[Equals] = None,
) -> DistinctValueConnectableObservable[T]:
    """Create an un-activated adapter over ``source``."""
    return DistinctValueConnectableObservable(
        source, seed_value=seed_value, equals=equals
    )


def publish_value_distinct(
    seed_value: Any = NOT_SET,
    equals: Optional[Equals] = None,
) -> Callable[[Observable[T]], DistinctValueConnectableObservable[T]]:
    """
    Publish the source through a distinct value adapter.

    The returned adapter must be activated by the caller, typically with
    ``connect()``. Nothing is cancelled automatically.
    """

    def _publish_value_distinct(
        source: Observable[T],
    ) -> DistinctValueConnectableObservable[T]:
        return distinct_value_connectable(source, seed_value, equals)

    return _publish_value_distinct


def share_value_distinct(
    seed_value: Any = NOT_SET,
    equals: Optional[Equals] = None,
) -> Callable[[Observable[T]], DistinctValueConnectableObservable[T]]:
    """
    Share the source through a ref-counted distinct value adapter.

    Upstream is subscribed while at least one listener is attached.
    """

    def _share_value_distinct(
        source: Observable[T],
    ) -> DistinctValueConnectableObservable[T]:
        return distinct_value_connectable(source, seed_value, equals).ref_count()

    return _share_value_distinct

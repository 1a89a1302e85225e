"""
Broadcast Conversion
====================

Helpers that turn any DistinctValueStream into a broadcast one, either as a
connectable adapter or as a ref-counted shared wrapper that keeps forwarding
``value`` and ``equals`` reads to the wrapped stream.
"""

from typing import Optional, TypeVar

from reactivex import abc
from reactivex import operators as ops

from .cache import NOT_SET
from .connectable import DistinctValueConnectableObservable
from .equality import Equals
from .types import DistinctValueStream

T = TypeVar("T")


class BroadcastDistinctValueStream(DistinctValueStream[T]):
    """
    Shares one subscription to ``source`` among all of its listeners.

    The source is subscribed when the first listener attaches and
    unsubscribed when the last one leaves. ``value``, ``has_value`` and
    ``equals`` are read from the wrapped stream.
    """

    def __init__(self, source: DistinctValueStream[T]) -> None:
        super().__init__()
        self.source = source
        self._shared = source.pipe(ops.share())

    @property
    def value(self) -> T:
        return self.source.value

    @property
    def has_value(self) -> bool:
        return self.source.has_value

    @property
    def equals(self) -> Equals:
        return self.source.equals

    @property
    def is_broadcast(self) -> bool:
        return True

    def _subscribe_core(
        self,
        observer: abc.ObserverBase[T],
        scheduler: Optional[abc.SchedulerBase] = None,
    ) -> abc.DisposableBase:
        return self._shared.subscribe(observer, scheduler=scheduler)


def as_distinct_value_connectable(
    stream: DistinctValueStream[T],
) -> DistinctValueConnectableObservable[T]:
    """
    Convert ``stream`` into a connectable adapter.

    The adapter is seeded with the stream's current value when it has one
    and reuses its equality policy. It does not emit anything until one of
    its lifecycle modes is activated.
    """
    if isinstance(stream, DistinctValueConnectableObservable):
        return stream
    return DistinctValueConnectableObservable(
        stream,
        seed_value=stream.value if stream.has_value else NOT_SET,
        equals=stream.equals,
    )


def as_broadcast_distinct_value_stream(
    stream: DistinctValueStream[T],
) -> DistinctValueStream[T]:
    """Return ``stream`` if it is already broadcast, else a shared wrapper."""
    if stream.is_broadcast:
        return stream
    return BroadcastDistinctValueStream(stream)

"""
DistinctValueConnectableObservable - Multicast Distinct Value Adapter
=====================================================================

This module provides DistinctValueConnectableObservable, which turns a single
upstream observable into a hot, multicast observable that:

- exposes the most recently emitted value synchronously (``value``)
- drops consecutive duplicates according to a pluggable equality policy
- owns at most one upstream subscription at any time

The upstream subscription is controlled by exactly one of three lifecycle
modes, chosen once per instance:

- ``connect()`` - subscribe now, cancel through the returned disposable
- ``ref_count()`` - subscribe on the first listener, cancel on the last
- ``auto_connect()`` - subscribe on the first listener, never cancel
"""

import logging
import threading
from enum import Enum
from typing import Any, Callable, Optional, TypeVar

from reactivex import Observable, abc
from reactivex.disposable import Disposable, SingleAssignmentDisposable

from .cache import NOT_SET
from .distinct import DistinctFilter
from .equality import Equals, resolve_equals
from .errors import PolicyEvaluationError, ReuseError
from .subject import ValueSubject
from .types import DistinctValueStream

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Lifecycle state of a connectable adapter."""

    UNCONNECTED = "unconnected"
    ACTIVE = "active"
    CLOSED = "closed"


class ConnectionMode(Enum):
    """The lifecycle mode an adapter was activated with."""

    MANUAL = "connect"
    REF_COUNT = "ref_count"
    AUTO_CONNECT = "auto_connect"


class DistinctValueConnectableObservable(DistinctValueStream[T]):
    """
    A connectable observable that caches and de-duplicates its values.

    Like a published Rx ``BehaviorSubject``, except that data events equal to
    the previously accepted one are skipped. Equality is decided by the
    ``equals`` policy, ``==`` by default.

    Example:
        ```python
        counter = DistinctValueConnectableObservable(source, seed_value=0)
        counter.subscribe(print)   # prints 0
        connection = counter.connect()
        counter.value              # latest distinct value
        connection.dispose()
        ```
    """

    def __init__(
        self,
        source: Observable[T],
        *,
        seed_value: Any = NOT_SET,
        equals: Optional[Equals] = None,
    ) -> None:
        super().__init__()
        self._source = source
        self._equals = resolve_equals(equals)
        self._subject: ValueSubject[T] = ValueSubject(seed_value)
        self._filter = DistinctFilter(self._subject, self._equals)
        self._state = ConnectionState.UNCONNECTED
        self._mode: Optional[ConnectionMode] = None
        self._upstream: Optional[SingleAssignmentDisposable] = None
        self._lock = threading.RLock()

        # An upstream adapter sharing our policy has already de-duplicated
        # everything after the first value of each subscription.
        self._source_is_distinct = (
            isinstance(source, DistinctValueStream) and source.equals is self._equals
        )

    @classmethod
    def seeded(
        cls,
        source: Observable[T],
        seed_value: T,
        equals: Optional[Equals] = None,
    ) -> "DistinctValueConnectableObservable[T]":
        """Create an adapter whose cache starts with ``seed_value``."""
        return cls(source, seed_value=seed_value, equals=equals)

    @property
    def value(self) -> T:
        """
        The latest accepted value.

        Raises:
            EmptyValueError: No seed was given and upstream has not emitted.
        """
        return self._subject.value

    @property
    def has_value(self) -> bool:
        return self._subject.has_value

    @property
    def equals(self) -> Equals:
        return self._equals

    @property
    def is_broadcast(self) -> bool:
        return True

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def mode(self) -> Optional[ConnectionMode]:
        return self._mode

    @property
    def is_connected(self) -> bool:
        """Whether an upstream subscription is currently alive."""
        return self._upstream is not None

    @property
    def listener_count(self) -> int:
        return self._subject.listener_count

    def connect(
        self, scheduler: Optional[abc.SchedulerBase] = None
    ) -> abc.DisposableBase:
        """
        Subscribe to the upstream observable now.

        Disposing the returned disposable cancels the upstream subscription
        and completes the adapter. The cached value stays readable.

        Raises:
            ReuseError: The adapter has already been activated.
        """
        self._activate(ConnectionMode.MANUAL)
        return self._open_connection(scheduler)

    def ref_count(self) -> "DistinctValueConnectableObservable[T]":
        """
        Subscribe upstream while at least one listener is attached.

        The upstream subscription is created when the listener count goes
        from 0 to 1 and cancelled when it drops back to 0. The cached value
        survives, and the next 0 to 1 transition subscribes again.

        Raises:
            ReuseError: The adapter has already been activated.
        """
        self._activate(ConnectionMode.REF_COUNT)
        self._subject.on_listen = self._subscribe_upstream
        self._subject.on_cancel = self._cancel_upstream
        if self._subject.has_listeners:
            self._subscribe_upstream()
        return self

    def auto_connect(
        self, on_connect: Optional[Callable[[abc.DisposableBase], None]] = None
    ) -> "DistinctValueConnectableObservable[T]":
        """
        Subscribe upstream when the first listener attaches.

        The upstream subscription is never cancelled automatically.
        ``on_connect`` receives the connection disposable so the caller can
        cancel it.

        Raises:
            ReuseError: The adapter has already been activated.
        """
        self._activate(ConnectionMode.AUTO_CONNECT)

        def connect_once() -> None:
            self._subject.on_listen = None
            connection = self._open_connection()
            if on_connect is not None:
                on_connect(connection)

        self._subject.on_listen = connect_once
        if self._subject.has_listeners:
            connect_once()
        return self

    def _activate(self, mode: ConnectionMode) -> None:
        with self._lock:
            if self._state is not ConnectionState.UNCONNECTED:
                raise ReuseError(
                    f"Cannot {mode.value}(): already activated with {self._mode.value}()"
                )
            self._state = ConnectionState.ACTIVE
            self._mode = mode
        logger.debug("Activated with %s()", mode.value)

    def _open_connection(
        self, scheduler: Optional[abc.SchedulerBase] = None
    ) -> abc.DisposableBase:
        upstream = self._subscribe_upstream(scheduler)
        return Disposable(lambda: self._disconnect(upstream))

    def _subscribe_upstream(
        self, scheduler: Optional[abc.SchedulerBase] = None
    ) -> SingleAssignmentDisposable:
        upstream = SingleAssignmentDisposable()
        with self._lock:
            self._upstream = upstream
        logger.debug("Subscribing upstream %r", self._source)

        is_first = True

        def on_next(value: T) -> None:
            nonlocal is_first
            if upstream.is_disposed:
                return
            if self._source_is_distinct and not is_first:
                self._filter.forward(value)
                return
            is_first = False
            try:
                self._filter.accept(value)
            except PolicyEvaluationError as e:
                logger.warning("Equality policy failed, cancelling upstream: %s", e)
                self._release_upstream(upstream)
                self._subject.on_error(e)

        def on_error(error: Exception) -> None:
            if upstream.is_disposed:
                return
            logger.warning("Upstream error: %r", error)
            self._release_upstream(upstream)
            self._subject.on_error(error)

        def on_completed() -> None:
            if upstream.is_disposed:
                return
            logger.debug("Upstream completed")
            self._release_upstream(upstream)
            self._close()

        upstream.disposable = self._source.subscribe(
            on_next, on_error, on_completed, scheduler=scheduler
        )
        return upstream

    def _release_upstream(self, upstream: SingleAssignmentDisposable) -> None:
        with self._lock:
            if self._upstream is upstream:
                self._upstream = None
        upstream.dispose()

    def _cancel_upstream(self) -> None:
        upstream = self._upstream
        if upstream is not None:
            logger.debug("Last listener detached, cancelling upstream")
            self._release_upstream(upstream)

    def _disconnect(self, upstream: SingleAssignmentDisposable) -> None:
        logger.debug("Connection disposed")
        self._release_upstream(upstream)
        self._close()

    def _close(self) -> None:
        with self._lock:
            if self._state is ConnectionState.CLOSED:
                return
            self._state = ConnectionState.CLOSED
        self._subject.on_completed()

    def _subscribe_core(
        self,
        observer: abc.ObserverBase[T],
        scheduler: Optional[abc.SchedulerBase] = None,
    ) -> abc.DisposableBase:
        return self._subject.subscribe(observer, scheduler=scheduler)

    def __repr__(self) -> str:
        return (
            f"DistinctValueConnectableObservable(state={self._state.value}, "
            f"mode={self._mode.value if self._mode else None}, "
            f"value={self._subject.value_or(NOT_SET)!r})"
        )

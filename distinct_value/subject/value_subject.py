"""
ValueSubject - Broadcast Primitive With Latest-Value Access
===========================================================

This module provides ValueSubject, the multi-listener push sequence every
adapter in the package fans its values out through.

ValueSubject provides:
- Ordered fan-out of values, errors and completion to any number of listeners
- A latest-value cell readable synchronously through ``value``/``has_value``
- Replay of the cached value to every newly attached listener
- ``on_listen``/``on_cancel`` hooks fired on listener-count transitions
- Breadth-first delivery of re-entrant emissions, so that every listener
  observes the same order even when a listener pushes a new value while
  it is being notified
"""

import logging
import threading
from collections import deque
from typing import Any, Callable, Deque, List, Optional, Set, Tuple, TypeVar

from reactivex import Observable, abc
from reactivex.disposable import Disposable

from ..cache import NOT_SET, ValueCell
from ..errors import ClosedSubjectError

T = TypeVar("T")

logger = logging.getLogger(__name__)

_NEXT = "next"
_ERROR = "error"
_COMPLETED = "completed"


class ValueSubject(Observable[T]):
    """
    A hot, multi-listener observable that remembers its latest value.

    Unlike an Rx ``BehaviorSubject`` the subject may start empty, an error
    does not close it, and listeners attaching after completion still
    receive the cached value before the completion notification.

    Example:
        ```python
        subject = ValueSubject(seed_value=0)
        subject.subscribe(print)  # prints 0
        subject.on_next(1)        # prints 1
        subject.value             # 1
        ```
    """

    def __init__(self, seed_value: Any = NOT_SET) -> None:
        super().__init__()
        self._cell: ValueCell[T] = ValueCell(seed_value)
        self._listeners: List[abc.ObserverBase[T]] = []
        self._attached: Set[abc.ObserverBase[T]] = set()
        self._pending: Deque[Tuple[abc.ObserverBase[T], str, Any]] = deque()
        self._is_emitting = False
        self._is_closed = False
        self._lock = threading.RLock()
        self.on_listen: Optional[Callable[[], None]] = None
        self.on_cancel: Optional[Callable[[], None]] = None

    @property
    def value(self) -> T:
        """The latest value; raises EmptyValueError before the first one."""
        return self._cell.value

    @property
    def has_value(self) -> bool:
        return self._cell.has_value

    def value_or(self, default: Any = None) -> Any:
        return self._cell.value_or(default)

    @property
    def is_closed(self) -> bool:
        return self._is_closed

    @property
    def is_broadcast(self) -> bool:
        return True

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    @property
    def has_listeners(self) -> bool:
        return self.listener_count > 0

    def on_next(self, value: T) -> None:
        """
        Cache ``value`` and deliver it to every attached listener.

        A listener that raises does not stop delivery to the others. The
        first such exception is re-raised once the fan-out has finished.
        """
        with self._lock:
            if self._is_closed:
                raise ClosedSubjectError("Cannot add a value to a closed subject")
            self._cell.write(value)
            self._enqueue(_NEXT, value)
        self._drain()

    def on_error(self, error: Exception) -> None:
        """
        Deliver ``error`` to every attached listener.

        Each listener's subscription ends with the error, but the subject
        itself stays open and keeps its cached value.
        """
        with self._lock:
            if self._is_closed:
                raise ClosedSubjectError("Cannot add an error to a closed subject")
            self._enqueue(_ERROR, error)
        self._drain()

    def on_completed(self) -> None:
        """Close the subject. Closing twice is a no-op."""
        with self._lock:
            if self._is_closed:
                return
            self._is_closed = True
            self._enqueue(_COMPLETED, None)
        logger.debug("ValueSubject closed with %d listener(s)", self.listener_count)
        self._drain()

    def _enqueue(self, kind: str, payload: Any) -> None:
        for listener in tuple(self._listeners):
            self._pending.append((listener, kind, payload))

    def _drain(self) -> None:
        with self._lock:
            if self._is_emitting:
                return
            self._is_emitting = True

        failure: Optional[Exception] = None
        try:
            while True:
                with self._lock:
                    if not self._pending:
                        break
                    listener, kind, payload = self._pending.popleft()
                    if listener not in self._attached:
                        continue

                try:
                    self._deliver(listener, kind, payload)
                except Exception as e:
                    if failure is None:
                        failure = e
                    else:
                        logger.warning("Listener raised during fan-out: %r", e)
        finally:
            with self._lock:
                self._is_emitting = False

        if failure is not None:
            raise failure

    def _deliver(self, listener: abc.ObserverBase[T], kind: str, payload: Any) -> None:
        if kind == _NEXT:
            listener.on_next(payload)
            return
        try:
            if kind == _ERROR:
                listener.on_error(payload)
            else:
                listener.on_completed()
        finally:
            self._detach(listener)

    def _subscribe_core(
        self,
        observer: abc.ObserverBase[T],
        scheduler: Optional[abc.SchedulerBase] = None,
    ) -> abc.DisposableBase:
        with self._lock:
            closed = self._is_closed
            first = False
            if not closed:
                self._listeners.append(observer)
                self._attached.add(observer)
                first = len(self._listeners) == 1

        if self._cell.has_value:
            observer.on_next(self._cell.value)

        if closed:
            observer.on_completed()
            return Disposable()

        if first and self.on_listen is not None:
            try:
                self.on_listen()
            except Exception:
                self._detach(observer)
                raise

        return Disposable(lambda: self._detach(observer))

    def _detach(self, observer: abc.ObserverBase[T]) -> None:
        with self._lock:
            if observer not in self._attached:
                return
            self._attached.discard(observer)
            self._listeners.remove(observer)
            last = not self._listeners and not self._is_closed

        if last and self.on_cancel is not None:
            self.on_cancel()

    def __repr__(self) -> str:
        return (
            f"ValueSubject({self._cell!r}, listeners={self.listener_count}, "
            f"closed={self._is_closed})"
        )

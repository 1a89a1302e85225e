"""
Counter demo: a distinct value adapter as the state of a small counter.

Increments and decrements are merged into a running total. A total equal to
the previous one (after adding 0, for instance) never reaches the listener.
"""

import logging

import reactivex
from reactivex import operators as ops
from reactivex.subject import Subject
from rich.console import Console

from distinct_value import publish_value_distinct

LOG_LEVEL = logging.DEBUG

logging.basicConfig(level=LOG_LEVEL, format="%(name)s: %(message)s")

console = Console()


class CounterState:
    """Inputs, output and clean-up for a counter."""

    def __init__(self):
        self._increments: Subject = Subject()
        self._decrements: Subject = Subject()

        totals = reactivex.merge(
            self._increments,
            self._decrements.pipe(ops.map(lambda i: -i)),
        ).pipe(ops.scan(lambda acc, e: acc + e, 0))

        self.state = totals.pipe(publish_value_distinct(0))
        self._connection = self.state.connect()

    def increment(self, amount: int) -> None:
        self._increments.on_next(amount)

    def decrement(self, amount: int) -> None:
        self._decrements.on_next(amount)

    def dispose(self) -> None:
        self._increments.on_completed()
        self._decrements.on_completed()
        self._connection.dispose()


def main():
    counter = CounterState()

    console.print(f"[bold]initial state[/bold] = {counter.state.value}")
    listener = counter.state.subscribe(
        lambda i: console.print(f"[green]state[/green] = {i}")
    )

    for amount in (0, 2):
        counter.increment(amount)
    for amount in (2, 2, 2):
        counter.decrement(amount)
    for amount in (2, 2, 0, 0, 0, 0, 0):
        counter.increment(amount)

    console.print(f"[bold]final state[/bold] = {counter.state.value}")

    listener.dispose()
    counter.dispose()


if __name__ == "__main__":
    main()

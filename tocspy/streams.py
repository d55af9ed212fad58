"""
Synchronous push streams.

A deliberately small set of primitives for wiring viewport events into
the partition engine:

- Stream: a cold source; every subscriber gets its own computation
- Signal: a hot source holding the latest value (scroll offset, header)
- combine_latest: pair the latest value of each source
- map_values / scan / distinct_until_changed: per-subscription operators
- SharedStream: reference-counted multicast with replay of the last value

Everything runs on the caller's thread. A value is delivered to all
observers before the next one is accepted; values emitted while a
delivery is in progress are queued behind it.

Example:
    >>> offsets = Signal(ViewportOffset(y=0))
    >>> ys = offsets.pipe(map_values(lambda o: o.y))
    >>> sub = ys.subscribe(print)
    0
    >>> offsets.emit(ViewportOffset(y=120))
    120
    >>> sub.unsubscribe()
"""

from __future__ import annotations

import itertools
import logging
import operator as _operator
from collections import deque
from collections.abc import Callable
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Observer = Callable[[Any], None]
Operator = Callable[["Stream"], "Stream"]


class _Missing:
    """Marker for 'no value yet'."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class Subscription:
    """Handle returned by subscribe(); detaches the observer when closed."""

    def __init__(self, dispose: Callable[[], None] | None = None):
        self._dispose = dispose
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def unsubscribe(self) -> None:
        """Detach. Calling more than once is a no-op."""
        if self._closed:
            return
        self._closed = True
        dispose, self._dispose = self._dispose, None
        if dispose is not None:
            dispose()

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info) -> None:
        self.unsubscribe()


class Stream(Generic[T]):
    """A source of values delivered to observers.

    The subscribe function is called once per observer and must return
    the Subscription that tears that observer's computation down.
    """

    def __init__(self, subscribe: Callable[[Observer], Subscription]):
        self._subscribe = subscribe

    def subscribe(self, observer: Observer) -> Subscription:
        return self._subscribe(observer)

    def pipe(self, *operators: Operator) -> Stream:
        """Apply operators left to right."""
        stream: Stream = self
        for op in operators:
            stream = op(stream)
        return stream


class _Observers:
    """Registry of observers keyed by subscription order."""

    def __init__(self):
        self._items: dict[int, Observer] = {}
        self._ids = itertools.count(1)

    def add(self, observer: Observer) -> int:
        key = next(self._ids)
        self._items[key] = observer
        return key

    def discard(self, key: int) -> None:
        self._items.pop(key, None)

    def deliver(self, value: Any) -> None:
        # Observers detached mid-delivery must not receive the value
        for key, observer in list(self._items.items()):
            if key in self._items:
                observer(value)

    def __len__(self) -> int:
        return len(self._items)


class Signal(Stream[T]):
    """Hot source holding its latest value.

    New observers receive the current value (if any) on subscribe.
    Models live inputs such as the viewport offset or header geometry.
    """

    def __init__(self, initial: Any = MISSING):
        super().__init__(self._attach)
        self._value = initial
        self._observers = _Observers()
        self._queue: deque = deque()
        self._delivering = False

    @property
    def value(self) -> Any:
        """Latest value, or MISSING before the first emit."""
        return self._value

    @property
    def has_value(self) -> bool:
        return self._value is not MISSING

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def emit(self, value: T) -> None:
        """Publish a value to all observers."""
        self._queue.append(value)
        if self._delivering:
            return

        self._delivering = True
        try:
            while self._queue:
                current = self._queue.popleft()
                self._value = current
                self._observers.deliver(current)
        finally:
            self._delivering = False
            self._queue.clear()

    def _attach(self, observer: Observer) -> Subscription:
        key = self._observers.add(observer)
        if self._value is not MISSING:
            observer(self._value)
        return Subscription(lambda: self._observers.discard(key))


# ═══════════════════════════════════════════════════════════════════════════════
# Combinators and operators
# ═══════════════════════════════════════════════════════════════════════════════


def combine_latest(*sources: Stream) -> Stream[tuple]:
    """Emit a tuple of the latest value of every source.

    Nothing is emitted until each source has produced a value; after
    that, a change on any source emits a new tuple.
    """

    def subscribe(observer: Observer) -> Subscription:
        latest = [MISSING] * len(sources)

        def receiver(index: int) -> Observer:
            def receive(value: Any) -> None:
                latest[index] = value
                if all(item is not MISSING for item in latest):
                    observer(tuple(latest))

            return receive

        subscriptions = [
            source.subscribe(receiver(index)) for index, source in enumerate(sources)
        ]

        def dispose() -> None:
            for subscription in subscriptions:
                subscription.unsubscribe()

        return Subscription(dispose)

    return Stream(subscribe)


def map_values(fn: Callable[[Any], Any]) -> Operator:
    """Transform every value with fn."""

    def operator(source: Stream) -> Stream:
        return Stream(lambda observer: source.subscribe(lambda value: observer(fn(value))))

    return operator


def scan(fn: Callable[[Any, Any], Any], seed: Any) -> Operator:
    """Fold values into an accumulator, emitting it after every value.

    Each subscription starts again from seed.
    """

    def operator(source: Stream) -> Stream:
        def subscribe(observer: Observer) -> Subscription:
            acc = seed

            def receive(value: Any) -> None:
                nonlocal acc
                acc = fn(acc, value)
                observer(acc)

            return source.subscribe(receive)

        return Stream(subscribe)

    return operator


def distinct_until_changed(
    comparer: Callable[[Any, Any], bool] = _operator.eq,
) -> Operator:
    """Drop values that compare equal to the previously emitted one."""

    def operator(source: Stream) -> Stream:
        def subscribe(observer: Observer) -> Subscription:
            last = MISSING

            def receive(value: Any) -> None:
                nonlocal last
                if last is not MISSING and comparer(last, value):
                    return
                last = value
                observer(value)

            return source.subscribe(receive)

        return Stream(subscribe)

    return operator


# ═══════════════════════════════════════════════════════════════════════════════
# Multicast
# ═══════════════════════════════════════════════════════════════════════════════


class SharedStream(Stream[T]):
    """Reference-counted multicast of a source, replaying the last value.

    - The first observer connects to the source (one computation for all)
    - Observers joining later get the latest value immediately
    - When the last observer leaves, the source is disconnected and the
      latest value dropped; the next observer starts a fresh computation
    """

    def __init__(self, source: Stream[T]):
        super().__init__(self._attach)
        self._source = source
        self._observers = _Observers()
        self._connection: Subscription | None = None
        self._latest: Any = MISSING
        self._queue: deque = deque()
        self._delivering = False

    @property
    def connected(self) -> bool:
        return self._connection is not None

    @property
    def refcount(self) -> int:
        return len(self._observers)

    @property
    def latest(self) -> Any:
        """Most recent value, or MISSING when none is held."""
        return self._latest

    def _attach(self, observer: Observer) -> Subscription:
        key = self._observers.add(observer)
        subscription = Subscription(lambda: self._detach(key))

        if self._connection is None:
            self._connect()
        elif self._latest is not MISSING:
            observer(self._latest)

        return subscription

    def _connect(self) -> None:
        logger.debug("Connecting shared stream")
        pending = Subscription()
        self._connection = pending
        connection = self._source.subscribe(self._broadcast)

        # Every observer may have left while the source replayed
        if self._connection is pending:
            self._connection = connection
        else:
            self._latest = MISSING
            connection.unsubscribe()

    def _detach(self, key: int) -> None:
        self._observers.discard(key)
        if len(self._observers) or self._connection is None:
            return

        logger.debug("Last observer left, disconnecting shared stream")
        connection, self._connection = self._connection, None
        self._latest = MISSING
        connection.unsubscribe()

    def _broadcast(self, value: T) -> None:
        # Values produced during delivery wait until every observer has the current one
        self._queue.append(value)
        if self._delivering:
            return

        self._delivering = True
        try:
            while self._queue and self._connection is not None:
                current = self._queue.popleft()
                self._latest = current
                self._observers.deliver(current)
        finally:
            self._delivering = False
            self._queue.clear()


def share_replay() -> Operator:
    """Operator form of SharedStream."""
    return SharedStream

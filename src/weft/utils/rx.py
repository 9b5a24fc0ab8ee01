"""
Reactive values.

An :class:`Rx` holds a value shared between threads and calls watchers
whenever it changes.  Copies of an ``Rx`` made with :meth:`Rx.share`
see the same value and watchers.
"""

from __future__ import annotations

import queue
import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

Watcher = Callable[[T], None]


class _Inner(Generic[T]):
    __slots__ = ("value", "value_lock", "watchers", "watchers_lock")

    def __init__(self, value: T) -> None:
        self.value = value
        self.value_lock = threading.Lock()
        self.watchers: tuple[Watcher[T], ...] = ()
        self.watchers_lock = threading.Lock()

    def snapshot_watchers(self) -> tuple[Watcher[T], ...]:
        with self.watchers_lock:
            return self.watchers


class Rx(Generic[T]):
    """
    Shared value with change notification.

    Watchers run on the thread that changed the value, after every lock
    has been released, so they may read or set the value themselves.
    """

    def __init__(self, value: T) -> None:
        self._inner: _Inner[T] = _Inner(value)

    def share(self) -> Rx[T]:
        """Another handle on the same value."""
        other: Rx[T] = Rx.__new__(Rx)
        other._inner = self._inner
        return other

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get(self) -> T:
        with self._inner.value_lock:
            return self._inner.value

    def call_on(self, f: Callable[[T], U]) -> U:
        """Run *f* on the value while holding the value lock."""
        with self._inner.value_lock:
            return f(self._inner.value)

    def set(self, value: T) -> None:
        """Store *value*; watchers run only if it differs from the current one."""
        inner = self._inner
        with inner.value_lock:
            if inner.value == value:
                return
            inner.value = value
        for watcher in inner.snapshot_watchers():
            watcher(value)

    def call_on_mut(self, f: Callable[[T], U]) -> U:
        """
        Run *f* on the value for in-place changes.

        Watchers run unconditionally afterwards.
        """
        inner = self._inner
        with inner.value_lock:
            result = f(inner.value)
            value = inner.value
        for watcher in inner.snapshot_watchers():
            watcher(value)
        return result

    # ------------------------------------------------------------------
    # Watchers
    # ------------------------------------------------------------------

    def set_on_change(self, watcher: Watcher[T]) -> None:
        inner = self._inner
        with inner.watchers_lock:
            inner.watchers = inner.watchers + (watcher,)

    def clear_watchers(self) -> None:
        """Remove every watcher, for all handles sharing this value."""
        with self._inner.watchers_lock:
            self._inner.watchers = ()

    def pipe_to(self, other: Rx[T]) -> None:
        """Copy every new value into *other*."""
        self.set_on_change(other.set)

    def map(self, f: Callable[[T], U]) -> Rx[U]:
        """A new ``Rx`` holding ``f(value)``, kept up to date."""
        mapped: Rx[U] = Rx(self.call_on(f))
        self.set_on_change(lambda value: mapped.set(f(value)))
        return mapped

    def read_channel(self) -> queue.Queue[T]:
        """A queue receiving every new value."""
        channel: queue.Queue[T] = queue.Queue()
        self.set_on_change(channel.put)
        return channel

    def __repr__(self) -> str:
        return f"Rx({self.get()!r})"

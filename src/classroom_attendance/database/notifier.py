"""Change notification for live queries.

Repositories publish the tables a committed write touched; ``LiveQuery``
objects re-run their fetch when one of their tables changes and re-emit to
subscribers only when the result actually differs.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, FrozenSet, Generic, Iterable, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

ChangeListener = Callable[[FrozenSet[str]], None]
Unsubscribe = Callable[[], None]


class ChangeNotifier:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._listeners: Dict[str, List[ChangeListener]] = {}

    def subscribe(self, tables: Iterable[str], listener: ChangeListener) -> Unsubscribe:
        tables = tuple(tables)
        with self._lock:
            for table in tables:
                self._listeners.setdefault(table, []).append(listener)

        def unsubscribe() -> None:
            with self._lock:
                for table in tables:
                    listeners = self._listeners.get(table, [])
                    if listener in listeners:
                        listeners.remove(listener)

        return unsubscribe

    def publish(self, tables: Iterable[str]) -> None:
        touched = frozenset(tables)
        with self._lock:
            targets: List[ChangeListener] = []
            for table in touched:
                for listener in self._listeners.get(table, []):
                    if listener not in targets:
                        targets.append(listener)

        for listener in targets:
            try:
                listener(touched)
            except Exception:
                # One broken subscriber must not undo a committed write.
                logger.exception("Live query listener failed for tables=%s", sorted(touched))

    def listener_count(self) -> int:
        with self._lock:
            return sum(len(v) for v in self._listeners.values())


_UNSET = object()


class LiveQuery(Generic[T]):
    """A query result that stays fresh across writes.

    ``subscribe`` immediately delivers the current value, then every new
    value after a relevant write. The returned callable unsubscribes; when
    the last subscriber leaves the query detaches from the notifier.
    """

    def __init__(self, notifier: ChangeNotifier, tables: Iterable[str], fetch: Callable[[], T]):
        self._notifier = notifier
        self._tables = tuple(tables)
        self._fetch = fetch
        self._lock = threading.RLock()
        self._value = _UNSET
        self._subscribers: List[Callable[[T], None]] = []
        self._detach: Unsubscribe | None = None

    @property
    def value(self) -> T:
        with self._lock:
            if self._value is _UNSET or self._detach is None:
                self._value = self._fetch()
            return self._value  # type: ignore[return-value]

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        with self._lock:
            if self._detach is None:
                self._detach = self._notifier.subscribe(self._tables, self._on_change)
                self._value = self._fetch()
            self._subscribers.append(callback)
            current = self._value
        callback(current)  # type: ignore[arg-type]

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)
                if not self._subscribers:
                    self.close()

        return unsubscribe

    def close(self) -> None:
        with self._lock:
            self._subscribers.clear()
            if self._detach is not None:
                self._detach()
                self._detach = None
            self._value = _UNSET

    def _on_change(self, tables: FrozenSet[str]) -> None:
        with self._lock:
            new_value = self._fetch()
            if new_value == self._value:
                return
            self._value = new_value
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(new_value)

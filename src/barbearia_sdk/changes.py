from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger(__name__)

ChangeHandler = Callable[[str, dict[str, Any]], None]


@dataclass
class ChangeFeed:
    """In-process table change notifications.

    Services publish after their own writes; a realtime bridge may publish
    remote changes the same way. Subscribers get ``(table, event)``.
    """

    _subscribers: dict[str, list[ChangeHandler]] = field(default_factory=lambda: defaultdict(list))
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def subscribe(self, table: str, handler: ChangeHandler) -> Callable[[], None]:
        with self._lock:
            self._subscribers[table].append(handler)

        def unsubscribe() -> None:
            with self._lock:
                handlers = self._subscribers.get(table, [])
                if handler in handlers:
                    handlers.remove(handler)

        return unsubscribe

    def publish(self, table: str, event: str, record: dict[str, Any] | None = None) -> int:
        with self._lock:
            handlers = list(self._subscribers.get(table, []))
        payload = {"event": event, "record": record or {}}
        delivered = 0
        for handler in handlers:
            try:
                handler(table, payload)
            except Exception:
                logger.exception("change_subscriber_failed", extra={"table": table, "change_event": event})
                continue
            delivered += 1
        return delivered

    def subscriber_count(self, table: str) -> int:
        with self._lock:
            return len(self._subscribers.get(table, []))

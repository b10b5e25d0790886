"""Per-store change events.

Each store owns one notifier.  Events carry nothing but the store's event
name; subscribers re-read whatever state they need.
"""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[str], None]


class ChangeNotifier:

    def __init__(self, name: str) -> None:
        self.name = name
        self._subscribers: list[ChangeCallback] = []

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register *callback*; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def emit(self) -> None:
        # Copy so a subscriber may unsubscribe itself while being notified.
        for callback in list(self._subscribers):
            try:
                callback(self.name)
            except Exception:
                logger.exception("Subscriber to %s raised", self.name)

"""Telemetry store - latest snapshot with change notification"""

import asyncio
import logging
from typing import Callable, List, Optional

from ..models import TelemetrySnapshot

logger = logging.getLogger(__name__)


class TelemetryStore:
    """Holds the latest published TelemetrySnapshot and notifies subscribers.

    Single writer: only the poller publishes. No history is kept. Subscribers
    may be plain callables or coroutine functions; both receive the snapshot.
    """

    def __init__(self, initial: Optional[TelemetrySnapshot] = None):
        self._snapshot = initial or TelemetrySnapshot.initial()
        self._subscribers: List[Callable] = []
        self._closed = False

    @property
    def snapshot(self) -> TelemetrySnapshot:
        return self._snapshot

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Callable) -> Callable[[], None]:
        """Register a callback; returns a function that unsubscribes it"""
        if self._closed:
            raise RuntimeError("Telemetry store is closed")
        self._subscribers.append(callback)

        def unsubscribe():
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass

        return unsubscribe

    async def publish(self, snapshot: TelemetrySnapshot) -> bool:
        """Replace the current snapshot and notify subscribers

        Returns:
            False if the store is closed and the snapshot was dropped
        """
        if self._closed:
            logger.debug("Store closed - dropping snapshot")
            return False

        self._snapshot = snapshot

        # Copy so callbacks may unsubscribe while we iterate
        for callback in list(self._subscribers):
            if self._closed:
                break
            try:
                if asyncio.iscoroutinefunction(callback):
                    await callback(snapshot)
                else:
                    callback(snapshot)
            except Exception as e:
                logger.error(f"Snapshot subscriber {callback!r} failed: {e}", exc_info=True)
        return True

    def close(self):
        """Drop all subscribers and refuse further publishes"""
        self._closed = True
        self._subscribers.clear()
        logger.info("Telemetry store closed")

"""
Sensor Poller - fetches every metric from the relay on a fixed interval.

Cycle flow:
1. Launch one fetch per metric, all in flight at once
2. Wait for every fetch to finish (success or failure)
3. Merge: successes replace readings, failures keep the previous reading
4. Set last_error from this cycle's failures (None if all succeeded)
5. Publish the merged snapshot, unless the poller was stopped meanwhile
"""

import asyncio
import logging
from typing import Dict, List, Optional

from ..models import MetricId, SensorReading, TelemetrySnapshot
from .telemetry_store import TelemetryStore
from .diagnostics import DiagnosticsService
from .. import config

logger = logging.getLogger(__name__)


def _error_message(error: BaseException) -> str:
    return str(error) or type(error).__name__


class SensorPoller:
    """Periodic, cancellable poll loop feeding the telemetry store"""

    def __init__(
        self,
        client,
        store: TelemetryStore,
        interval: Optional[float] = None,
        diagnostics: Optional[DiagnosticsService] = None,
    ):
        self.client = client
        self.store = store
        self.interval = interval if interval is not None else config.POLL_INTERVAL_SECONDS
        self.diagnostics = diagnostics
        self._task: Optional[asyncio.Task] = None
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        """Start the polling loop (first cycle runs immediately)"""
        if self.running:
            return
        self._stopped = False
        self._task = asyncio.create_task(self._poll_loop(), name="sensor-poller")
        logger.info(f"SensorPoller started (interval: {self.interval}s)")

    async def stop(self):
        """Stop polling; no store writes happen after this returns"""
        self._stopped = True
        task, self._task = self._task, None
        if task is None or task.done():
            return

        task.cancel()
        if task is asyncio.current_task():
            # Called from a subscriber running inside the loop itself
            return
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("SensorPoller stopped")

    async def _poll_loop(self):
        loop = asyncio.get_running_loop()

        while not self._stopped:
            started = loop.time()
            try:
                await self.run_cycle()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Poll cycle failed: {e}", exc_info=True)

            delay = max(0.0, self.interval - (loop.time() - started))
            await asyncio.sleep(delay)

    async def run_cycle(self) -> TelemetrySnapshot:
        """Run one fetch-merge-publish cycle and return the merged snapshot"""
        metrics = list(MetricId)
        results = await asyncio.gather(
            *(self.client.fetch_latest(metric) for metric in metrics),
            return_exceptions=True,
        )

        updates: Dict[MetricId, SensorReading] = {}
        failed: List[MetricId] = []
        last_error: Optional[str] = None

        for metric, result in zip(metrics, results):
            if isinstance(result, BaseException):
                failed.append(metric)
                # Later metrics in MetricId order win the tie-break
                last_error = _error_message(result)
                logger.warning(f"Fetch failed for {metric.value}: {last_error}")
            else:
                updates[metric] = result

        merged = self.store.snapshot.merge(updates, last_error)

        if self.diagnostics:
            self.diagnostics.record_cycle(len(metrics), failed, last_error)

        if self._stopped:
            logger.debug("Poller stopped during cycle - snapshot not published")
            return merged

        if await self.store.publish(merged) and self.diagnostics:
            self.diagnostics.record_publish()

        if failed:
            logger.info(f"Cycle published with {len(failed)}/{len(metrics)} failed metrics")
        else:
            logger.debug("Cycle published, all metrics updated")
        return merged

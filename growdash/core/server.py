"""Core DashboardServer - wires polling, the snapshot store and alerts"""

import asyncio
import logging
from typing import List, Optional

import aiohttp

from ..controllers import SensorRelayClient
from ..models import MetricId, Notification, TelemetrySnapshot
from ..services import AlertService, DiagnosticsService, SensorPoller, TelemetryStore
from ..utils.formatting import METRIC_UNITS, format_update_time, format_value, metric_status
from .. import config

logger = logging.getLogger(__name__)


class DashboardServer:
    """Headless dashboard: polls sensors and keeps notifications current"""

    def __init__(self, session: Optional[aiohttp.ClientSession] = None, client=None):
        logger.info("Initializing GrowDash server...")

        self.diagnostics = DiagnosticsService()
        self.store = TelemetryStore()
        self.alerts = AlertService(self.diagnostics)

        self._session = session
        self._owns_session = session is None and client is None
        self._client = client
        self.poller: Optional[SensorPoller] = None
        self._unsubscribe = None

        self.running = False
        self._stop_event = asyncio.Event()
        logger.info("GrowDash server initialized")

    @property
    def snapshot(self) -> TelemetrySnapshot:
        return self.store.snapshot

    @property
    def notifications(self) -> List[Notification]:
        return self.alerts.notifications

    async def start(self):
        """Start polling and run until stop() is called"""
        try:
            logger.info("Starting GrowDash server...")

            if not config.RELAY_UID:
                logger.warning("⚠️  RELAY_UID is not set - relay requests will likely fail")

            if self._client is None:
                if self._session is None:
                    self._session = aiohttp.ClientSession()
                self._client = SensorRelayClient(self._session)

            self._unsubscribe = self.store.subscribe(self._on_snapshot)
            self.poller = SensorPoller(self._client, self.store, diagnostics=self.diagnostics)

            self.running = True
            self.poller.start()
            logger.info("GrowDash server started successfully")

            await asyncio.gather(
                self._stop_event.wait(),
                self._health_loop(),
            )

        except Exception as e:
            logger.error(f"Error starting GrowDash server: {e}", exc_info=True)
            raise

    async def stop(self):
        """Stop polling and release resources"""
        if not self.running and self.store.closed:
            return
        logger.info("Stopping GrowDash server...")

        self.running = False

        try:
            if self.poller:
                await self.poller.stop()

            if self._unsubscribe:
                self._unsubscribe()
            self.store.close()

            if self._owns_session and self._session is not None:
                await self._session.close()

            self.diagnostics.log_summary()
            logger.info("GrowDash server stopped successfully")
        except Exception as e:
            logger.error(f"Error during shutdown: {e}")
        finally:
            self._stop_event.set()

    def _on_snapshot(self, snapshot: TelemetrySnapshot):
        """Log the metric cards and refresh notifications"""
        for metric in MetricId:
            reading = snapshot.reading(metric)
            logger.info(
                f"{metric.value}: {format_value(reading.value, METRIC_UNITS[metric.value])} "
                f"[{metric_status(metric, reading.value)}] {format_update_time(reading.time)}"
            )

        notifications = self.alerts.evaluate(snapshot)
        logger.info(f"Notifications: {self.alerts.badge} active")
        return notifications

    async def _health_loop(self):
        """Periodically log the diagnostics summary"""
        while self.running:
            try:
                await asyncio.wait_for(
                    self._stop_event.wait(), timeout=config.HEALTH_SUMMARY_INTERVAL_SECONDS
                )
            except asyncio.TimeoutError:
                self.diagnostics.log_summary()

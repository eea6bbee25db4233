"""Diagnostics service - track operational metrics"""

import logging
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)


class DiagnosticsService:
    """Lightweight counters for polling and analysis health"""

    def __init__(self):
        """Initialize diagnostics tracker"""
        self.start_time = datetime.now()
        self.counters = {
            'poll_cycles': 0,
            'metric_fetches': 0,
            'metric_errors': 0,
            'snapshots_published': 0,
            'notifications_derived': 0,
            'analyses_run': 0,
            'analyses_failed': 0,
            'silhouette_fallbacks': 0,
        }
        self.metric_errors = {}
        self.last_cycle_at: Optional[datetime] = None
        self.last_cycle_error: Optional[str] = None
        logger.info("Diagnostics service initialized")

    def record_cycle(self, fetches: int, failed_metrics, last_error: Optional[str]):
        """Record one completed poll cycle

        Args:
            fetches: number of fetches issued
            failed_metrics: metric ids whose fetch failed this cycle
            last_error: aggregate error stored on the snapshot (None if all succeeded)
        """
        self.counters['poll_cycles'] += 1
        self.counters['metric_fetches'] += fetches
        for metric in failed_metrics:
            key = getattr(metric, "value", metric)
            self.counters['metric_errors'] += 1
            self.metric_errors[key] = self.metric_errors.get(key, 0) + 1
        self.last_cycle_at = datetime.now()
        self.last_cycle_error = last_error

    def record_publish(self):
        self.counters['snapshots_published'] += 1

    def record_notifications(self, count: int):
        self.counters['notifications_derived'] += count

    def record_analysis(self, success: bool, silhouette_fallback: bool = False):
        """Record an analysis run and whether it degraded to no silhouette"""
        self.counters['analyses_run'] += 1
        if not success:
            self.counters['analyses_failed'] += 1
        elif silhouette_fallback:
            self.counters['silhouette_fallbacks'] += 1

    def get_uptime_seconds(self) -> int:
        """Get uptime in seconds"""
        return int((datetime.now() - self.start_time).total_seconds())

    def get_uptime_formatted(self) -> str:
        """Get uptime as formatted string"""
        seconds = self.get_uptime_seconds()
        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        return f"{hours}h {minutes}m"

    def get_error_rate(self) -> float:
        """Failed metric fetches as a percentage of all fetches"""
        fetches = self.counters['metric_fetches']
        if fetches == 0:
            return 0.0
        return (self.counters['metric_errors'] / fetches) * 100

    def get_health_summary(self) -> dict:
        """Get health status and key counters

        Returns:
            dict with status ('starting', 'healthy' or 'degraded') and metrics
        """
        error_rate = self.get_error_rate()

        if self.counters['poll_cycles'] == 0:
            status = "starting"
        elif self.last_cycle_error is not None:
            status = "degraded"
        elif error_rate > 5.0:  # > 5% of fetches failed
            status = "degraded"
        else:
            status = "healthy"

        return {
            'status': status,
            'uptime_seconds': self.get_uptime_seconds(),
            'uptime_formatted': self.get_uptime_formatted(),
            'error_rate_percent': round(error_rate, 2),
            'last_cycle_at': self.last_cycle_at.isoformat() if self.last_cycle_at else None,
            'last_cycle_error': self.last_cycle_error,
            'errors_by_metric': dict(self.metric_errors),
            'timestamp': datetime.now().isoformat(),
            **self.counters,
        }

    def log_summary(self):
        """Log current health summary to logger"""
        summary = self.get_health_summary()
        logger.info(
            f"Health Summary - Status: {summary['status']}, "
            f"Uptime: {summary['uptime_formatted']}, "
            f"Cycles: {summary['poll_cycles']}, "
            f"Fetch Errors: {summary['metric_errors']}, "
            f"Error Rate: {summary['error_rate_percent']}%, "
            f"Analyses: {summary['analyses_run']}"
        )

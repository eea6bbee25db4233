"""Services package"""

from .diagnostics import DiagnosticsService
from .telemetry_store import TelemetryStore
from .sensor_poller import SensorPoller
from .alert_service import AlertService, NOTIFICATION_RULES, derive_notifications
from .analysis_service import AnalysisService, AnalysisSession

__all__ = [
    'DiagnosticsService',
    'TelemetryStore',
    'SensorPoller',
    'AlertService',
    'NOTIFICATION_RULES',
    'derive_notifications',
    'AnalysisService',
    'AnalysisSession',
]

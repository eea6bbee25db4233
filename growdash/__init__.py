"""GrowDash - plant cultivation telemetry and photo analysis"""

from .core import DashboardServer
from .services import AnalysisService, SensorPoller, TelemetryStore, derive_notifications

__all__ = ['DashboardServer', 'AnalysisService', 'SensorPoller', 'TelemetryStore', 'derive_notifications']

"""Models package"""

from .sensor_data import MetricId, SensorReading, TelemetrySnapshot
from .notification import Notification, NotificationKind, Severity, notification_badge, severity_badge
from .analysis import AnalysisOutcome, AnalysisResult, PlantMetrics, SilhouetteImage, health_tier

__all__ = [
    'MetricId', 'SensorReading', 'TelemetrySnapshot',
    'Notification', 'NotificationKind', 'Severity', 'notification_badge', 'severity_badge',
    'AnalysisOutcome', 'AnalysisResult', 'PlantMetrics', 'SilhouetteImage', 'health_tier',
]

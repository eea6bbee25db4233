"""Alert service - derive operator notifications from a telemetry snapshot"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..models import (
    MetricId,
    Notification,
    NotificationKind,
    Severity,
    TelemetrySnapshot,
    notification_badge,
)
from ..utils.formatting import format_fixed, round_half_up, time_label
from .diagnostics import DiagnosticsService

logger = logging.getLogger(__name__)

API_ERROR_ID = "api-error"
JUST_NOW_LABEL = "just now"


@dataclass(frozen=True)
class NotificationRule:
    """One threshold rule; `detail` is formatted with the reading value"""
    rule_id: str
    metric: MetricId
    predicate: Callable[[float], bool]
    kind: NotificationKind
    severity: Severity
    title: str
    detail: Callable[[float], str]


# Evaluated top-to-bottom; the first matching rule per metric wins.
NOTIFICATION_RULES: List[NotificationRule] = [
    NotificationRule(
        "soil-low", MetricId.SOIL_MOISTURE, lambda v: v < 35,
        NotificationKind.TASK, Severity.HIGH,
        "Water the soil (drip irrigation)",
        lambda v: f"Soil moisture {round_half_up(v)}% is below the 50% threshold",
    ),
    NotificationRule(
        "soil-low", MetricId.SOIL_MOISTURE, lambda v: v < 50,
        NotificationKind.TASK, Severity.MEDIUM,
        "Water the soil (drip irrigation)",
        lambda v: f"Soil moisture {round_half_up(v)}% is below the 50% threshold",
    ),
    NotificationRule(
        "light-low", MetricId.LIGHT, lambda v: v < 200,
        NotificationKind.ALERT, Severity.HIGH,
        "Insufficient light",
        lambda v: f"Current light {round_half_up(v)} lx, add grow lights or move the plant",
    ),
    NotificationRule(
        "light-weak", MetricId.LIGHT, lambda v: v < 800,
        NotificationKind.ALERT, Severity.MEDIUM,
        "Light is weak",
        lambda v: f"Current light {round_half_up(v)} lx, consider longer light hours",
    ),
    NotificationRule(
        "light-strong", MetricId.LIGHT, lambda v: v > 20000,
        NotificationKind.ALERT, Severity.HIGH,
        "Light too strong",
        lambda v: f"Current light {round_half_up(v)} lx, shade the plant to avoid scorching",
    ),
    NotificationRule(
        "temp-risk", MetricId.TEMPERATURE, lambda v: v < 18 or v > 30,
        NotificationKind.ALERT, Severity.HIGH,
        "Temperature risk",
        lambda v: f"Air temperature {format_fixed(v)}°C, adjust the environment soon",
    ),
    NotificationRule(
        "temp-warn", MetricId.TEMPERATURE, lambda v: v < 22 or v > 26,
        NotificationKind.ALERT, Severity.MEDIUM,
        "Temperature outside optimal range",
        lambda v: f"Air temperature {format_fixed(v)}°C, optimal range 22-26°C",
    ),
    NotificationRule(
        "hum-risk", MetricId.HUMIDITY, lambda v: v < 30 or v > 80,
        NotificationKind.ALERT, Severity.HIGH,
        "Humidity risk",
        lambda v: f"Air humidity {round_half_up(v)}%, adjust ventilation or humidify soon",
    ),
    NotificationRule(
        "hum-warn", MetricId.HUMIDITY, lambda v: v < 40 or v > 70,
        NotificationKind.ALERT, Severity.MEDIUM,
        "Humidity outside comfort range",
        lambda v: f"Air humidity {round_half_up(v)}%, comfort range 40-70%",
    ),
    NotificationRule(
        "water-low", MetricId.WATER_DEPTH, lambda v: v < 3,
        NotificationKind.TASK, Severity.MEDIUM,
        "Check water level",
        lambda v: f"Water depth {format_fixed(v)} cm, the reservoir may need a refill",
    ),
]


def derive_notifications(snapshot: TelemetrySnapshot) -> List[Notification]:
    """Ordered notifications for a snapshot. Pure: same snapshot, same list."""
    items: List[Notification] = []

    if snapshot.last_error:
        items.append(Notification(
            id=API_ERROR_ID,
            kind=NotificationKind.SYSTEM,
            severity=Severity.HIGH,
            title="Sensor API error",
            detail=snapshot.last_error,
            time_label=JUST_NOW_LABEL,
        ))

    matched = set()
    for rule in NOTIFICATION_RULES:
        if rule.metric in matched:
            continue
        reading = snapshot.reading(rule.metric)
        if reading.value is None or not rule.predicate(reading.value):
            continue
        matched.add(rule.metric)
        items.append(Notification(
            id=rule.rule_id,
            kind=rule.kind,
            severity=rule.severity,
            title=rule.title,
            detail=rule.detail(reading.value),
            time_label=time_label(reading.time),
        ))

    return items


class AlertService:
    """Evaluates notifications on every snapshot and logs what changed"""

    def __init__(self, diagnostics: Optional[DiagnosticsService] = None):
        self.diagnostics = diagnostics
        self.notifications: List[Notification] = []
        logger.info("Alert service initialized")

    @property
    def badge(self) -> str:
        return notification_badge(len(self.notifications))

    def evaluate(self, snapshot: TelemetrySnapshot) -> List[Notification]:
        """Derive notifications and log raised/cleared ids since the last call"""
        notifications = derive_notifications(snapshot)
        previous = {n.id for n in self.notifications}
        current = {n.id for n in notifications}

        for n in notifications:
            if n.id not in previous:
                log = logger.warning if n.severity == Severity.HIGH else logger.info
                log(f"🔔 [{n.severity.value}] {n.title}: {n.detail} ({n.time_label})")
        for cleared in sorted(previous - current):
            logger.info(f"✅ Notification cleared: {cleared}")

        self.notifications = notifications
        if self.diagnostics:
            self.diagnostics.record_notifications(len(notifications))
        return notifications

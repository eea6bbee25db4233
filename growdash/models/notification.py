"""Operator notification models"""

from dataclasses import dataclass, asdict
from enum import Enum


class NotificationKind(str, Enum):
    TASK = "task"
    ALERT = "alert"
    SYSTEM = "system"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


_SEVERITY_BADGES = {
    Severity.HIGH: "High",
    Severity.MEDIUM: "Medium",
    Severity.LOW: "Low",
}

MAX_BADGE_COUNT = 9


@dataclass(frozen=True)
class Notification:
    """Derived notification; `id` is stable per rule slot"""
    id: str
    kind: NotificationKind
    severity: Severity
    title: str
    detail: str
    time_label: str

    def to_dict(self):
        """Convert to dictionary"""
        data = asdict(self)
        data["kind"] = self.kind.value
        data["severity"] = self.severity.value
        return data


def severity_badge(severity: Severity) -> str:
    """Short badge label for a severity"""
    return _SEVERITY_BADGES.get(Severity(severity), "Low")


def notification_badge(count: int) -> str:
    """Display count for the notification bell, capped at 9+"""
    if count > MAX_BADGE_COUNT:
        return f"{MAX_BADGE_COUNT}+"
    return str(count)

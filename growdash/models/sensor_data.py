"""Sensor data models and snapshot"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class MetricId(str, Enum):
    """Environmental metrics polled from the relay, in fixed order"""
    LIGHT = "light"
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    SOIL_MOISTURE = "soil_moisture"
    WATER_DEPTH = "water_depth"


@dataclass(frozen=True)
class SensorReading:
    """Latest reading of one metric"""
    value: Optional[float] = None
    time: str = ""  # Raw observed-at label from the relay
    unix: Optional[int] = None

    @classmethod
    def empty(cls) -> "SensorReading":
        return cls()

    @property
    def is_present(self) -> bool:
        return self.value is not None

    def to_dict(self):
        """Convert to dictionary"""
        return {"value": self.value, "time": self.time, "unix": self.unix}


@dataclass(frozen=True)
class TelemetrySnapshot:
    """Latest known reading of every metric plus the last cycle-wide error.

    Always holds all five metrics. A metric whose fetch failed keeps its
    previous reading; it is never reset to absent.
    """
    readings: Mapping[MetricId, SensorReading] = field(default_factory=dict)
    last_error: Optional[str] = None

    def __post_init__(self):
        missing = [m.value for m in MetricId if m not in self.readings]
        if missing:
            raise ValueError(f"Snapshot missing metrics: {', '.join(missing)}")
        # Freeze a private copy so callers can't mutate a published snapshot
        object.__setattr__(
            self, "readings", MappingProxyType({m: self.readings[m] for m in MetricId})
        )

    @classmethod
    def initial(cls) -> "TelemetrySnapshot":
        """All readings absent, no error"""
        return cls(readings={m: SensorReading.empty() for m in MetricId})

    def reading(self, metric: MetricId) -> SensorReading:
        return self.readings[MetricId(metric)]

    def __getitem__(self, metric: MetricId) -> SensorReading:
        return self.reading(metric)

    def merge(self, updates: Mapping[MetricId, SensorReading], last_error: Optional[str]) -> "TelemetrySnapshot":
        """Return a new snapshot with `updates` applied and `last_error` replaced"""
        readings = dict(self.readings)
        for metric, reading in updates.items():
            readings[MetricId(metric)] = reading
        return TelemetrySnapshot(readings=readings, last_error=last_error)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict"""
        data = {m.value: self.readings[m].to_dict() for m in MetricId}
        data["last_error"] = self.last_error
        return data

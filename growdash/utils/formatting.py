"""Display helpers for readings: values, time labels and status labels"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

NOT_UPDATED_LABEL = "not updated"
NO_DATA_LABEL = "no data"

_CLOCK_RE = re.compile(r"\b(\d{2}):(\d{2})(?::\d{2})?\b")

METRIC_UNITS = {
    "light": " lx",
    "temperature": "°C",
    "humidity": "%",
    "soil_moisture": "%",
    "water_depth": " cm",
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)"""
    return math.floor(value + 0.5)


def format_fixed(value: float, digits: int = 1) -> str:
    """Fixed-point text with halves rounded away from zero (26.25 -> '26.3')"""
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def time_label(raw: str) -> str:
    """HH:MM taken from a relay timestamp, or the 'not updated' label"""
    match = _CLOCK_RE.search(raw or "")
    if not match:
        return NOT_UPDATED_LABEL
    return f"{match.group(1)}:{match.group(2)}"


def format_update_time(raw: str) -> str:
    """Card footer label, e.g. 'updated 14:05'"""
    if not raw:
        return NOT_UPDATED_LABEL
    match = _CLOCK_RE.search(raw)
    if not match:
        return f"updated {raw}"
    return f"updated {match.group(1)}:{match.group(2)}"


def format_value(value: Optional[float], unit: str = "") -> str:
    """Integers as-is, other values with two decimals, absent as '--'"""
    if value is None:
        return f"--{unit}"
    if float(value).is_integer():
        return f"{int(value)}{unit}"
    return f"{format_fixed(value, 2)}{unit}"


def _temperature_status(value: float) -> str:
    if value < 18:
        return "low"
    if value > 30:
        return "high"
    if value < 22:
        return "slightly low"
    if value > 26:
        return "slightly high"
    return "optimal (22-26)"


def _humidity_status(value: float) -> str:
    if value < 30:
        return "low"
    if value > 80:
        return "high"
    if value < 40:
        return "slightly low"
    if value > 70:
        return "slightly high"
    return "comfortable (40-70)"


def _soil_status(value: float) -> str:
    if value < 25:
        return "needs water"
    if value > 80:
        return "too wet"
    if value < 35:
        return "slightly dry"
    if value > 70:
        return "slightly wet"
    return "optimal"


def _light_status(value: float) -> str:
    if value < 200:
        return "insufficient"
    if value < 800:
        return "weak"
    if value > 20000:
        return "too strong"
    return "sufficient"


def _water_status(value: float) -> str:
    if value < 3:
        return "low"
    return "ok"


_STATUS_FUNCS = {
    "light": _light_status,
    "temperature": _temperature_status,
    "humidity": _humidity_status,
    "soil_moisture": _soil_status,
    "water_depth": _water_status,
}


def metric_status(metric: str, value: Optional[float]) -> str:
    """Dashboard card status label for a metric value"""
    if value is None:
        return NO_DATA_LABEL
    key = getattr(metric, "value", metric)
    return _STATUS_FUNCS[key](value)

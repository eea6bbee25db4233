"""Tests for reading display helpers."""

import pytest

from growdash.models import MetricId
from growdash.utils.formatting import (
    format_fixed,
    format_update_time,
    format_value,
    metric_status,
    round_half_up,
    time_label,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2025-11-02 14:05:33", "14:05"),
        ("14:05", "14:05"),
        ("at 09:30 today", "09:30"),
        ("", "not updated"),
        ("2025-11-02", "not updated"),
        ("9:30", "not updated"),
    ],
)
def test_time_label(raw, expected):
    assert time_label(raw) == expected


def test_format_update_time():
    assert format_update_time("2025-11-02 14:05:33") == "updated 14:05"
    assert format_update_time("") == "not updated"
    assert format_update_time("yesterday") == "updated yesterday"


@pytest.mark.parametrize("value, expected", [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (-2.5, -2)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize(
    "value, digits, expected",
    [(26.25, 1, "26.3"), (26.44, 1, "26.4"), (2.25, 1, "2.3"), (3, 1, "3.0"), (-1.25, 1, "-1.3"), (25.456, 2, "25.46")],
)
def test_format_fixed(value, digits, expected):
    assert format_fixed(value, digits) == expected


def test_format_value():
    assert format_value(None, "%") == "--%"
    assert format_value(25.0, "°C") == "25°C"
    assert format_value(25.456, "°C") == "25.46°C"
    assert format_value(300, " lx") == "300 lx"


@pytest.mark.parametrize(
    "metric, value, expected",
    [
        (MetricId.TEMPERATURE, 17, "low"),
        (MetricId.TEMPERATURE, 24, "optimal (22-26)"),
        (MetricId.TEMPERATURE, 27, "slightly high"),
        (MetricId.HUMIDITY, 85, "high"),
        (MetricId.HUMIDITY, 35, "slightly low"),
        (MetricId.SOIL_MOISTURE, 20, "needs water"),
        (MetricId.SOIL_MOISTURE, 75, "slightly wet"),
        (MetricId.SOIL_MOISTURE, 50, "optimal"),
        (MetricId.LIGHT, 100, "insufficient"),
        (MetricId.LIGHT, 25000, "too strong"),
        (MetricId.WATER_DEPTH, 2, "low"),
        ("light", 1000, "sufficient"),
        (MetricId.HUMIDITY, None, "no data"),
    ],
)
def test_metric_status(metric, value, expected):
    assert metric_status(metric, value) == expected

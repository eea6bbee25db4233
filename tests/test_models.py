"""Tests for snapshot, notification and analysis models."""

from __future__ import annotations

import pydantic
import pytest

from growdash.models import (
    AnalysisOutcome,
    AnalysisResult,
    MetricId,
    Notification,
    NotificationKind,
    SensorReading,
    Severity,
    SilhouetteImage,
    TelemetrySnapshot,
    health_tier,
    notification_badge,
    severity_badge,
)

from .helpers.fakes import make_snapshot


def test_initial_snapshot_has_all_metrics_absent():
    snapshot = TelemetrySnapshot.initial()

    assert set(snapshot.readings) == set(MetricId)
    assert all(not r.is_present for r in snapshot.readings.values())
    assert snapshot.last_error is None


def test_snapshot_requires_every_metric():
    with pytest.raises(ValueError, match="water_depth"):
        TelemetrySnapshot(readings={m: SensorReading.empty() for m in list(MetricId)[:4]})


def test_merge_replaces_only_updated_metrics():
    before = make_snapshot(light=900, temperature=23)
    update = SensorReading(value=25.0, time="2025-11-02 15:00:00", unix=1)

    after = before.merge({MetricId.TEMPERATURE: update}, last_error="HTTP 500")

    assert after[MetricId.TEMPERATURE] == update
    assert after[MetricId.LIGHT] == before[MetricId.LIGHT]
    assert after.last_error == "HTTP 500"
    # receiver untouched
    assert before[MetricId.TEMPERATURE].value == 23
    assert before.last_error is None


def test_snapshot_readings_are_read_only():
    snapshot = TelemetrySnapshot.initial()
    with pytest.raises(TypeError):
        snapshot.readings[MetricId.LIGHT] = SensorReading(value=1.0)


def test_snapshot_to_dict():
    data = make_snapshot(last_error="boom", soil_moisture=42).to_dict()

    assert data["soil_moisture"]["value"] == 42
    assert data["light"] == {"value": None, "time": "", "unix": None}
    assert data["last_error"] == "boom"


def test_reading_accepts_plain_metric_names():
    snapshot = make_snapshot(humidity=55)
    assert snapshot.reading("humidity").value == 55


def test_notification_to_dict():
    n = Notification("soil-low", NotificationKind.TASK, Severity.HIGH, "t", "d", "14:05")
    assert n.to_dict() == {
        "id": "soil-low",
        "kind": "task",
        "severity": "high",
        "title": "t",
        "detail": "d",
        "time_label": "14:05",
    }


@pytest.mark.parametrize("count, expected", [(0, "0"), (9, "9"), (10, "9+"), (42, "9+")])
def test_notification_badge(count, expected):
    assert notification_badge(count) == expected


def test_severity_badge():
    assert severity_badge(Severity.HIGH) == "High"
    assert severity_badge("medium") == "Medium"
    assert severity_badge(Severity.LOW) == "Low"


def test_analysis_result_accepts_wire_names(sample_analysis_payload):
    result = AnalysisResult.model_validate(sample_analysis_payload)

    assert result.plant_name == "Basil"
    assert result.metrics.canopy_width_cm == 140.0
    assert result.metrics.detected_anomalies == []


def test_analysis_result_rejects_missing_fields(sample_analysis_payload):
    del sample_analysis_payload["metrics"]["healthScore"]
    with pytest.raises(pydantic.ValidationError):
        AnalysisResult.model_validate(sample_analysis_payload)

    with pytest.raises(pydantic.ValidationError):
        AnalysisResult.model_validate({})


def test_radar_points_clamp_display_only(sample_analysis_result):
    outcome = AnalysisOutcome(result=sample_analysis_result)

    points = {subject: value for subject, value, _ in outcome.radar_points()}

    assert points["height"] == 32.5
    assert points["canopy"] == 100.0
    assert points["lai"] == pytest.approx(48.0)
    assert points["health"] == 86
    assert sample_analysis_result.metrics.canopy_width_cm == 140.0


def test_radar_lai_scaled_and_capped(sample_analysis_payload):
    sample_analysis_payload["metrics"]["leafAreaIndex"] = 6.0
    outcome = AnalysisOutcome(result=AnalysisResult.model_validate(sample_analysis_payload))

    assert dict((s, v) for s, v, _ in outcome.radar_points())["lai"] == 100.0


@pytest.mark.parametrize("score, tier", [(95, "good"), (80.5, "good"), (80, "warn"), (51, "warn"), (50, "critical"), (0, "critical")])
def test_health_tier(score, tier):
    assert health_tier(score) == tier


def test_preferred_view_and_display_image(sample_analysis_result):
    photo = b"original-jpeg"
    silhouette = SilhouetteImage(data=b"mask-png")

    with_mask = AnalysisOutcome(result=sample_analysis_result, silhouette=silhouette)
    without = AnalysisOutcome(result=sample_analysis_result)

    assert with_mask.preferred_view == "silhouette"
    assert with_mask.display_image(photo) == b"mask-png"
    assert without.preferred_view == "original"
    assert without.display_image(photo) == photo


def test_outcome_to_dict(sample_analysis_result):
    data = AnalysisOutcome(result=sample_analysis_result).to_dict()

    assert data["plantName"] == "Basil"
    assert data["metrics"]["healthScore"] == 86
    assert data["preferredView"] == "original"
    assert data["healthTier"] == "good"
    assert data["hasSilhouette"] is False

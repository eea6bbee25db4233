"""Pytest configuration and fixtures for GrowDash tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from growdash.models import AnalysisResult, SilhouetteImage

from .helpers.fakes import FakeRelayClient


@pytest.fixture
def fake_relay() -> FakeRelayClient:
    """Relay client where every metric succeeds with 10.0."""
    return FakeRelayClient()


@pytest.fixture
def sample_analysis_payload() -> dict:
    """Analysis response as returned by the AI service (camelCase)."""
    return {
        "plantName": "Basil",
        "metrics": {
            "heightCm": 32.5,
            "canopyWidthCm": 140.0,
            "leafAreaIndex": 2.4,
            "healthScore": 86,
            "growthStage": "vegetative",
            "detectedAnomalies": [],
        },
        "silhouetteDescription": "Upright bushy plant with a rounded crown",
        "recommendations": ["Pinch the top leaves to encourage branching"],
    }


@pytest.fixture
def sample_analysis_result(sample_analysis_payload) -> AnalysisResult:
    return AnalysisResult.model_validate(sample_analysis_payload)


@pytest.fixture
def mock_ai_client(sample_analysis_result):
    """AI client where both requests succeed."""
    client = MagicMock()
    client.extract_metrics = AsyncMock(return_value=sample_analysis_result)
    client.generate_silhouette = AsyncMock(
        return_value=SilhouetteImage(data=b"\x89PNG-silhouette", mime_type="image/png")
    )
    return client

"""
Photo analysis models.

`AnalysisResult` mirrors the JSON schema the metrics request asks the AI
service for; the silhouette image travels beside it in `AnalysisOutcome`.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

RADAR_FULL_MARK = 100.0
LAI_RADAR_SCALE = 20  # LAI 0.1-5.0 -> 2-100


class PlantMetrics(BaseModel):
    height_cm: float = Field(alias="heightCm")
    canopy_width_cm: float = Field(alias="canopyWidthCm")
    leaf_area_index: float = Field(alias="leafAreaIndex")
    health_score: float = Field(alias="healthScore", ge=0, le=100)
    growth_stage: str = Field(alias="growthStage")
    detected_anomalies: List[str] = Field(alias="detectedAnomalies")

    class Config:
        populate_by_name = True


class AnalysisResult(BaseModel):
    plant_name: str = Field(alias="plantName")
    metrics: PlantMetrics
    silhouette_description: str = Field(alias="silhouetteDescription")
    recommendations: List[str]

    class Config:
        populate_by_name = True


@dataclass(frozen=True)
class SilhouetteImage:
    data: bytes
    mime_type: str = "image/png"


def _clamp(value: float, low: float = 0.0, high: float = RADAR_FULL_MARK) -> float:
    return max(low, min(value, high))


def health_tier(score: float) -> str:
    """Color tier for a health score: good (>80), warn (>50), else critical"""
    if score > 80:
        return "good"
    if score > 50:
        return "warn"
    return "critical"


@dataclass(frozen=True)
class AnalysisOutcome:
    """One analysis run: the metrics result plus an optional silhouette"""
    result: AnalysisResult
    silhouette: Optional[SilhouetteImage] = None

    @property
    def preferred_view(self) -> str:
        return "silhouette" if self.silhouette is not None else "original"

    def display_image(self, original: bytes) -> bytes:
        """Bytes to show by default: the silhouette when present, else the photo"""
        if self.silhouette is not None:
            return self.silhouette.data
        return original

    def radar_points(self) -> List[Tuple[str, float, float]]:
        """(subject, value, full_mark) points for the growth radar chart.

        Only the charted values are clamped; `result.metrics` is untouched.
        """
        m = self.result.metrics
        return [
            ("height", _clamp(m.height_cm), RADAR_FULL_MARK),
            ("canopy", _clamp(m.canopy_width_cm), RADAR_FULL_MARK),
            ("lai", _clamp(m.leaf_area_index * LAI_RADAR_SCALE), RADAR_FULL_MARK),
            ("health", m.health_score, RADAR_FULL_MARK),
        ]

    @property
    def health_tier(self) -> str:
        return health_tier(self.result.metrics.health_score)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict (camelCase, like the wire format)"""
        data = self.result.model_dump(by_alias=True)
        data["preferredView"] = self.preferred_view
        data["healthTier"] = self.health_tier
        data["hasSilhouette"] = self.silhouette is not None
        return data

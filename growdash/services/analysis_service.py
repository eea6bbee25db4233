"""Analysis service - dual-request AI photo analysis"""

import asyncio
import logging
from typing import Optional

from ..exceptions import AnalysisError
from ..models import AnalysisOutcome
from .diagnostics import DiagnosticsService

logger = logging.getLogger(__name__)


class AnalysisService:
    """Runs the metrics request (mandatory) and silhouette request (optional) together"""

    def __init__(self, client, diagnostics: Optional[DiagnosticsService] = None):
        self.client = client
        self.diagnostics = diagnostics

    async def analyze(self, photo: bytes) -> AnalysisOutcome:
        """Analyze one photo.

        Both requests are in flight at once and both are awaited. A failed
        silhouette request only drops the silhouette.

        Raises:
            AnalysisError: if the photo is empty or the metrics request fails
        """
        if not photo:
            raise AnalysisError("No photo to analyze")

        logger.info(f"Analyzing photo ({len(photo)} bytes)")
        metrics_result, silhouette_result = await asyncio.gather(
            self.client.extract_metrics(photo),
            self.client.generate_silhouette(photo),
            return_exceptions=True,
        )

        if isinstance(metrics_result, BaseException):
            if self.diagnostics:
                self.diagnostics.record_analysis(success=False)
            logger.error(f"❌ Plant analysis failed: {metrics_result}")
            raise AnalysisError(f"Analysis failed: {metrics_result}") from metrics_result

        silhouette = silhouette_result
        if isinstance(silhouette_result, BaseException):
            logger.warning(f"Silhouette generation failed: {silhouette_result}")
            silhouette = None

        if self.diagnostics:
            self.diagnostics.record_analysis(success=True, silhouette_fallback=silhouette is None)

        outcome = AnalysisOutcome(result=metrics_result, silhouette=silhouette)
        logger.info(
            f"✅ Analysis complete: {outcome.result.plant_name} "
            f"(health {outcome.result.metrics.health_score:g}, view: {outcome.preferred_view})"
        )
        return outcome


class AnalysisSession:
    """Current photo and its latest outcome.

    Loading a new photo discards the previous outcome; a run that finishes
    after its photo was replaced has its result dropped.
    """

    def __init__(self, service: AnalysisService):
        self.service = service
        self._photo: Optional[bytes] = None
        self._outcome: Optional[AnalysisOutcome] = None
        self._generation = 0

    @property
    def photo(self) -> Optional[bytes]:
        return self._photo

    @property
    def outcome(self) -> Optional[AnalysisOutcome]:
        return self._outcome

    def load_photo(self, photo: bytes):
        """Replace the current photo and clear any previous outcome"""
        self._generation += 1
        self._photo = photo
        self._outcome = None

    async def run(self) -> Optional[AnalysisOutcome]:
        """Analyze the current photo

        Returns:
            The outcome, or None if the photo changed while the request ran

        Raises:
            AnalysisError: if no photo is loaded or the analysis fails
        """
        if self._photo is None:
            raise AnalysisError("No photo loaded")

        generation = self._generation
        try:
            outcome = await self.service.analyze(self._photo)
        except AnalysisError:
            if generation != self._generation:
                logger.info("Photo changed during analysis - dropping stale failure")
                return None
            raise

        if generation != self._generation:
            logger.info("Photo changed during analysis - dropping stale result")
            return None

        self._outcome = outcome
        return outcome

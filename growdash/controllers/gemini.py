"""Gemini client for plant photo analysis"""

import asyncio
import base64
import binascii
import json
import logging
from typing import Any, Dict, Optional

import httpx
import pydantic
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from ..exceptions import ParseError, TransportError, ValidationError
from ..models import AnalysisResult, SilhouetteImage
from .. import config

logger = logging.getLogger(__name__)

PHOTO_MIME_TYPE = "image/jpeg"

# SDK HTTP-layer failures surface as httpx errors, not APIError
AI_TRANSPORT_ERRORS = (genai_errors.APIError, httpx.HTTPError, asyncio.TimeoutError)

SYSTEM_INSTRUCTION = """
You are a world-class smart agriculture AI.
Analyze the provided plant image and extract its silhouette data.
Focus on morphological indicators: height, canopy width, leaf density and overall structure.
Give actionable agronomic advice.
Return strictly JSON.
"""

METRICS_PROMPT = """
Analyze this plant photo, focusing on its silhouette and growth indicators.
Estimate:
1. plantName
2. metrics: heightCm (cm), canopyWidthCm (cm), leafAreaIndex (0.1-5.0), healthScore (0-100) and growthStage.
3. silhouetteDescription: describe the shape of the plant.
4. detectedAnomalies: pests, wilting, yellowing and similar; an empty array if none.
5. recommendations for the grower.
"""

SILHOUETTE_PROMPT = (
    "Generate a pure black and white binary silhouette mask of the plant in this image. "
    "The plant should be black and the background white. "
    "Ensure high contrast and accurate shape preservation."
)

ANALYSIS_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "plantName": types.Schema(type=types.Type.STRING),
        "metrics": types.Schema(
            type=types.Type.OBJECT,
            properties={
                "heightCm": types.Schema(type=types.Type.NUMBER),
                "canopyWidthCm": types.Schema(type=types.Type.NUMBER),
                "leafAreaIndex": types.Schema(type=types.Type.NUMBER),
                "healthScore": types.Schema(type=types.Type.NUMBER),
                "growthStage": types.Schema(type=types.Type.STRING),
                "detectedAnomalies": types.Schema(
                    type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING)
                ),
            },
            required=[
                "heightCm", "canopyWidthCm", "leafAreaIndex",
                "healthScore", "growthStage", "detectedAnomalies",
            ],
        ),
        "silhouetteDescription": types.Schema(type=types.Type.STRING),
        "recommendations": types.Schema(
            type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING)
        ),
    },
    required=["plantName", "metrics", "silhouetteDescription", "recommendations"],
)


def decode_data_url(value: str) -> bytes:
    """Bytes from a 'data:<mime>;base64,<payload>' URL or bare base64 text.

    Raises:
        ParseError: if the payload is not valid base64
    """
    payload = value.split(",", 1)[1] if value.startswith("data:") else value
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as err:
        raise ParseError(f"Invalid base64 image data: {err}") from err


def _parse_json_text(text: Optional[str]) -> Dict[str, Any]:
    # Missing or malformed text degrades to an empty object; validation rejects it later
    try:
        data = json.loads(text or "{}")
    except ValueError:
        logger.warning("Analysis response was not valid JSON")
        return {}
    return data if isinstance(data, dict) else {}


class GeminiClient:
    """Thin async wrapper over google-genai for the two analysis requests"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        analysis_model: Optional[str] = None,
        silhouette_model: Optional[str] = None,
        client: Optional[genai.Client] = None,
    ):
        self.api_key = api_key or config.GEMINI_API_KEY
        self.analysis_model = analysis_model or config.ANALYSIS_MODEL
        self.silhouette_model = silhouette_model or config.SILHOUETTE_MODEL
        self._client = client

    @property
    def client(self) -> genai.Client:
        # Created lazily so the dashboard can run without an API key
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    @staticmethod
    def _contents(photo: bytes, prompt: str):
        return [
            types.Part.from_bytes(data=photo, mime_type=PHOTO_MIME_TYPE),
            prompt,
        ]

    async def extract_metrics(self, photo: bytes) -> AnalysisResult:
        """Structured metrics and assessment for a photo.

        Raises:
            TransportError: if the AI service call fails
            ValidationError: if the response does not match the result shape
        """
        try:
            response = await self.client.aio.models.generate_content(
                model=self.analysis_model,
                contents=self._contents(photo, METRICS_PROMPT),
                config=types.GenerateContentConfig(
                    system_instruction=SYSTEM_INSTRUCTION,
                    response_mime_type="application/json",
                    response_schema=ANALYSIS_SCHEMA,
                ),
            )
        except AI_TRANSPORT_ERRORS as err:
            raise TransportError(f"Analysis request failed: {err}") from err

        data = _parse_json_text(getattr(response, "text", None))
        try:
            return AnalysisResult.model_validate(data)
        except pydantic.ValidationError as err:
            raise ValidationError(
                f"Analysis response missing required fields ({err.error_count()} errors)"
            ) from err

    async def generate_silhouette(self, photo: bytes) -> Optional[SilhouetteImage]:
        """Black-and-white silhouette mask of the plant, or None if none was produced.

        Raises:
            TransportError: if the AI service call fails
        """
        try:
            response = await self.client.aio.models.generate_content(
                model=self.silhouette_model,
                contents=self._contents(photo, SILHOUETTE_PROMPT),
            )
        except AI_TRANSPORT_ERRORS as err:
            raise TransportError(f"Silhouette request failed: {err}") from err

        candidates = getattr(response, "candidates", None) or []
        if not candidates or candidates[0].content is None:
            return None

        for part in candidates[0].content.parts or []:
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                return SilhouetteImage(data=inline.data, mime_type=inline.mime_type or "image/png")
        return None

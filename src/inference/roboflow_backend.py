"""
Roboflow hosted inference backend (production path).

Posts the base64 image as a form field to the hosted model endpoint and maps
the returned predictions to Detection values.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from models.config import ProviderConfig
from models.detection import Detection
from models.outcome import Failure, FailureKind, InferenceOutcome, Success

from .backend import InferenceBackend

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_BODY = "Unknown error"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class RoboflowPrediction(BaseModel):
    """One prediction in the provider response. Geometry is optional."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    class_name: str = Field(..., alias="class")
    confidence: float
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    class_id: Optional[int] = None


class RoboflowResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    predictions: List[RoboflowPrediction]


class RoboflowBackend(InferenceBackend):
    """
    HTTP client for the hosted detection endpoint.

    The httpx.AsyncClient is shared by all sessions; it pools connections and
    is safe for concurrent use. The caller owns its lifetime.
    """

    def __init__(self, cfg: ProviderConfig, client: httpx.AsyncClient):
        self.cfg = cfg
        self._client = client

    def _request_body(self, base64_image: str) -> str:
        # The provider expects the base64 string verbatim, not URL-encoded.
        return f"image={base64_image}"

    async def _post(self, base64_image: str) -> httpx.Response:
        return await self._client.post(
            self.cfg.endpoint,
            params={"api_key": self.cfg.api_key},
            headers={"Content-Type": FORM_CONTENT_TYPE},
            content=self._request_body(base64_image),
            timeout=self.cfg.timeout_s,
        )

    async def detect(self, base64_image: str) -> InferenceOutcome:
        start = time.monotonic()
        try:
            response = await asyncio.wait_for(self._post(base64_image), timeout=self.cfg.timeout_s)
        except asyncio.TimeoutError:
            logger.error("Inference request timed out after %.1fs (%s)", self.cfg.timeout_s, self.cfg.endpoint)
            return Failure(FailureKind.TRANSPORT_ERROR, "timeout")
        except httpx.HTTPError as e:
            logger.error("Failed to send inference request to %s: %r", self.cfg.endpoint, e)
            return Failure(FailureKind.TRANSPORT_ERROR, type(e).__name__)

        if not response.is_success:
            try:
                error_text = response.text
            except Exception:
                error_text = UNKNOWN_ERROR_BODY
            logger.error("Inference provider error (HTTP %d): %s", response.status_code, error_text[:500])
            return Failure(FailureKind.PROVIDER_ERROR, f"HTTP {response.status_code}")

        try:
            parsed = RoboflowResponse.model_validate_json(response.content)
        except ValidationError as e:
            logger.error("Failed to parse inference response: %s", e.errors(include_url=False)[:3])
            return Failure(FailureKind.DECODE_ERROR, "invalid response body")

        detections = tuple(Detection.from_prediction(p) for p in parsed.predictions)
        logger.debug(
            "Inference returned %d detections in %.0f ms",
            len(detections),
            (time.monotonic() - start) * 1000.0,
        )
        return Success(detections)

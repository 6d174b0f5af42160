"""Image label and landmark annotation via Google Vision."""

import base64
from typing import Protocol

import httpx

from ..logging_config import get_logger
from ..models import ImageAnalysis

logger = get_logger(__name__)

ANNOTATE_URL = "https://vision.googleapis.com/v1/images:annotate"


class IVisionService(Protocol):
    async def annotate(self, image: bytes) -> ImageAnalysis | None:
        """Labels and landmark for `image`, or None if analysis failed."""
        ...


class GoogleVisionClient:
    """Label detection (top 5) and landmark detection (top 1)."""

    def __init__(self, http: httpx.AsyncClient, api_key: str):
        self._http = http
        self._api_key = api_key

    async def annotate(self, image: bytes) -> ImageAnalysis | None:
        body = {
            "requests": [
                {
                    "image": {"content": base64.b64encode(image).decode("ascii")},
                    "features": [
                        {"type": "LABEL_DETECTION", "maxResults": 5},
                        {"type": "LANDMARK_DETECTION", "maxResults": 1},
                    ],
                }
            ]
        }

        try:
            response = await self._http.post(
                ANNOTATE_URL, params={"key": self._api_key}, json=body
            )
            response.raise_for_status()
            result = response.json()["responses"][0]
        except (httpx.HTTPError, KeyError, IndexError, ValueError) as e:
            logger.error(f"Image analysis error: {e}")
            return None

        labels = [label["description"] for label in result.get("labelAnnotations") or []]
        landmarks = result.get("landmarkAnnotations") or []

        if landmarks:
            landmark = landmarks[0]
            return ImageAnalysis(
                landmark=landmark.get("description"),
                confidence=round(landmark.get("score", 0) * 100, 2),
                labels=labels or None,
            )

        return ImageAnalysis(labels=labels or None)

"""
Generative Content Service Client
=================================
Opaque async collaborator that authors product copy and mockup imagery.

The studio only consumes the structured fields the service populates; it
never interprets prompts or models.

Environment Variables:
- STUDIO_FUNCTIONS_BASE_URL: Base URL of the edge functions host
- STUDIO_FUNCTIONS_API_KEY: Bearer key for the functions host
"""

import logging
import os
from typing import Any, Dict, Optional, Protocol

import httpx
from pydantic import BaseModel

from merchstudio.draft.actions import ApplyGeneratedContent
from merchstudio.draft.models import Draft

logger = logging.getLogger(__name__)

EDITORIAL_OPERATION = "creative-studio-editorial"
IMAGE_OPERATION = "creative-studio-image"

# editorial response key -> copy field
EDITORIAL_FIELDS = {
    "productName": "title",
    "description": "description",
    "tagline": "tagline",
    "seoTitle": "seo_title",
    "seoDescription": "seo_description",
}


class ContentServiceError(Exception):
    """Transport-level failure talking to the content service."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ContentResult(BaseModel):
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class ContentService(Protocol):
    async def invoke(self, operation: str, payload: Dict[str, Any]) -> ContentResult:
        ...


class FunctionsContentService:
    """POSTs {payload} to {base_url}/{operation} and wraps the JSON answer."""

    DEFAULT_TIMEOUT = 60.0

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or os.getenv("STUDIO_FUNCTIONS_BASE_URL", "")).rstrip("/")
        self.api_key = api_key or os.getenv("STUDIO_FUNCTIONS_API_KEY", "")
        self.timeout = timeout
        self._transport = transport

        if not self.base_url:
            logger.warning("STUDIO_FUNCTIONS_BASE_URL not configured")

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url)

    def _get_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def invoke(self, operation: str, payload: Dict[str, Any]) -> ContentResult:
        if not self.is_configured:
            raise ContentServiceError("Content service not configured. Set STUDIO_FUNCTIONS_BASE_URL.")

        url = f"{self.base_url}/{operation}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json=payload, headers=self._get_headers())
        except httpx.TimeoutException:
            raise ContentServiceError(f"{operation} timed out after {self.timeout}s")
        except httpx.RequestError as e:
            raise ContentServiceError(f"{operation} request failed: {str(e)}")

        if response.status_code >= 400:
            logger.error(f"Content service {operation} returned {response.status_code}")
            return ContentResult(error=f"{operation} failed ({response.status_code}): {response.text[:200]}")

        body = response.json() if response.content else {}
        if isinstance(body, dict) and body.get("error"):
            return ContentResult(error=str(body["error"]))
        return ContentResult(result=body if isinstance(body, dict) else {"data": body})


# ===== Request / response mapping =====

def editorial_request(draft: Draft) -> Dict[str, Any]:
    return {
        "productTitle": draft.copy_fields.title,
        "productType": draft.product_type,
        "mascotName": draft.mascot_name,
        "colorLine": draft.color_line.value if draft.color_line else None,
        "brandBook": draft.brand.value if draft.brand else None,
    }


def image_request(draft: Draft, scene_preset: str = "studio") -> Dict[str, Any]:
    payload = editorial_request(draft)
    payload.pop("productTitle")
    payload["scenePreset"] = scene_preset
    return payload


def to_generated_content(result: Dict[str, Any]) -> ApplyGeneratedContent:
    """
    Map a content service answer onto the draft's copy and image slots.

    Unknown keys are dropped; empty strings never overwrite existing copy.
    Sections of the wrong shape are ignored.
    """
    editorial = result.get("editorial")
    if not isinstance(editorial, dict):
        editorial = {}
    copy_fields = {
        field: str(editorial[key])
        for key, field in EDITORIAL_FIELDS.items()
        if editorial.get(key)
    }

    image_urls = []
    if isinstance(result.get("imageUrl"), str) and result["imageUrl"]:
        image_urls.append(result["imageUrl"])
    extra = result.get("imageUrls")
    if isinstance(extra, list):
        image_urls.extend(u for u in extra if isinstance(u, str) and u)

    return ApplyGeneratedContent(copy_fields=copy_fields, image_urls=image_urls)

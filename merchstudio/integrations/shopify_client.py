"""
Shopify Admin API Client for Merch Studio
=========================================
Async catalog access for publishing studio products: create the product,
then join it to the collections picked in the wizard.

Environment Variables Required:
- SHOPIFY_ADMIN_BASE_URL: Base URL (e.g., https://techno-dog.myshopify.com/admin/api/2025-01)
- SHOPIFY_ACCESS_TOKEN: Admin API access token

Usage:
    from merchstudio.integrations.shopify_client import ShopifyCatalogService

    service = ShopifyCatalogService()
    result = await service.create_product(payload)
"""

import asyncio
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel

from merchstudio.publish.gate import CatalogCreateResult
from merchstudio.publish.payload import COLLECTIONS_KEY

logger = logging.getLogger(__name__)


class ShopifyError(Exception):
    """Base exception for Shopify API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None, response_body: Optional[Dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class ShopifyAuthError(ShopifyError):
    """Token rejected or missing scopes (401/403)."""
    pass


class ShopifyRateLimitError(ShopifyError):
    """Call bucket exhausted (429)."""

    def __init__(self, message: str, retry_after: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ShopifyNotFoundError(ShopifyError):
    """Unknown product or collection (404)."""
    pass


class ShopifyValidationError(ShopifyError):
    """Payload rejected by Shopify (422)."""
    pass


# status -> (error class, message prefix)
_STATUS_ERRORS = {
    401: (ShopifyAuthError, "Authentication failed"),
    403: (ShopifyAuthError, "Access forbidden"),
    404: (ShopifyNotFoundError, "Resource not found"),
    422: (ShopifyValidationError, "Validation error"),
}


@dataclass
class RateLimitInfo:
    """Call-limit bucket reported by the last response."""
    current: int
    max: int
    retry_after: Optional[float] = None

    @property
    def remaining(self) -> int:
        return self.max - self.current


class ConnectionStatus(BaseModel):
    """Result of a shop probe for the admin health endpoint."""
    ok: bool
    configured: bool = True
    shop: Optional[str] = None
    domain: Optional[str] = None
    api_version: Optional[str] = None
    error: Optional[str] = None
    auth_error: bool = False


def _float_or_none(value: Optional[str]) -> Optional[float]:
    try:
        return float(value) if value else None
    except ValueError:
        return None


def numeric_collection_id(collection_id: str) -> Optional[int]:
    """Collection id as the REST API wants it; GraphQL gids keep their last segment."""
    tail = str(collection_id).rsplit("/", 1)[-1].strip()
    return int(tail) if tail.isdigit() else None


class ShopifyClient:
    """
    Async Shopify Admin API client.

    Features:
    - 429 and timeouts retried up to MAX_RETRIES attempts
    - Non-2xx statuses raised as typed ShopifyError subclasses
    - Call-limit header tracked in last_rate_limit
    """

    DEFAULT_TIMEOUT = 30.0
    MAX_RETRIES = 3
    RETRY_BACKOFF = 2.0  # seconds

    def __init__(
        self,
        base_url: Optional[str] = None,
        access_token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Shopify Admin API base URL (defaults to env var)
            access_token: Admin API access token (defaults to env var)
            timeout: Request timeout in seconds
            transport: httpx transport override (tests pass a MockTransport)
        """
        self.base_url = (base_url or os.getenv("SHOPIFY_ADMIN_BASE_URL", "")).rstrip("/")
        self.access_token = access_token or os.getenv("SHOPIFY_ACCESS_TOKEN", "")
        self.timeout = timeout
        self._transport = transport
        self._last_rate_limit: Optional[RateLimitInfo] = None

        if not self.is_configured:
            logger.warning("Shopify client not configured; publish will fail until SHOPIFY_ADMIN_BASE_URL and SHOPIFY_ACCESS_TOKEN are set")

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.access_token)

    @property
    def api_version(self) -> str:
        return self.base_url.rsplit("/", 1)[-1] if "/" in self.base_url else "unknown"

    @property
    def last_rate_limit(self) -> Optional[RateLimitInfo]:
        return self._last_rate_limit

    def _headers(self) -> Dict[str, str]:
        return {
            "X-Shopify-Access-Token": self.access_token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    @staticmethod
    def _read_call_limit(headers: httpx.Headers) -> Optional[RateLimitInfo]:
        retry_after = _float_or_none(headers.get("Retry-After"))
        bucket = headers.get("X-Shopify-Shop-Api-Call-Limit", "")
        used, _, size = bucket.partition("/")
        if used.isdigit() and size.isdigit():
            return RateLimitInfo(current=int(used), max=int(size), retry_after=retry_after)
        if retry_after is not None:
            return RateLimitInfo(current=0, max=0, retry_after=retry_after)
        return None

    def _decode(self, response: httpx.Response) -> Dict[str, Any]:
        """Return the JSON body of a 2xx response, raise the matching ShopifyError otherwise."""
        self._last_rate_limit = self._read_call_limit(response.headers)
        status = response.status_code

        if 200 <= status < 300:
            return response.json() if response.content else {}

        try:
            body = response.json() if response.content else {}
        except json.JSONDecodeError:
            body = {"raw": response.text}
        detail = body.get("errors", str(body))

        if status == 429:
            raise ShopifyRateLimitError(
                "Rate limit exceeded",
                status_code=status,
                response_body=body,
                retry_after=self._last_rate_limit.retry_after if self._last_rate_limit else None,
            )

        error_cls, prefix = _STATUS_ERRORS.get(status, (ShopifyError, f"Shopify API error ({status})"))
        raise error_cls(f"{prefix}: {detail}", status_code=status, response_body=body)

    async def _request(self, method: str, endpoint: str, data: Optional[Dict] = None) -> Dict[str, Any]:
        """
        Authenticated call against {base_url}{endpoint}.

        Raises:
            ShopifyError: not configured, transport failure, or non-2xx answer
        """
        if not self.is_configured:
            raise ShopifyError("Shopify client not configured. Set SHOPIFY_ADMIN_BASE_URL and SHOPIFY_ACCESS_TOKEN.")

        url = f"{self.base_url}{endpoint}"
        last_attempt = self.MAX_RETRIES - 1

        for attempt in range(self.MAX_RETRIES):
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                    response = await client.request(method, url, headers=self._headers(), json=data)
                return self._decode(response)
            except ShopifyRateLimitError as e:
                if attempt == last_attempt:
                    raise
                wait = e.retry_after if e.retry_after is not None else self.RETRY_BACKOFF * (attempt + 1)
                logger.warning(f"{method} {endpoint} throttled, retrying in {wait}s ({attempt + 1}/{self.MAX_RETRIES})")
                await asyncio.sleep(wait)
            except httpx.TimeoutException:
                if attempt == last_attempt:
                    raise ShopifyError(f"Request timeout after {self.MAX_RETRIES} attempts")
                logger.warning(f"{method} {endpoint} timed out, retrying ({attempt + 1}/{self.MAX_RETRIES})")
                await asyncio.sleep(self.RETRY_BACKOFF)
            except httpx.RequestError as e:
                raise ShopifyError(f"Request failed: {e}")

    async def get_shop(self) -> Dict[str, Any]:
        return await self._request("GET", "/shop.json")

    async def create_product(self, product_data: Dict[str, Any]) -> Dict[str, Any]:
        """POST /products.json; the created product comes back under "product"."""
        return await self._request("POST", "/products.json", data={"product": product_data})

    async def add_to_collection(self, product_id: str, collection_id: int) -> Dict[str, Any]:
        """POST /collects.json joining a product to a custom collection."""
        pid = int(product_id) if str(product_id).isdigit() else product_id
        collect = {"product_id": pid, "collection_id": collection_id}
        return await self._request("POST", "/collects.json", data={"collect": collect})

    async def health_check(self) -> ConnectionStatus:
        """Probe /shop.json; never raises."""
        if not self.is_configured:
            return ConnectionStatus(ok=False, configured=False, error="Client not configured")
        try:
            shop = (await self.get_shop()).get("shop", {})
        except ShopifyError as e:
            return ConnectionStatus(ok=False, error=str(e), auth_error=isinstance(e, ShopifyAuthError))
        return ConnectionStatus(
            ok=True,
            shop=shop.get("name"),
            domain=shop.get("myshopify_domain"),
            api_version=self.api_version,
        )


class ShopifyCatalogService:
    """
    Catalog collaborator for the publish gate.

    Shopify errors on create become CatalogCreateResult.error. Collection
    assignment runs after the product exists; its failures are reported as
    warnings because the product is already live.
    """

    def __init__(self, client: Optional[ShopifyClient] = None):
        self.client = client or get_shopify_client()

    async def create_product(self, product: Dict[str, Any]) -> CatalogCreateResult:
        product = dict(product)
        collection_ids = product.pop(COLLECTIONS_KEY, None) or []

        try:
            body = await self.client.create_product(product)
        except ShopifyError as e:
            logger.error(f"Shopify create_product failed: {e}")
            return CatalogCreateResult(error=str(e))

        created = body.get("product", body)
        product_id = created.get("id")
        if product_id is None:
            return CatalogCreateResult(error="Shopify response did not include a product id")

        warnings = await self._assign_collections(str(product_id), collection_ids)
        return CatalogCreateResult(id=str(product_id), handle=created.get("handle"), warnings=warnings)

    async def _assign_collections(self, product_id: str, collection_ids: List[str]) -> List[str]:
        warnings = []
        for collection_id in collection_ids:
            numeric_id = numeric_collection_id(collection_id)
            if numeric_id is None:
                warnings.append(f"Skipped collection '{collection_id}': not a Shopify collection id")
                continue
            try:
                await self.client.add_to_collection(product_id, numeric_id)
            except ShopifyError as e:
                logger.error(f"Adding product {product_id} to collection {numeric_id} failed: {e}")
                warnings.append(f"Collection {numeric_id}: {e}")
        if collection_ids:
            logger.info(f"Product {product_id}: {len(collection_ids) - len(warnings)}/{len(collection_ids)} collection(s) assigned")
        return warnings


# Singleton instance
_client: Optional[ShopifyClient] = None


def get_shopify_client() -> ShopifyClient:
    """Get singleton Shopify client instance."""
    global _client
    if _client is None:
        _client = ShopifyClient()
    return _client

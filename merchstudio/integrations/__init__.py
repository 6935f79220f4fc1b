"""
Merch Studio External Collaborators

- shopify_client: catalog service (Shopify Admin API)
- content_client: generative copy / imagery service
"""

from .shopify_client import (
    ConnectionStatus,
    ShopifyAuthError,
    ShopifyCatalogService,
    ShopifyClient,
    ShopifyError,
    ShopifyNotFoundError,
    ShopifyRateLimitError,
    ShopifyValidationError,
    get_shopify_client,
)
from .content_client import (
    EDITORIAL_OPERATION,
    IMAGE_OPERATION,
    ContentResult,
    ContentService,
    ContentServiceError,
    FunctionsContentService,
    editorial_request,
    image_request,
    to_generated_content,
)

__all__ = [
    "ConnectionStatus",
    "ShopifyAuthError",
    "ShopifyCatalogService",
    "ShopifyClient",
    "ShopifyError",
    "ShopifyNotFoundError",
    "ShopifyRateLimitError",
    "ShopifyValidationError",
    "get_shopify_client",
    "EDITORIAL_OPERATION",
    "IMAGE_OPERATION",
    "ContentResult",
    "ContentService",
    "ContentServiceError",
    "FunctionsContentService",
    "editorial_request",
    "image_request",
    "to_generated_content",
]

"""
Merch Studio Publish Gate

Terminal step of both wizards: checklist gate + the single catalog call.
"""

from .payload import (
    COLLECTIONS_KEY,
    METAFIELD_NAMESPACE,
    build_metafields_payload,
    build_product_payload,
    build_tags,
    slugify_handle,
)
from .gate import (
    COLLABORATOR_TIMEOUT,
    AlreadyPublished,
    CatalogCreateResult,
    CatalogService,
    CatalogServiceError,
    NotAtTerminalStep,
    PublishError,
    PublishErrorCode,
    PublishOutcome,
    PublishTimeout,
    ValidationBlocked,
    check_publishable,
    publish,
)

__all__ = [
    "COLLECTIONS_KEY",
    "METAFIELD_NAMESPACE",
    "build_metafields_payload",
    "build_product_payload",
    "build_tags",
    "slugify_handle",
    "COLLABORATOR_TIMEOUT",
    "AlreadyPublished",
    "CatalogCreateResult",
    "CatalogService",
    "CatalogServiceError",
    "NotAtTerminalStep",
    "PublishError",
    "PublishErrorCode",
    "PublishOutcome",
    "PublishTimeout",
    "ValidationBlocked",
    "check_publishable",
    "publish",
]

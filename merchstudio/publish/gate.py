"""
Publish Gate

Decides whether a validated draft may be submitted to the catalog, and
submits it.

Rules:
- A failing checklist blocks publish unless the actor holds the owner capability
- Only a draft on its flow's terminal step can be published
- Exactly ONE create_product call per successful publish, none on any refusal
- Collaborator failures leave the input draft untouched
"""

import asyncio
import logging
import os
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field

from merchstudio.compliance.models import Actor, ValidationItem, all_passed
from merchstudio.draft.actions import MarkPublished
from merchstudio.draft.models import Draft
from merchstudio.draft.reducer import reduce
from merchstudio.shared.hashing import fingerprint
from merchstudio.workflow.machine import StepMachine

from .payload import build_product_payload

logger = logging.getLogger(__name__)

COLLABORATOR_TIMEOUT = float(os.getenv("STUDIO_COLLABORATOR_TIMEOUT", "30"))


class PublishErrorCode(str, Enum):
    VALIDATION_BLOCKED = "VALIDATION_BLOCKED"
    ALREADY_PUBLISHED = "ALREADY_PUBLISHED"
    NOT_AT_TERMINAL_STEP = "NOT_AT_TERMINAL_STEP"
    CATALOG_ERROR = "CATALOG_ERROR"
    TIMEOUT = "TIMEOUT"


class PublishError(Exception):
    """Exception for publish refusals and catalog failures."""

    def __init__(self, error_code: PublishErrorCode, message: str, http_code: int = 409):
        self.error_code = error_code
        self.message = message
        self.http_code = http_code
        super().__init__(f"{error_code.value}: {message}")


class ValidationBlocked(PublishError):
    def __init__(self, failures: List[ValidationItem]):
        self.failures = list(failures)
        ids = ", ".join(f.id for f in self.failures)
        super().__init__(
            PublishErrorCode.VALIDATION_BLOCKED,
            f"{len(self.failures)} compliance check(s) failed: {ids}",
            http_code=422,
        )


class AlreadyPublished(PublishError):
    def __init__(self, draft_id: str, product_id: Optional[str]):
        super().__init__(
            PublishErrorCode.ALREADY_PUBLISHED,
            f"Draft {draft_id} is already published as product {product_id}",
        )


class NotAtTerminalStep(PublishError):
    def __init__(self, current_step: str, terminal_step: str):
        super().__init__(
            PublishErrorCode.NOT_AT_TERMINAL_STEP,
            f"Publish is only available from '{terminal_step}', draft is on '{current_step}'",
        )


class CatalogServiceError(PublishError):
    def __init__(self, message: str):
        super().__init__(PublishErrorCode.CATALOG_ERROR, message, http_code=502)


class PublishTimeout(PublishError):
    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(PublishErrorCode.TIMEOUT, f"Catalog service did not answer within {timeout}s", http_code=504)


class CatalogCreateResult(BaseModel):
    """What the catalog service returns for one create_product call."""
    id: Optional[str] = None
    handle: Optional[str] = None
    error: Optional[str] = None
    # Follow-up problems that did not stop the product from being created
    warnings: List[str] = Field(default_factory=list)


class CatalogService(Protocol):
    async def create_product(self, product: Dict[str, Any]) -> CatalogCreateResult:
        ...


class PublishOutcome(BaseModel):
    """Successful publish: the catalog product and the now-terminal draft."""
    product_id: str
    handle: Optional[str] = None
    draft: Draft
    payload_hash: str = Field(..., description="Fingerprint of the payload sent to the catalog")
    override_notes: List[str] = Field(default_factory=list)
    catalog_warnings: List[str] = Field(default_factory=list)
    published_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def check_publishable(draft: Draft, items: List[ValidationItem], actor: Actor) -> None:
    """
    Raise the first refusal that applies; return None when publish may proceed.

    Raises:
        AlreadyPublished: draft is already terminal
        NotAtTerminalStep: draft is not on its flow's last step
        ValidationBlocked: failures present and actor is not owner
    """
    if draft.is_published:
        raise AlreadyPublished(draft.draft_id, draft.published_product_id)

    machine = StepMachine.for_flow(draft.flow)
    if not machine.is_terminal(draft):
        raise NotAtTerminalStep(draft.current_step, machine.last_step.id)

    if not all_passed(items) and not actor.is_owner:
        raise ValidationBlocked([i for i in items if i.failed])


def _override_notes(items: List[ValidationItem], actor: Actor) -> List[str]:
    notes = [i.override_note for i in items if i.override_note]
    if actor.is_owner:
        notes.extend(f"Owner force-publish over failed check '{i.id}': {i.message}" for i in items if i.failed)
    return notes


async def publish(
    draft: Draft,
    items: List[ValidationItem],
    actor: Actor,
    catalog_service: CatalogService,
    *,
    timeout: float = COLLABORATOR_TIMEOUT,
) -> PublishOutcome:
    """
    Submit a draft to the catalog.

    Args:
        draft: Draft on its terminal step
        items: Checklist from validate() for this draft and actor
        actor: Capability token; owners may publish over failures
        catalog_service: External catalog (create_product)
        timeout: Seconds to wait for the catalog before giving up

    Returns:
        PublishOutcome with the product id and the published draft

    Raises:
        PublishError subclasses; the input draft is never modified
    """
    check_publishable(draft, items, actor)

    payload = build_product_payload(draft)
    payload_hash = fingerprint(payload)
    notes = _override_notes(items, actor)
    if notes:
        logger.warning(f"Publishing draft {draft.draft_id} with {len(notes)} override note(s)")

    try:
        result = await asyncio.wait_for(catalog_service.create_product(payload), timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(f"Catalog create_product timed out after {timeout}s for draft {draft.draft_id}")
        raise PublishTimeout(timeout)
    except PublishError:
        raise
    except Exception as e:
        logger.error(f"Catalog create_product failed for draft {draft.draft_id}: {e}")
        raise CatalogServiceError(str(e))

    if result.error or not result.id:
        message = result.error or "Catalog returned no product id"
        logger.error(f"Catalog rejected draft {draft.draft_id}: {message}")
        raise CatalogServiceError(message)

    for warning in result.warnings:
        logger.warning(f"Catalog follow-up for draft {draft.draft_id}: {warning}")

    published = reduce(draft, MarkPublished(
        product_id=str(result.id),
        handle=result.handle or payload.get("handle"),
        override_notes=notes,
    ))
    logger.info(f"Published draft {draft.draft_id} as product {result.id}")

    return PublishOutcome(
        product_id=str(result.id),
        handle=published.published_handle,
        draft=published,
        payload_hash=payload_hash,
        override_notes=notes,
        catalog_warnings=list(result.warnings),
    )

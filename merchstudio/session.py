"""
Workflow Session

Single-writer orchestrator for one wizard run. Holds the latest Draft,
applies actions through the reducer, and owns the two async boundaries:
AI enhancement (content service) and publish (catalog service).

Rules:
- One in-flight collaborator call at a time; content actions raise
  SessionBusy meanwhile, navigation and reset stay available
- Every async call is tagged with (generation, step); a result whose tag
  no longer matches the live draft is discarded
- Collaborator failures are recorded in last_error and never touch the draft
- Status changes come from validate() and the publish gate, never from dispatch
"""

import asyncio
import logging
import os
from typing import Any, Dict, List, NamedTuple, Optional

from merchstudio.compliance.models import ANONYMOUS, Actor, ValidationReport
from merchstudio.compliance.validate import validate_draft
from merchstudio.draft.actions import NAVIGATION_ACTIONS, GoNext, MarkPublished, MarkValidated, Reset
from merchstudio.draft.models import BrandIdentity, Draft, DraftStatus, WorkflowFlow
from merchstudio.draft.reducer import reduce, start_draft
from merchstudio.integrations.content_client import (
    EDITORIAL_OPERATION,
    IMAGE_OPERATION,
    ContentService,
    editorial_request,
    image_request,
    to_generated_content,
)
from merchstudio.publish.gate import (
    COLLABORATOR_TIMEOUT,
    AlreadyPublished,
    CatalogService,
    CatalogServiceError,
    PublishOutcome,
    PublishTimeout,
    publish,
)
from merchstudio.workflow.machine import StepMachine, StepState

logger = logging.getLogger(__name__)

DEFAULT_VENDOR = os.getenv("STUDIO_VENDOR", "techno.dog")

# Only validate() and the publish gate may issue these
GATE_ONLY_ACTIONS = (MarkValidated, MarkPublished)


class SessionBusy(Exception):
    """A collaborator call is in flight; content edits must wait."""
    pass


class ActionNotPermitted(Exception):
    """Status actions reserved for validation and the publish gate."""
    pass


class Ticket(NamedTuple):
    """Identity of the draft an async call was issued against."""
    generation: int
    step_id: str


class WorkflowSession:
    """
    One user's pass through a wizard.

    Usage:
        session = WorkflowSession(WorkflowFlow.STUDIO, actor=Actor(is_owner=True),
                                  catalog_service=ShopifyCatalogService())
        session.dispatch(SelectArchetype(archetype_id="hoodie"))
        ...
        outcome = await session.publish()

    A saved draft continues where it left off:
        session = WorkflowSession.resume(Draft.model_validate_json(saved))
    """

    def __init__(
        self,
        flow: WorkflowFlow = WorkflowFlow.STUDIO,
        brand: Optional[BrandIdentity] = None,
        actor: Actor = ANONYMOUS,
        content_service: Optional[ContentService] = None,
        catalog_service: Optional[CatalogService] = None,
        timeout: float = COLLABORATOR_TIMEOUT,
        vendor: str = DEFAULT_VENDOR,
        draft: Optional[Draft] = None,
    ):
        self.actor = actor
        self.content_service = content_service
        self.catalog_service = catalog_service
        self.timeout = timeout
        self._draft = draft if draft is not None else start_draft(flow, brand=brand, vendor=vendor)
        self.machine = StepMachine.for_flow(self._draft.flow)
        self._busy = False
        self.last_error: Optional[str] = None
        self.last_report: Optional[ValidationReport] = None
        self.last_outcome: Optional[PublishOutcome] = None
        # Catalog product created by a publish whose result arrived stale
        self.orphaned_outcome: Optional[PublishOutcome] = None

    @classmethod
    def resume(cls, draft: Draft, **kwargs) -> "WorkflowSession":
        """Continue a saved draft from its current step."""
        logger.info(f"Resuming draft {draft.draft_id} on step {draft.current_step} (generation {draft.generation})")
        return cls(draft.flow, draft=draft, **kwargs)

    # ===== State =====

    @property
    def draft(self) -> Draft:
        return self._draft

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def current_step(self) -> str:
        return self.machine.current(self._draft).id

    def steps(self) -> List[StepState]:
        return self.machine.describe(self._draft)

    def ticket(self) -> Ticket:
        return Ticket(self._draft.generation, self._draft.current_step)

    def is_current(self, ticket: Ticket) -> bool:
        return ticket == self.ticket()

    # ===== Synchronous actions =====

    def dispatch(self, action) -> Draft:
        """
        Apply one action to the live draft.

        Raises:
            ActionNotPermitted: MarkValidated / MarkPublished from outside the gate
            SessionBusy: content action while a collaborator call is in flight
            DraftError / VariantGenerationError: from the reducer (draft unchanged)
        """
        if isinstance(action, GATE_ONLY_ACTIONS):
            raise ActionNotPermitted(f"'{action.type}' is applied by validation and publish only")
        if self._busy and not isinstance(action, NAVIGATION_ACTIONS + (Reset,)):
            raise SessionBusy(f"Cannot apply '{action.type}' while a collaborator call is in flight")
        self._draft = reduce(self._draft, action)
        return self._draft

    def reset(self, keep_brand: bool = True) -> Draft:
        self.last_error = None
        self.last_report = None
        return self.dispatch(Reset(keep_brand=keep_brand))

    def validate(self) -> ValidationReport:
        """Run the checklist; a fully passing report marks the draft validated."""
        report = validate_draft(self._draft, self.actor)
        self.last_report = report
        if report.all_passed and not self._draft.is_published and self._draft.status != DraftStatus.VALIDATED:
            self._draft = reduce(self._draft, MarkValidated())
        return report

    # ===== Async boundaries =====

    def _begin(self) -> Ticket:
        if self._busy:
            raise SessionBusy("Another collaborator call is already in flight")
        self._busy = True
        self.last_error = None
        return self.ticket()

    def _discard_if_stale(self, ticket: Ticket, what: str) -> bool:
        if self.is_current(ticket):
            return False
        logger.warning(
            f"Discarding stale {what} result issued at generation {ticket.generation} "
            f"step {ticket.step_id}; draft is now at generation {self._draft.generation} "
            f"step {self._draft.current_step}"
        )
        return True

    async def enhance(
        self,
        operation: str = EDITORIAL_OPERATION,
        payload: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Ask the content service for copy / imagery and merge it into the draft.

        Returns:
            True if the draft was updated, False on failure or stale result
        """
        if self.content_service is None:
            self.last_error = "Content service not configured"
            return False

        ticket = self._begin()
        request = payload if payload is not None else editorial_request(self._draft)
        try:
            result = await asyncio.wait_for(
                self.content_service.invoke(operation, request),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            self.last_error = f"{operation} timed out after {self.timeout}s"
            logger.error(self.last_error)
            return False
        except Exception as e:
            self.last_error = f"{operation} failed: {e}"
            logger.error(self.last_error)
            return False
        finally:
            self._busy = False

        if self._discard_if_stale(ticket, operation):
            return False
        if result.error:
            self.last_error = result.error
            logger.error(f"{operation} returned an error: {result.error}")
            return False

        try:
            generated = to_generated_content(result.result or {})
            if not generated.copy_fields and not generated.image_urls:
                self.last_error = f"{operation} returned no usable copy or images"
                logger.error(self.last_error)
                return False
            self._draft = reduce(self._draft, generated)
        except ValueError as e:
            self.last_error = f"{operation} returned unusable content: {e}"
            logger.error(self.last_error)
            return False
        return True

    async def generate_mockup(self, scene_preset: str = "studio") -> bool:
        """Ask the content service for a mockup image of the current product."""
        return await self.enhance(IMAGE_OPERATION, image_request(self._draft, scene_preset))

    async def publish(self) -> Optional[PublishOutcome]:
        """
        Validate and submit the draft through the publish gate.

        Returns:
            PublishOutcome, or None when the catalog failed / the result went stale

        Raises:
            ValidationBlocked, AlreadyPublished, NotAtTerminalStep: gate refusals
        """
        if self.catalog_service is None:
            self.last_error = "Catalog service not configured"
            return None

        orphan = self.orphaned_outcome
        if orphan is not None and orphan.draft.generation == self._draft.generation:
            raise AlreadyPublished(self._draft.draft_id, orphan.product_id)

        report = self.validate()
        ticket = self._begin()
        try:
            outcome = await publish(
                self._draft,
                report.items,
                self.actor,
                self.catalog_service,
                timeout=self.timeout,
            )
        except (CatalogServiceError, PublishTimeout) as e:
            self.last_error = e.message
            return None
        finally:
            self._busy = False

        if self._discard_if_stale(ticket, "publish"):
            self.orphaned_outcome = outcome
            self.last_error = f"Product {outcome.product_id} was created but the workflow moved on"
            return None

        self._draft = outcome.draft
        self.last_outcome = outcome
        return outcome

    async def go_next(self) -> Draft:
        """
        Advance one step; on the terminal step this is the publish action.
        """
        if self.machine.is_terminal(self._draft):
            await self.publish()
            return self._draft
        return self.dispatch(GoNext())

"""
Step State Machine

Read-only projection of a Draft onto its wizard: which step is current,
which steps are complete, and where navigation may go.

Rules:
- go_next / go_back move exactly one position
- go_to_step only looks backward or onto already-earned ground
- completion is evaluated against the live draft on every call, never cached
- nothing here raises; disallowed moves return the draft unchanged
"""

import logging
from typing import Dict, List, Optional

from pydantic import BaseModel

from merchstudio.draft.models import Draft, WorkflowFlow

from .steps import FLOW_STEPS, Step

logger = logging.getLogger(__name__)


class StepState(BaseModel):
    """Per-step view used to render a progress sidebar."""
    id: str
    number: int
    title: str
    required: bool
    complete: bool
    current: bool
    reachable: bool


class StepMachine:
    """Navigation rules for one flow's fixed step sequence."""

    def __init__(self, steps: List[Step]):
        if not steps:
            raise ValueError("A workflow needs at least one step")
        self.steps = list(steps)
        self._index: Dict[str, int] = {s.id: i for i, s in enumerate(self.steps)}

    @classmethod
    def for_flow(cls, flow: WorkflowFlow) -> "StepMachine":
        return cls(FLOW_STEPS[WorkflowFlow(flow)])

    @property
    def first_step(self) -> Step:
        return self.steps[0]

    @property
    def last_step(self) -> Step:
        return self.steps[-1]

    def index_of(self, step_id: str) -> Optional[int]:
        return self._index.get(step_id)

    def current_index(self, draft: Draft) -> int:
        """Position of the draft's current step; unknown ids count as the first step."""
        index = self.index_of(draft.current_step)
        return 0 if index is None else index

    def current(self, draft: Draft) -> Step:
        return self.steps[self.current_index(draft)]

    def is_terminal(self, draft: Draft) -> bool:
        return self.current_index(draft) == len(self.steps) - 1

    # ===== Completion =====

    def is_step_complete(self, step_id: str, draft: Draft) -> bool:
        index = self.index_of(step_id)
        if index is None:
            return False
        try:
            return bool(self.steps[index].predicate(draft))
        except Exception as e:
            logger.error(f"Completion check for step {step_id} failed: {e}")
            return False

    def completed_steps(self, draft: Draft) -> List[str]:
        return [s.id for s in self.steps if self.is_step_complete(s.id, draft)]

    # ===== Navigation checks =====

    def can_go_next(self, draft: Draft) -> bool:
        if self.is_terminal(draft):
            return False
        step = self.current(draft)
        return (not step.required) or self.is_step_complete(step.id, draft)

    def can_go_back(self, draft: Draft) -> bool:
        return self.current_index(draft) > 0

    def can_go_to(self, step_id: str, draft: Draft) -> bool:
        """
        Direct jumps are allowed to:
        - any step at or before the current one
        - any step already complete
        - the immediate next step, when the current step can be left
        """
        target = self.index_of(step_id)
        if target is None:
            return False
        current = self.current_index(draft)
        if target <= current:
            return True
        if self.is_step_complete(step_id, draft):
            return True
        return target == current + 1 and self.can_go_next(draft)

    # ===== Navigation =====

    def _move_to(self, draft: Draft, index: int) -> Draft:
        return draft.model_copy(update={"current_step": self.steps[index].id})

    def go_next(self, draft: Draft) -> Draft:
        if not self.can_go_next(draft):
            return draft
        return self._move_to(draft, self.current_index(draft) + 1)

    def go_back(self, draft: Draft) -> Draft:
        if not self.can_go_back(draft):
            return draft
        return self._move_to(draft, self.current_index(draft) - 1)

    def go_to_step(self, step_id: str, draft: Draft) -> Draft:
        if not self.can_go_to(step_id, draft):
            logger.debug(f"Jump to {step_id} refused from {draft.current_step}")
            return draft
        return self._move_to(draft, self._index[step_id])

    def describe(self, draft: Draft) -> List[StepState]:
        current = self.current_index(draft)
        done = set(self.completed_steps(draft))
        return [
            StepState(
                id=s.id,
                number=s.number,
                title=s.title,
                required=s.required,
                complete=s.id in done,
                current=i == current,
                reachable=self.can_go_to(s.id, draft),
            )
            for i, s in enumerate(self.steps)
        ]

"""
Compliance Models

Verdicts produced by the validator and the report built from them.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from merchstudio.shared.hashing import fingerprint


class ValidationStatus(str, Enum):
    """Verdict of one compliance rule."""
    PASS = "pass"
    FAIL = "fail"
    WARN = "warn"
    NOT_APPLICABLE = "not_applicable"


class RuleCategory(str, Enum):
    REQUIRED = "required"
    APPROVED_VALUE = "approved_value"
    ADVISORY = "advisory"
    COHERENCE = "coherence"


class Actor(BaseModel):
    """
    Capability token for the person running the workflow.

    is_owner grants the override: approved-value failures on custom designs
    downgrade to warnings and the publish gate accepts failing drafts.
    """
    actor_id: Optional[str] = None
    is_owner: bool = False

    class Config:
        frozen = True


ANONYMOUS = Actor()


class ValidationItem(BaseModel):
    """Result of one compliance rule evaluated against a draft."""

    id: str = Field(..., description="Stable rule identifier")
    label: str = Field(..., description="Human-readable rule name")
    category: RuleCategory
    status: ValidationStatus
    message: str = ""
    override_note: Optional[str] = Field(
        None,
        description="Set when an owner override downgraded a failure to a warning"
    )

    class Config:
        frozen = True

    @property
    def failed(self) -> bool:
        return self.status == ValidationStatus.FAIL

    def to_hash_dict(self) -> Dict[str, Any]:
        """Return dict suitable for deterministic hashing."""
        return {
            "id": self.id,
            "status": self.status.value,
            "override_note": self.override_note,
        }


class ValidationReport(BaseModel):
    """
    Checklist summary over a full rule run.

    Publishability: fail_count == 0, or the actor holds the owner capability.
    """

    items: List[ValidationItem] = Field(default_factory=list)

    pass_count: int = 0
    fail_count: int = 0
    warn_count: int = 0
    not_applicable_count: int = 0

    results_hash: str = Field(..., description="SHA256 of the item verdicts for determinism checks")

    @classmethod
    def from_items(cls, items: List[ValidationItem]) -> "ValidationReport":
        counts = {status: 0 for status in ValidationStatus}
        for item in items:
            counts[item.status] += 1
        return cls(
            items=list(items),
            pass_count=counts[ValidationStatus.PASS],
            fail_count=counts[ValidationStatus.FAIL],
            warn_count=counts[ValidationStatus.WARN],
            not_applicable_count=counts[ValidationStatus.NOT_APPLICABLE],
            results_hash=compute_results_hash(items),
        )

    @property
    def all_passed(self) -> bool:
        return self.fail_count == 0

    @property
    def applicable_count(self) -> int:
        return len(self.items) - self.not_applicable_count

    @property
    def failures(self) -> List[ValidationItem]:
        return [i for i in self.items if i.failed]

    @property
    def override_notes(self) -> List[str]:
        return [i.override_note for i in self.items if i.override_note]

    def can_publish(self, actor: Actor) -> bool:
        return self.all_passed or actor.is_owner


def all_passed(items: List[ValidationItem]) -> bool:
    return not any(i.failed for i in items)


def compute_results_hash(items: List[ValidationItem]) -> str:
    """
    Deterministic hash of a rule run.

    Ensures: same draft + guideline + actor -> same hash
    """
    return fingerprint(sorted((i.to_hash_dict() for i in items), key=lambda d: d["id"]))

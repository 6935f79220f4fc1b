"""
Compliance Validator

validate(draft, guideline, actor) -> List[ValidationItem]

Total over any draft: exactly one item per registered rule, in registry
order. A rule that raises is reported as a FAIL item; the validator itself
never raises.
"""

import logging
from typing import List, Optional

from merchstudio.draft.models import Draft

from .guidelines import BrandGuideline, get_guideline
from .models import (
    ANONYMOUS,
    Actor,
    RuleCategory,
    ValidationItem,
    ValidationReport,
    ValidationStatus,
)
from .rules import RULES, Rule

logger = logging.getLogger(__name__)

OVERRIDE_NOTE = "Owner override: custom design outside the approved set"


def _evaluate(rule: Rule, draft: Draft, guideline: Optional[BrandGuideline], actor: Actor) -> ValidationItem:
    try:
        status, message = rule.check(draft, guideline, actor)
    except Exception as e:
        logger.error(f"Compliance rule {rule.id} crashed on draft {draft.draft_id}: {e}")
        return ValidationItem(
            id=rule.id,
            label=rule.label,
            category=rule.category,
            status=ValidationStatus.FAIL,
            message=f"Rule could not be evaluated: {e}",
        )

    override_note = None
    if (
        status == ValidationStatus.FAIL
        and rule.category == RuleCategory.APPROVED_VALUE
        and draft.custom_design
        and actor.is_owner
    ):
        status = ValidationStatus.WARN
        override_note = f"{OVERRIDE_NOTE} ({message})"

    return ValidationItem(
        id=rule.id,
        label=rule.label,
        category=rule.category,
        status=status,
        message=message,
        override_note=override_note,
    )


def validate(
    draft: Draft,
    guideline: Optional[BrandGuideline] = None,
    actor: Actor = ANONYMOUS,
    rules: Optional[List[Rule]] = None,
) -> List[ValidationItem]:
    """
    Evaluate every compliance rule against a draft.

    Args:
        draft: Draft to check
        guideline: Brand book for the draft's brand (None if no brand chosen)
        actor: Capability token; owners downgrade approved-value failures on custom designs
        rules: Rule registry override (defaults to the full registry)

    Returns:
        One ValidationItem per rule, in registry order
    """
    return [_evaluate(rule, draft, guideline, actor) for rule in (rules or RULES)]


def validate_draft(draft: Draft, actor: Actor = ANONYMOUS) -> ValidationReport:
    """Validate against the guideline of the draft's own brand and summarize."""
    items = validate(draft, get_guideline(draft.brand), actor)
    report = ValidationReport.from_items(items)
    logger.info(
        f"Validated draft {draft.draft_id}: {report.pass_count} pass, "
        f"{report.fail_count} fail, {report.warn_count} warn"
    )
    return report

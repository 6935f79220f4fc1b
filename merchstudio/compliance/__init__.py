"""
Merch Studio Compliance

Brand-book checklist over a Draft: required fields, approved-value
membership, advisory completeness and cross-field coherence.

The owner capability is passed in explicitly as an Actor; there is no
global override flag.
"""

from .models import (
    ANONYMOUS,
    Actor,
    RuleCategory,
    ValidationItem,
    ValidationReport,
    ValidationStatus,
    all_passed,
    compute_results_hash,
)
from .guidelines import (
    GUIDELINES,
    TECHNO_DOG_GUIDELINE,
    TECHNO_DOGGIES_GUIDELINE,
    ApprovedColor,
    ApprovedMascot,
    ApprovedProduct,
    BrandGuideline,
    GuidelineRule,
    get_guideline,
    stroke_color_for,
)
from .rules import RULE_COUNT, RULES, Rule
from .validate import validate, validate_draft

__all__ = [
    "ANONYMOUS",
    "Actor",
    "RuleCategory",
    "ValidationItem",
    "ValidationReport",
    "ValidationStatus",
    "all_passed",
    "compute_results_hash",
    "GUIDELINES",
    "TECHNO_DOG_GUIDELINE",
    "TECHNO_DOGGIES_GUIDELINE",
    "ApprovedColor",
    "ApprovedMascot",
    "ApprovedProduct",
    "BrandGuideline",
    "GuidelineRule",
    "get_guideline",
    "stroke_color_for",
    "RULE_COUNT",
    "RULES",
    "Rule",
    "validate",
    "validate_draft",
]

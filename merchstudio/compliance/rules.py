"""
Compliance Rules

Fixed rule registry. Every rule sees the draft, the active brand guideline
(None when no brand is chosen) and the actor, and returns a status plus a
message. Rules never short-circuit each other; the validator runs them all.

Categories:
- REQUIRED: missing -> FAIL
- APPROVED_VALUE: not a member -> FAIL (owner custom designs downgrade to WARN)
- ADVISORY: missing -> WARN, never FAIL
- COHERENCE: structurally invalid combination -> FAIL
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from merchstudio.catalog.lookup import COLOR_DIMENSION, get_archetype
from merchstudio.draft.models import Draft

from .guidelines import BrandGuideline, stroke_color_for
from .models import Actor, RuleCategory, ValidationStatus

RuleResult = Tuple[ValidationStatus, str]
RuleCheck = Callable[[Draft, Optional[BrandGuideline], Actor], RuleResult]

PASS = ValidationStatus.PASS
FAIL = ValidationStatus.FAIL
WARN = ValidationStatus.WARN
NA = ValidationStatus.NOT_APPLICABLE


@dataclass(frozen=True)
class Rule:
    id: str
    label: str
    category: RuleCategory
    check: RuleCheck


# =============================================================================
# REQUIRED FIELDS
# =============================================================================

def _title_present(draft, guideline, actor) -> RuleResult:
    title = draft.copy_fields.title.strip()
    if not title:
        return FAIL, "Product title is required"
    return PASS, f'"{title}"'


def _product_type_present(draft, guideline, actor) -> RuleResult:
    if not draft.product_type.strip():
        return FAIL, "No product type selected"
    return PASS, draft.product_type


def _variants_present(draft, guideline, actor) -> RuleResult:
    if not draft.variants:
        return FAIL, "At least one variant is required"
    return PASS, f"{len(draft.variants)} variant(s) configured"


def _price_set(draft, guideline, actor) -> RuleResult:
    prices = [v.price for v in draft.variants]
    if not prices or not any(p > 0 for p in prices):
        return FAIL, "No pricing set"
    low, high = min(prices), max(prices)
    if low == high:
        return PASS, f"€{low}"
    return PASS, f"€{low} - €{high}"


def _brand_selected(draft, guideline, actor) -> RuleResult:
    if draft.brand is None or guideline is None:
        return FAIL, "No brand book selected"
    return PASS, f"Using {guideline.name}"


# =============================================================================
# APPROVED-VALUE MEMBERSHIP
# =============================================================================

def _approved_product(draft, guideline, actor) -> RuleResult:
    if guideline is None or guideline.approved_products is None:
        return NA, "Brand book does not restrict product types"
    if not draft.archetype_id:
        return FAIL, f"Product type \"{draft.product_type}\" is not in the approved merchandise list"
    product = guideline.product(draft.archetype_id)
    if product is None:
        return FAIL, f"Product type \"{draft.product_type}\" is not in the approved merchandise list"
    return PASS, f"{draft.product_type} - {product.placement}"


def _approved_mascot(draft, guideline, actor) -> RuleResult:
    if not draft.mascot_id:
        return NA, "No mascot selected"
    if guideline is None or not guideline.has_mascots:
        # Reported by the brand/mascot coherence rule
        return NA, "Brand book has no mascot pack"
    mascot = guideline.mascot(draft.mascot_id)
    if mascot is None:
        return FAIL, f'Mascot "{draft.mascot_id}" is not in the approved list of core variants'
    archetype = get_archetype(draft.archetype_id) if draft.archetype_id else None
    if archetype is not None and archetype.is_apparel and not mascot.approved_for_apparel:
        return FAIL, f'Mascot "{mascot.display_name}" is not approved for apparel'
    return PASS, f"{mascot.display_name} (approved)"


def _palette_product(draft, guideline):
    if guideline is None or not draft.archetype_id:
        return None
    return guideline.product(draft.archetype_id)


def _fabric_colors(draft, guideline, actor) -> RuleResult:
    product = _palette_product(draft, guideline)
    dimension = draft.dimension(COLOR_DIMENSION)
    if product is None or dimension is None or not product.fabric_colors:
        return NA, "No fabric palette applies"
    chosen = draft.selected_values(COLOR_DIMENSION)
    rejected = [v for v in chosen if dimension.code_for(v).lower() not in product.fabric_colors]
    if rejected:
        return FAIL, (
            f"Fabric color(s) {', '.join(rejected)} not approved for {draft.product_type}. "
            f"Approved: {', '.join(product.fabric_colors)}"
        )
    return PASS, f"{len(chosen)} approved fabric color(s)"


def _stroke_color(draft, guideline, actor) -> RuleResult:
    product = _palette_product(draft, guideline)
    stroke = stroke_color_for(draft.color_line)
    if product is None or stroke is None or not product.stroke_colors:
        return NA, "No stroke palette applies"
    if stroke not in product.stroke_colors:
        return FAIL, f"Stroke color \"{stroke}\" is not approved. Approved: {', '.join(product.stroke_colors)}"
    return PASS, f"{stroke} stroke"


# =============================================================================
# ADVISORY COMPLETENESS
# =============================================================================

def _description(draft, guideline, actor) -> RuleResult:
    text = draft.copy_fields.description.strip()
    if not text:
        return WARN, "No description set"
    return PASS, f"{len(text)} characters"


def _seo(draft, guideline, actor) -> RuleResult:
    missing = [
        name for name, value in (
            ("SEO title", draft.copy_fields.seo_title),
            ("SEO description", draft.copy_fields.seo_description),
        )
        if not value.strip()
    ]
    if missing:
        return WARN, f"Missing {', '.join(missing)}"
    return PASS, "SEO title and description set"


def _images(draft, guideline, actor) -> RuleResult:
    if not draft.images:
        return WARN, "No product images"
    return PASS, f"{len(draft.images)} image(s)"


def _metafields(draft, guideline, actor) -> RuleResult:
    if not draft.metafields:
        return WARN, "No metafields set"
    return PASS, f"{len(draft.metafields)} metafield(s)"


def _collections(draft, guideline, actor) -> RuleResult:
    if not draft.collection_ids:
        return WARN, "Not assigned to any collection"
    return PASS, f"{len(draft.collection_ids)} collection(s)"


# =============================================================================
# CROSS-FIELD COHERENCE
# =============================================================================

def _brand_mascot_coherence(draft, guideline, actor) -> RuleResult:
    if not draft.mascot_id:
        return NA, "No mascot selected"
    if guideline is not None and not guideline.has_mascots:
        return FAIL, (
            f"{guideline.name} brand does not use mascots. "
            "Switch to a brand book with a mascot pack for mascot products."
        )
    return PASS, "Mascot matches brand book"


def _color_line_coherence(draft, guideline, actor) -> RuleResult:
    if guideline is None or not guideline.requires_color_line:
        return NA, "No color line required"
    if draft.color_line is None:
        return FAIL, "No color line selected"
    return PASS, f"{draft.color_line.value} selected"


def _custom_design_authorization(draft, guideline, actor) -> RuleResult:
    if not draft.custom_design:
        return NA, "Standard brand-book design"
    if not actor.is_owner:
        return FAIL, "Custom designs outside brand guidelines require owner authorization"
    return WARN, "Owner override: custom design allowed outside standard guidelines"


RULES: List[Rule] = [
    Rule("title", "Product Title", RuleCategory.REQUIRED, _title_present),
    Rule("product-type", "Product Type", RuleCategory.REQUIRED, _product_type_present),
    Rule("variants", "Variants", RuleCategory.REQUIRED, _variants_present),
    Rule("pricing", "Pricing", RuleCategory.REQUIRED, _price_set),
    Rule("brand-selected", "Brand Book Selected", RuleCategory.REQUIRED, _brand_selected),
    Rule("approved-product", "Approved Product Type", RuleCategory.APPROVED_VALUE, _approved_product),
    Rule("approved-mascot", "Approved Mascot", RuleCategory.APPROVED_VALUE, _approved_mascot),
    Rule("fabric-color", "Fabric Color", RuleCategory.APPROVED_VALUE, _fabric_colors),
    Rule("stroke-color", "Stroke Color", RuleCategory.APPROVED_VALUE, _stroke_color),
    Rule("description", "Description", RuleCategory.ADVISORY, _description),
    Rule("seo", "SEO", RuleCategory.ADVISORY, _seo),
    Rule("images", "Product Images", RuleCategory.ADVISORY, _images),
    Rule("metafields", "Metafields", RuleCategory.ADVISORY, _metafields),
    Rule("collections", "Collections", RuleCategory.ADVISORY, _collections),
    Rule("brand-mascot", "Brand / Mascot Coherence", RuleCategory.COHERENCE, _brand_mascot_coherence),
    Rule("color-line", "Color Line Compliance", RuleCategory.COHERENCE, _color_line_coherence),
    Rule("custom-design", "Custom Design Authorization", RuleCategory.COHERENCE, _custom_design_authorization),
]

RULE_COUNT = len(RULES)

"""
Workflow Step Definitions

Both wizards draw their steps from one registry: a step id always has the
same completion predicate, whichever flow it appears in.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List

from merchstudio.draft.models import BrandIdentity, Draft, DraftStatus, WorkflowFlow

# Step ids
PRODUCT_SELECT = "product-select"
VARIANT_CONFIG = "variant-config"
BRAND_DESIGN = "brand-design"
VISUAL_SELECTION = "visual-selection"
COLOR_LINE = "color-line"
AI_ENHANCE = "ai-enhance"
PUBLISH = "publish"

StepPredicate = Callable[[Draft], bool]


def _product_selected(draft: Draft) -> bool:
    return bool(draft.copy_fields.title.strip()) and bool(draft.product_type.strip())


def _variants_configured(draft: Draft) -> bool:
    return len(draft.variants) > 0


def _brand_chosen(draft: Draft) -> bool:
    return draft.brand is not None


def _visual_chosen(draft: Draft) -> bool:
    # techno.dog has no mascot concept
    return draft.mascot_id is not None or draft.brand == BrandIdentity.TECHNO_DOG


def _color_line_chosen(draft: Draft) -> bool:
    return draft.brand == BrandIdentity.TECHNO_DOG or draft.color_line is not None


def _content_enhanced(draft: Draft) -> bool:
    return draft.ai_enhanced or draft.editorial_brief is not None


def _published(draft: Draft) -> bool:
    return draft.status == DraftStatus.PUBLISHED


STEP_PREDICATES: Dict[str, StepPredicate] = {
    PRODUCT_SELECT: _product_selected,
    VARIANT_CONFIG: _variants_configured,
    BRAND_DESIGN: _brand_chosen,
    VISUAL_SELECTION: _visual_chosen,
    COLOR_LINE: _color_line_chosen,
    AI_ENHANCE: _content_enhanced,
    PUBLISH: _published,
}


@dataclass(frozen=True)
class Step:
    """An ordinal, named phase of a wizard."""
    id: str
    number: int
    title: str
    description: str
    required: bool = True

    @property
    def predicate(self) -> StepPredicate:
        return STEP_PREDICATES[self.id]


def _steps(*specs) -> List[Step]:
    return [
        Step(id=step_id, number=i + 1, title=title, description=description, required=required)
        for i, (step_id, title, description, required) in enumerate(specs)
    ]


STUDIO_STEPS: List[Step] = _steps(
    (PRODUCT_SELECT, "Select Product", "Choose a product type and name it", True),
    (VARIANT_CONFIG, "Configure Variants", "Set sizes, colors, and pricing", True),
    (BRAND_DESIGN, "Brand Design", "Apply brand book and mascot", True),
    (AI_ENHANCE, "AI Enhancement", "Generate copy and mockups", False),
    (PUBLISH, "Publish", "Review and publish to Shopify", True),
)

CREATIVE_STEPS: List[Step] = _steps(
    (BRAND_DESIGN, "Brand Selection", "Choose your brand identity", True),
    (VISUAL_SELECTION, "Visual Assets", "Select mascot or icon (optional)", False),
    (COLOR_LINE, "Color Line", "Green Line or White Line stroke", True),
    (PRODUCT_SELECT, "Product & Placement", "Select product and name it", True),
    (VARIANT_CONFIG, "Variants & Pricing", "Select sizes, colors, material and margin", True),
    (PUBLISH, "Review & Publish", "Compliance check and publish", True),
)

FLOW_STEPS: Dict[WorkflowFlow, List[Step]] = {
    WorkflowFlow.STUDIO: STUDIO_STEPS,
    WorkflowFlow.CREATIVE: CREATIVE_STEPS,
}

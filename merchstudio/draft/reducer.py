"""
Draft Reducer

(Draft, Action) -> Draft. The only way a draft changes.

Rules:
- Drafts are never mutated in place; each action returns a new Draft
- The variant matrix is regenerated after every action that feeds it
- A published draft accepts navigation and reset only
- Content edits to a validated draft drop it back to in_progress
"""

import logging
from typing import Callable, Dict, List, Optional, Type

from merchstudio.catalog.lookup import (
    SIZE_DIMENSION,
    default_dimensions,
    get_archetype,
    get_archetype_by_name,
    material_for,
    sizes_for_archetype,
)
from merchstudio.catalog.models import Dimension
from merchstudio.variants.generate import clamp_margin, generate
from merchstudio.variants.models import MATERIALS_SKU_POLICY, SKU_POLICIES, Pricing
from merchstudio.workflow.machine import StepMachine

from .actions import (
    MATRIX_ACTIONS,
    NAVIGATION_ACTIONS,
    NON_CONTENT_ACTIONS,
    AddDimension,
    AddImage,
    ApplyGeneratedContent,
    GoBack,
    GoNext,
    GoToStep,
    MarkPublished,
    MarkValidated,
    RemoveDimension,
    Reset,
    SaveDraft,
    SelectArchetype,
    SelectBrand,
    SelectGender,
    SelectMascot,
    SelectMaterial,
    SetCollections,
    SetColorLine,
    SetCustomDesign,
    SetEditorialBrief,
    SetMargin,
    SetMetafields,
    SetPricing,
    SetProductType,
    SetSelection,
    SetSkuPolicy,
    SetSkuSeed,
    ToggleValue,
    UpdateCopy,
)
from .models import (
    BrandIdentity,
    CopyFields,
    Draft,
    DraftStatus,
    ProductImage,
    WorkflowFlow,
)

logger = logging.getLogger(__name__)

DEFAULT_COLOR_SELECTION = ["Black"]

# Copy fields the generative content service may fill
GENERATED_COPY_FIELDS = frozenset(["title", "description", "tagline", "seo_title", "seo_description"])


class DraftError(ValueError):
    """Base error for actions the draft cannot accept."""
    pass


class DraftLocked(DraftError):
    """The draft is published; edits must go through the catalog update path."""

    def __init__(self, draft_id: str, action_type: str):
        self.draft_id = draft_id
        self.action_type = action_type
        super().__init__(f"Draft {draft_id} is published; '{action_type}' is not permitted")


class UnknownOption(DraftError):
    """Archetype, material, dimension or SKU policy that does not exist."""
    pass


class UnknownArchetype(UnknownOption):
    def __init__(self, archetype_id: str):
        self.archetype_id = archetype_id
        super().__init__(f"Unknown archetype: {archetype_id}")


def start_draft(
    flow: WorkflowFlow = WorkflowFlow.STUDIO,
    brand: Optional[BrandIdentity] = None,
    generation: int = 0,
    vendor: str = "techno.dog",
) -> Draft:
    """Fresh draft positioned on the flow's first step."""
    machine = StepMachine.for_flow(flow)
    return Draft(
        flow=flow,
        generation=generation,
        current_step=machine.first_step.id,
        brand=brand,
        copy_fields=CopyFields(vendor=vendor),
    )


# ===== Variant matrix =====

def regenerate_variants(draft: Draft) -> Draft:
    """
    Rebuild the variant list from the draft's configuration.

    Without pricing there is nothing to price, so the list stays empty.
    """
    if draft.pricing is None:
        return draft.model_copy(update={"variants": []})

    archetype = get_archetype(draft.archetype_id) if draft.archetype_id else None
    policy = SKU_POLICIES[draft.sku_policy]
    archetype_code = draft.archetype_id or draft.product_type or "PRD"
    weight = archetype.weight_grams if archetype else None

    variants = generate(
        draft.dimensions,
        draft.selection,
        draft.pricing,
        archetype_code=archetype_code,
        policy=policy,
        disambiguator=draft.sku_seed,
        weight_grams=weight,
    )
    return draft.model_copy(update={"variants": variants})


# ===== Product type & variant configuration =====

def _select_archetype(draft: Draft, action: SelectArchetype) -> Draft:
    archetype = get_archetype(action.archetype_id)
    if archetype is None:
        raise UnknownArchetype(action.archetype_id)

    gender = action.gender if archetype.has_gender else None
    dimensions = default_dimensions(archetype, gender)
    selection = {d.name: [] for d in dimensions}
    if any(d.name == "Color" for d in dimensions):
        selection["Color"] = list(DEFAULT_COLOR_SELECTION)

    material = archetype.default_material
    margin = draft.pricing.margin_pct if draft.pricing else Pricing.model_fields["margin_pct"].default
    pricing = Pricing(
        base_price=archetype.base_price,
        material_multiplier=material.price_multiplier if material else 1,
        margin_pct=margin,
    )
    return draft.model_copy(update={
        "archetype_id": archetype.id,
        "product_type": archetype.name,
        "gender": gender,
        "material_id": material.id if material else None,
        "dimensions": dimensions,
        "selection": selection,
        "pricing": pricing,
    })


def _set_product_type(draft: Draft, action: SetProductType) -> Draft:
    archetype = get_archetype_by_name(action.product_type)
    if archetype is not None and archetype.id != draft.archetype_id:
        updated = _select_archetype(draft, SelectArchetype(archetype_id=archetype.id))
        return updated.model_copy(update={"product_type": action.product_type.strip()})
    return draft.model_copy(update={"product_type": action.product_type.strip()})


def _select_gender(draft: Draft, action: SelectGender) -> Draft:
    archetype = get_archetype(draft.archetype_id) if draft.archetype_id else None
    if archetype is None or not archetype.has_gender:
        return draft.model_copy(update={"gender": action.gender})

    sizes = sizes_for_archetype(archetype, action.gender)
    dimensions = [
        Dimension(name=d.name, values=sizes, codes=d.codes) if d.name == SIZE_DIMENSION else d
        for d in draft.dimensions
    ]
    selection = dict(draft.selection)
    if SIZE_DIMENSION in selection:
        selection[SIZE_DIMENSION] = [s for s in selection[SIZE_DIMENSION] if s in sizes]
    return draft.model_copy(update={
        "gender": action.gender,
        "dimensions": dimensions,
        "selection": selection,
    })


def _select_material(draft: Draft, action: SelectMaterial) -> Draft:
    archetype = get_archetype(draft.archetype_id) if draft.archetype_id else None
    material = material_for(archetype, action.material_id) if archetype else None
    if material is None:
        raise UnknownOption(f"Unknown material '{action.material_id}' for {draft.archetype_id}")
    pricing = draft.pricing.model_copy(update={"material_multiplier": material.price_multiplier})
    return draft.model_copy(update={"material_id": material.id, "pricing": pricing})


def _set_pricing(draft: Draft, action: SetPricing) -> Draft:
    margin = action.margin_pct
    if draft.sku_policy == MATERIALS_SKU_POLICY.name:
        margin = clamp_margin(margin)
    pricing = Pricing(
        base_price=action.base_price,
        material_multiplier=action.material_multiplier,
        margin_pct=margin,
    )
    return draft.model_copy(update={"pricing": pricing})


def _set_margin(draft: Draft, action: SetMargin) -> Draft:
    if draft.pricing is None:
        raise UnknownOption("Cannot set a margin before pricing is known")
    margin = action.margin_pct
    if draft.sku_policy == MATERIALS_SKU_POLICY.name:
        margin = clamp_margin(margin)
    return draft.model_copy(update={"pricing": draft.pricing.model_copy(update={"margin_pct": margin})})


def _add_dimension(draft: Draft, action: AddDimension) -> Draft:
    if draft.dimension(action.name) is not None:
        return draft
    dimension = Dimension(name=action.name, values=list(action.values))
    selected = list(action.values) if action.selected is None else list(action.selected)
    selection = dict(draft.selection)
    selection[action.name] = selected
    return draft.model_copy(update={
        "dimensions": list(draft.dimensions) + [dimension],
        "selection": selection,
    })


def _remove_dimension(draft: Draft, action: RemoveDimension) -> Draft:
    selection = {k: v for k, v in draft.selection.items() if k != action.name}
    return draft.model_copy(update={
        "dimensions": [d for d in draft.dimensions if d.name != action.name],
        "selection": selection,
    })


def _require_dimension(draft: Draft, name: str) -> Dimension:
    dimension = draft.dimension(name)
    if dimension is None:
        raise UnknownOption(f"Dimension '{name}' is not active")
    return dimension


def _toggle_value(draft: Draft, action: ToggleValue) -> Draft:
    _require_dimension(draft, action.dimension)
    current = draft.selected_values(action.dimension)
    if action.value in current:
        current = [v for v in current if v != action.value]
    else:
        current.append(action.value)
    selection = dict(draft.selection)
    selection[action.dimension] = current
    return draft.model_copy(update={"selection": selection})


def _set_selection(draft: Draft, action: SetSelection) -> Draft:
    _require_dimension(draft, action.dimension)
    selection = dict(draft.selection)
    selection[action.dimension] = list(action.values)
    return draft.model_copy(update={"selection": selection})


def _set_sku_policy(draft: Draft, action: SetSkuPolicy) -> Draft:
    if action.policy not in SKU_POLICIES:
        raise UnknownOption(f"Unknown SKU policy: {action.policy}")
    updated = draft.model_copy(update={"sku_policy": action.policy})
    if action.policy == MATERIALS_SKU_POLICY.name and draft.pricing is not None:
        pricing = draft.pricing.model_copy(update={"margin_pct": clamp_margin(draft.pricing.margin_pct)})
        updated = updated.model_copy(update={"pricing": pricing})
    return updated


def _set_sku_seed(draft: Draft, action: SetSkuSeed) -> Draft:
    return draft.model_copy(update={"sku_seed": action.seed})


# ===== Brand =====

def _select_brand(draft: Draft, action: SelectBrand) -> Draft:
    if draft.brand == action.brand:
        return draft
    return draft.model_copy(update={
        "brand": action.brand,
        "mascot_id": None,
        "mascot_name": None,
        "color_line": None,
    })


def _select_mascot(draft: Draft, action: SelectMascot) -> Draft:
    return draft.model_copy(update={"mascot_id": action.mascot_id, "mascot_name": action.mascot_name})


def _set_color_line(draft: Draft, action: SetColorLine) -> Draft:
    return draft.model_copy(update={"color_line": action.color_line})


def _set_custom_design(draft: Draft, action: SetCustomDesign) -> Draft:
    return draft.model_copy(update={"custom_design": action.enabled})


# ===== Copy & media =====

def _update_copy(draft: Draft, action: UpdateCopy) -> Draft:
    changes = action.model_dump(exclude={"type"}, exclude_none=True)
    return draft.model_copy(update={"copy_fields": draft.copy_fields.model_copy(update=changes)})


def _set_editorial_brief(draft: Draft, action: SetEditorialBrief) -> Draft:
    return draft.model_copy(update={"editorial_brief": action.brief})


def _apply_generated_content(draft: Draft, action: ApplyGeneratedContent) -> Draft:
    changes = {
        k: v for k, v in action.copy_fields.items()
        if k in GENERATED_COPY_FIELDS and isinstance(v, str) and v.strip()
    }
    ignored = sorted(set(action.copy_fields) - GENERATED_COPY_FIELDS)
    if ignored:
        logger.warning(f"Ignoring generated fields without a copy slot: {ignored}")

    images = list(draft.images)
    for url in action.image_urls:
        images.append(ProductImage(src=url, alt=draft.copy_fields.title or None, position=len(images) + 1))

    return draft.model_copy(update={
        "copy_fields": draft.copy_fields.model_copy(update=changes),
        "images": images,
        "ai_enhanced": True,
    })


def _add_image(draft: Draft, action: AddImage) -> Draft:
    image = ProductImage(src=action.src, alt=action.alt, position=len(draft.images) + 1)
    return draft.model_copy(update={"images": list(draft.images) + [image]})


def _set_metafields(draft: Draft, action: SetMetafields) -> Draft:
    return draft.model_copy(update={"metafields": list(action.metafields)})


def _set_collections(draft: Draft, action: SetCollections) -> Draft:
    return draft.model_copy(update={"collection_ids": list(dict.fromkeys(action.collection_ids))})


# ===== Lifecycle =====

def _save_draft(draft: Draft, action: SaveDraft) -> Draft:
    if draft.status == DraftStatus.VALIDATED:
        return draft
    return draft.model_copy(update={"status": DraftStatus.DRAFT})


def _mark_validated(draft: Draft, action: MarkValidated) -> Draft:
    return draft.model_copy(update={"status": DraftStatus.VALIDATED})


def _mark_published(draft: Draft, action: MarkPublished) -> Draft:
    return draft.model_copy(update={
        "status": DraftStatus.PUBLISHED,
        "published_product_id": action.product_id,
        "published_handle": action.handle,
        "override_notes": list(action.override_notes),
    })


def _reset(draft: Draft, action: Reset) -> Draft:
    logger.info(f"Resetting draft {draft.draft_id} (generation {draft.generation})")
    return start_draft(
        flow=draft.flow,
        brand=draft.brand if action.keep_brand else None,
        generation=draft.generation + 1,
        vendor=draft.copy_fields.vendor,
    )


# ===== Navigation =====

def _go_next(draft: Draft, action: GoNext) -> Draft:
    return StepMachine.for_flow(draft.flow).go_next(draft)


def _go_back(draft: Draft, action: GoBack) -> Draft:
    return StepMachine.for_flow(draft.flow).go_back(draft)


def _go_to_step(draft: Draft, action: GoToStep) -> Draft:
    return StepMachine.for_flow(draft.flow).go_to_step(action.step_id, draft)


_HANDLERS: Dict[Type, Callable] = {
    SelectArchetype: _select_archetype,
    SetProductType: _set_product_type,
    SelectGender: _select_gender,
    SelectMaterial: _select_material,
    SetPricing: _set_pricing,
    SetMargin: _set_margin,
    AddDimension: _add_dimension,
    RemoveDimension: _remove_dimension,
    ToggleValue: _toggle_value,
    SetSelection: _set_selection,
    SetSkuPolicy: _set_sku_policy,
    SetSkuSeed: _set_sku_seed,
    SelectBrand: _select_brand,
    SelectMascot: _select_mascot,
    SetColorLine: _set_color_line,
    SetCustomDesign: _set_custom_design,
    UpdateCopy: _update_copy,
    SetEditorialBrief: _set_editorial_brief,
    ApplyGeneratedContent: _apply_generated_content,
    AddImage: _add_image,
    SetMetafields: _set_metafields,
    SetCollections: _set_collections,
    SaveDraft: _save_draft,
    MarkValidated: _mark_validated,
    MarkPublished: _mark_published,
    Reset: _reset,
    GoNext: _go_next,
    GoBack: _go_back,
    GoToStep: _go_to_step,
}

_ALLOWED_WHEN_PUBLISHED = NAVIGATION_ACTIONS + (Reset,)


def reduce(draft: Draft, action) -> Draft:
    """
    Apply one action to a draft.

    Raises:
        DraftLocked: content action on a published draft
        UnknownArchetype: archetype id not in the catalog
        UnknownOption: material / dimension / policy not found
        VariantGenerationError: the resulting configuration cannot be expanded
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise TypeError(f"Unsupported action: {type(action).__name__}")

    if draft.is_published and not isinstance(action, _ALLOWED_WHEN_PUBLISHED):
        raise DraftLocked(draft.draft_id, action.type)

    updated = handler(draft, action)

    if isinstance(action, MATRIX_ACTIONS):
        updated = regenerate_variants(updated)

    if not isinstance(action, NON_CONTENT_ACTIONS) and updated.status == DraftStatus.VALIDATED:
        updated = updated.model_copy(update={"status": DraftStatus.IN_PROGRESS})

    return updated


def reduce_all(draft: Draft, actions: List) -> Draft:
    for action in actions:
        draft = reduce(draft, action)
    return draft

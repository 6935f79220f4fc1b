"""
Draft Actions

Every user interaction (and every completed collaborator call) is expressed
as one action. The reducer turns (Draft, Action) into the next Draft.
"""

from decimal import Decimal
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from merchstudio.catalog.models import Gender

from .models import BrandIdentity, ColorLine, EditorialBrief, Metafield


class _Action(BaseModel):
    class Config:
        frozen = True
        extra = "forbid"


# ===== Product type & variant configuration =====

class SelectArchetype(_Action):
    """Pick a catalog archetype; resets dimensions, material and pricing to its defaults."""
    type: Literal["select_archetype"] = "select_archetype"
    archetype_id: str
    gender: Optional[Gender] = None


class SetProductType(_Action):
    """Free-text product type for products outside the catalog."""
    type: Literal["set_product_type"] = "set_product_type"
    product_type: str


class SelectGender(_Action):
    type: Literal["select_gender"] = "select_gender"
    gender: Gender


class SelectMaterial(_Action):
    type: Literal["select_material"] = "select_material"
    material_id: str


class SetPricing(_Action):
    type: Literal["set_pricing"] = "set_pricing"
    base_price: Decimal = Field(..., ge=0)
    material_multiplier: Decimal = Field(default=Decimal("1"), gt=0)
    margin_pct: Decimal = Decimal("40")


class SetMargin(_Action):
    type: Literal["set_margin"] = "set_margin"
    margin_pct: Decimal


class AddDimension(_Action):
    """Add a custom option axis (e.g. "Print Side")."""
    type: Literal["add_dimension"] = "add_dimension"
    name: str = Field(..., min_length=1)
    values: List[str] = Field(default_factory=lambda: ["Default"])
    selected: Optional[List[str]] = None


class RemoveDimension(_Action):
    type: Literal["remove_dimension"] = "remove_dimension"
    name: str


class ToggleValue(_Action):
    """Select or deselect one value of a dimension."""
    type: Literal["toggle_value"] = "toggle_value"
    dimension: str
    value: str


class SetSelection(_Action):
    type: Literal["set_selection"] = "set_selection"
    dimension: str
    values: List[str]


class SetSkuPolicy(_Action):
    type: Literal["set_sku_policy"] = "set_sku_policy"
    policy: str


class SetSkuSeed(_Action):
    """Disambiguator appended to every SKU (typically a base36 timestamp)."""
    type: Literal["set_sku_seed"] = "set_sku_seed"
    seed: str


# ===== Brand =====

class SelectBrand(_Action):
    """Switch brand book; clears the mascot and color line."""
    type: Literal["select_brand"] = "select_brand"
    brand: BrandIdentity


class SelectMascot(_Action):
    type: Literal["select_mascot"] = "select_mascot"
    mascot_id: Optional[str] = None
    mascot_name: Optional[str] = None


class SetColorLine(_Action):
    type: Literal["set_color_line"] = "set_color_line"
    color_line: Optional[ColorLine] = None


class SetCustomDesign(_Action):
    type: Literal["set_custom_design"] = "set_custom_design"
    enabled: bool


# ===== Copy & media =====

class UpdateCopy(_Action):
    """Partial update of copy fields; None leaves a field unchanged."""
    type: Literal["update_copy"] = "update_copy"
    title: Optional[str] = None
    description: Optional[str] = None
    tagline: Optional[str] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    handle: Optional[str] = None
    vendor: Optional[str] = None
    tags: Optional[List[str]] = None


class SetEditorialBrief(_Action):
    type: Literal["set_editorial_brief"] = "set_editorial_brief"
    brief: Optional[EditorialBrief] = None


class ApplyGeneratedContent(_Action):
    """Result of the generative content service, copied into copy/image slots."""
    type: Literal["apply_generated_content"] = "apply_generated_content"
    copy_fields: Dict[str, str] = Field(default_factory=dict)
    image_urls: List[str] = Field(default_factory=list)


class AddImage(_Action):
    type: Literal["add_image"] = "add_image"
    src: str
    alt: Optional[str] = None


class SetMetafields(_Action):
    type: Literal["set_metafields"] = "set_metafields"
    metafields: List[Metafield]


class SetCollections(_Action):
    type: Literal["set_collections"] = "set_collections"
    collection_ids: List[str]


# ===== Lifecycle =====

class SaveDraft(_Action):
    type: Literal["save_draft"] = "save_draft"


class MarkValidated(_Action):
    type: Literal["mark_validated"] = "mark_validated"


class MarkPublished(_Action):
    """Issued by the publish gate only, after the catalog accepted the product."""
    type: Literal["mark_published"] = "mark_published"
    product_id: str
    handle: Optional[str] = None
    override_notes: List[str] = Field(default_factory=list)


class Reset(_Action):
    """Discard the draft; optionally carry the brand identity into the fresh one."""
    type: Literal["reset"] = "reset"
    keep_brand: bool = True


# ===== Navigation =====

class GoNext(_Action):
    type: Literal["go_next"] = "go_next"


class GoBack(_Action):
    type: Literal["go_back"] = "go_back"


class GoToStep(_Action):
    type: Literal["go_to_step"] = "go_to_step"
    step_id: str


Action = Union[
    SelectArchetype, SetProductType, SelectGender, SelectMaterial, SetPricing,
    SetMargin, AddDimension, RemoveDimension, ToggleValue, SetSelection,
    SetSkuPolicy, SetSkuSeed, SelectBrand, SelectMascot, SetColorLine,
    SetCustomDesign, UpdateCopy, SetEditorialBrief, ApplyGeneratedContent,
    AddImage, SetMetafields, SetCollections, SaveDraft, MarkValidated,
    MarkPublished, Reset, GoNext, GoBack, GoToStep,
]

NAVIGATION_ACTIONS = (GoNext, GoBack, GoToStep)

# Actions that do not edit the configuration
NON_CONTENT_ACTIONS = NAVIGATION_ACTIONS + (Reset, SaveDraft, MarkValidated, MarkPublished)

# Actions whose effect feeds the variant matrix
MATRIX_ACTIONS = (
    SelectArchetype, SetProductType, SelectGender, SelectMaterial, SetPricing,
    SetMargin, AddDimension, RemoveDimension, ToggleValue, SetSelection,
    SetSkuPolicy, SetSkuSeed,
)

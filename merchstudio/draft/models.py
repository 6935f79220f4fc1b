"""
Draft Models

The Draft is the root aggregate of one in-progress product configuration.
It is immutable: every action produces a new Draft (see reducer.py).
"""

import uuid
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from merchstudio.catalog.models import Dimension, Gender
from merchstudio.variants.models import Pricing, Variant


class DraftStatus(str, Enum):
    """Lifecycle of a draft. PUBLISHED is terminal."""
    IN_PROGRESS = "in_progress"
    DRAFT = "draft"
    VALIDATED = "validated"
    PUBLISHED = "published"


class BrandIdentity(str, Enum):
    """Brand books a product can be designed under."""
    TECHNO_DOG = "techno-dog"
    TECHNO_DOGGIES = "techno-doggies"


class ColorLine(str, Enum):
    """Stroke color line for mascot apparel."""
    GREEN_LINE = "green-line"
    WHITE_LINE = "white-line"


class WorkflowFlow(str, Enum):
    """Which wizard the draft is being built in."""
    STUDIO = "studio"
    CREATIVE = "creative"


class CopyFields(BaseModel):
    """Free-text product copy."""
    title: str = ""
    description: str = ""
    tagline: str = ""
    seo_title: str = ""
    seo_description: str = ""
    handle: str = ""
    vendor: str = "techno.dog"
    tags: List[str] = Field(default_factory=list)

    class Config:
        frozen = True
        extra = "forbid"


class EditorialBrief(BaseModel):
    """AI-authored product story."""
    product_name: str
    tagline: str = ""
    description: str = ""
    creative_rationale: str = ""
    target_audience: str = ""

    class Config:
        frozen = True


class ProductImage(BaseModel):
    src: str
    alt: Optional[str] = None
    position: Optional[int] = None

    class Config:
        frozen = True


class Metafield(BaseModel):
    """Shopify custom data entry."""
    namespace: str
    key: str
    value: str
    type: str = "single_line_text_field"

    class Config:
        frozen = True


class Draft(BaseModel):
    """
    One in-progress product configuration.

    The draft owns its variant list; variants are regenerated whenever the
    dimensions, selection, pricing or SKU policy change.
    """

    # Identity
    draft_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    generation: int = Field(default=0, description="Bumped on every reset; async results are tagged with it")
    flow: WorkflowFlow = WorkflowFlow.STUDIO
    current_step: str = ""

    # Product type
    archetype_id: Optional[str] = None
    product_type: str = ""
    gender: Optional[Gender] = None
    material_id: Optional[str] = None

    # Brand
    brand: Optional[BrandIdentity] = None
    mascot_id: Optional[str] = None
    mascot_name: Optional[str] = None
    color_line: Optional[ColorLine] = None
    custom_design: bool = False

    # Copy and media
    copy_fields: CopyFields = Field(default_factory=CopyFields)
    editorial_brief: Optional[EditorialBrief] = None
    ai_enhanced: bool = False
    images: List[ProductImage] = Field(default_factory=list)
    metafields: List[Metafield] = Field(default_factory=list)
    collection_ids: List[str] = Field(default_factory=list)

    # Variant configuration
    dimensions: List[Dimension] = Field(default_factory=list)
    selection: Dict[str, List[str]] = Field(default_factory=dict)
    pricing: Optional[Pricing] = None
    sku_policy: str = "simple"
    sku_seed: str = ""
    variants: List[Variant] = Field(default_factory=list)

    # Lifecycle
    status: DraftStatus = DraftStatus.IN_PROGRESS
    published_product_id: Optional[str] = None
    published_handle: Optional[str] = None
    override_notes: List[str] = Field(default_factory=list)

    class Config:
        frozen = True

    @property
    def is_published(self) -> bool:
        return self.status == DraftStatus.PUBLISHED

    @property
    def title(self) -> str:
        return self.copy_fields.title

    def selected_values(self, dimension_name: str) -> List[str]:
        return list(self.selection.get(dimension_name, []))

    def dimension(self, name: str) -> Optional[Dimension]:
        for d in self.dimensions:
            if d.name == name:
                return d
        return None

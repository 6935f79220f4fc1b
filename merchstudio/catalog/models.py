"""
Option Catalog Models

Pydantic models describing product archetypes, their materials and the
dimensions (size, color, material, custom) a product can vary along.

The catalog is static reference data: every model here is frozen.
"""

from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


# Hard limit of the target catalog (Shopify allows three options per product)
MAX_DIMENSIONS = 3


class ProductCategory(str, Enum):
    """Archetype category."""
    APPAREL = "apparel"
    ACCESSORIES = "accessories"
    BAGS = "bags"
    DRINKWARE = "drinkware"
    HOME_DECOR = "home-decor"
    TECH = "tech"
    STATIONERY = "stationery"
    LIFESTYLE = "lifestyle"


class SizeType(str, Enum):
    """Sizing system an archetype uses."""
    APPAREL = "apparel"
    ONE_SIZE = "one-size"
    NUMERIC = "numeric"
    DIMENSIONS = "dimensions"
    VOLUME = "volume"


class Gender(str, Enum):
    """Cut / fit the sizes are drawn from."""
    UNISEX = "unisex"
    MALE = "male"
    FEMALE = "female"
    YOUTH = "youth"


class MaterialTier(str, Enum):
    STANDARD = "standard"
    PREMIUM = "premium"
    LUXURY = "luxury"


class MaterialOption(BaseModel):
    """A material an archetype can be produced in, with its price multiplier."""
    id: str
    name: str
    tier: MaterialTier = MaterialTier.STANDARD
    price_multiplier: Decimal = Field(default=Decimal("1.0"), gt=0)
    description: str = ""
    composition: Optional[str] = None
    weight: Optional[str] = None

    class Config:
        frozen = True


class ColorOption(BaseModel):
    """Standard apparel color."""
    id: str
    name: str
    hex: str

    class Config:
        frozen = True


class Dimension(BaseModel):
    """
    A named axis of product variation.

    `values` is ordered; variant matrices follow this order. `codes` optionally
    maps a value to the short code used in SKUs (e.g. "Heather Grey" ->
    "heather-grey"); values without a code fall back to the value itself.
    """
    name: str = Field(..., min_length=1)
    values: List[str] = Field(default_factory=list)
    codes: Dict[str, str] = Field(default_factory=dict)

    class Config:
        frozen = True

    @field_validator("values")
    @classmethod
    def unique_values(cls, v):
        """Reject duplicate values; a duplicate would duplicate variants."""
        seen = set()
        for value in v:
            if value in seen:
                raise ValueError(f"Duplicate dimension value: {value!r}")
            seen.add(value)
        return v

    def code_for(self, value: str) -> str:
        return self.codes.get(value, value)

    def allows(self, value: str) -> bool:
        return value in self.values


class Archetype(BaseModel):
    """
    A product type template (e.g. "Hoodie").

    Defines which dimensions apply, the materials it can be made in and the
    base production cost used for pricing.
    """
    id: str
    name: str
    category: ProductCategory
    has_gender: bool = False
    has_sizes: bool = False
    size_type: SizeType = SizeType.ONE_SIZE
    materials: List[MaterialOption] = Field(default_factory=list)
    base_price: Decimal = Field(..., gt=0)
    fulfillment_provider: str = "printful"
    description: str = ""

    class Config:
        frozen = True

    @property
    def is_apparel(self) -> bool:
        return self.category == ProductCategory.APPAREL

    @property
    def default_material(self) -> Optional[MaterialOption]:
        return self.materials[0] if self.materials else None

    @property
    def weight_grams(self) -> int:
        """Shipping weight per unit; apparel ships heavier."""
        return 200 if self.is_apparel else 100

"""
Variant Matrix Models

Pricing inputs, SKU policies and the Variant unit produced by the generator.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class Pricing(BaseModel):
    """
    Pricing inputs for one configuration.

    margin_pct is unconstrained here; the generator owns the
    [0, 100) domain check and raises InvalidMargin.
    """
    base_price: Decimal = Field(..., ge=0, description="Production cost before material multiplier")
    material_multiplier: Decimal = Field(default=Decimal("1"), gt=0)
    margin_pct: Decimal = Field(default=Decimal("40"), description="Target margin on retail price, percent")

    class Config:
        frozen = True


class PriceBreakdown(BaseModel):
    """Derived cost / price / profit, all rounded to cents."""
    cost: Decimal
    price: Decimal
    profit: Decimal

    class Config:
        frozen = True


class SkuPolicy(BaseModel):
    """
    Strategy for building stock-keeping identifiers.

    SKU layout: PREFIX-ARCHETYPE-CODES-DISAMBIGUATOR
    - archetype_code_length: keep only the first N chars of the archetype code
    - segment_cap: cap the joined dimension-code segment at N chars
    - max_length: truncate the whole identifier at N chars
    """
    name: str
    prefix: str = "TD"
    archetype_code_length: Optional[int] = Field(default=None, gt=0)
    segment_cap: Optional[int] = Field(default=None, gt=0)
    max_length: Optional[int] = Field(default=None, gt=0)
    uppercase: bool = True
    default_segment: str = "default"

    class Config:
        frozen = True


# Whole identifier truncated at 40 characters
SIMPLE_SKU_POLICY = SkuPolicy(name="simple", max_length=40)

# Three-letter archetype code, dimension segment capped at 8 characters
MATERIALS_SKU_POLICY = SkuPolicy(name="materials", archetype_code_length=3, segment_cap=8)

SKU_POLICIES = {
    SIMPLE_SKU_POLICY.name: SIMPLE_SKU_POLICY,
    MATERIALS_SKU_POLICY.name: MATERIALS_SKU_POLICY,
}


class Variant(BaseModel):
    """
    One concrete purchasable unit.

    Owned by its Draft; no identity outside the matrix it was generated in.
    Field names follow the Shopify Admin variant schema.
    """
    title: str
    price: Decimal
    compare_at_price: Optional[Decimal] = None
    sku: str
    option1: Optional[str] = None
    option2: Optional[str] = None
    option3: Optional[str] = None
    weight: Optional[int] = None
    weight_unit: str = "g"
    requires_shipping: bool = True

    class Config:
        frozen = True

    @property
    def options(self) -> List[str]:
        return [o for o in (self.option1, self.option2, self.option3) if o is not None]


class ProductOption(BaseModel):
    """Option axis as sent to the catalog (name + ordered values)."""
    name: str
    values: List[str]

    class Config:
        frozen = True

"""
Merch Studio Variant Matrix

Turns a set of selected dimension values into the cross product of priced,
identifiable variants.

Principle: the variant list of a draft is ALWAYS exactly the cartesian product
of its selection.
"""

from .models import (
    MATERIALS_SKU_POLICY,
    SIMPLE_SKU_POLICY,
    SKU_POLICIES,
    PriceBreakdown,
    Pricing,
    ProductOption,
    SkuPolicy,
    Variant,
)
from .generate import (
    DEFAULT_TITLE,
    InvalidMargin,
    InvalidSelection,
    TooManyDimensions,
    VariantGenerationError,
    build_options,
    build_sku,
    calculate_price,
    clamp_margin,
    generate,
)

__all__ = [
    "MATERIALS_SKU_POLICY",
    "SIMPLE_SKU_POLICY",
    "SKU_POLICIES",
    "PriceBreakdown",
    "Pricing",
    "ProductOption",
    "SkuPolicy",
    "Variant",
    "DEFAULT_TITLE",
    "InvalidMargin",
    "InvalidSelection",
    "TooManyDimensions",
    "VariantGenerationError",
    "build_options",
    "build_sku",
    "calculate_price",
    "clamp_margin",
    "generate",
]

"""
Merch Studio Option Catalog

Static lookup of product archetypes: which dimensions apply, their allowed
values, materials and base pricing.

This module does NOT:
- Build variants (see merchstudio.variants)
- Hold any per-draft state
"""

from .models import (
    MAX_DIMENSIONS,
    Archetype,
    ColorOption,
    Dimension,
    Gender,
    MaterialOption,
    MaterialTier,
    ProductCategory,
    SizeType,
)
from .data import PRODUCT_CATALOG, STANDARD_COLORS, ONE_SIZE
from .lookup import (
    COLOR_DIMENSION,
    SIZE_DIMENSION,
    archetypes_by_category,
    category_label,
    color_dimension,
    default_dimensions,
    get_archetype,
    get_archetype_by_name,
    material_for,
    sizes_for_archetype,
)

__all__ = [
    "MAX_DIMENSIONS",
    "Archetype",
    "ColorOption",
    "Dimension",
    "Gender",
    "MaterialOption",
    "MaterialTier",
    "ProductCategory",
    "SizeType",
    "PRODUCT_CATALOG",
    "STANDARD_COLORS",
    "ONE_SIZE",
    "COLOR_DIMENSION",
    "SIZE_DIMENSION",
    "archetypes_by_category",
    "category_label",
    "color_dimension",
    "default_dimensions",
    "get_archetype",
    "get_archetype_by_name",
    "material_for",
    "sizes_for_archetype",
]

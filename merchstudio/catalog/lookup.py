"""
Option Catalog Lookup

Read-only helpers over the static catalog: archetype lookup, sizing per
archetype and gender, and the default dimensions a new configuration starts
with.
"""

import re
from typing import List, Optional

from .data import (
    APPAREL_SIZES,
    ARCHETYPE_SIZES,
    CATEGORY_LABELS,
    NUMERIC_SIZES,
    ONE_SIZE,
    PRODUCT_CATALOG,
    STANDARD_COLORS,
)
from .models import (
    Archetype,
    Dimension,
    Gender,
    MaterialOption,
    ProductCategory,
    SizeType,
)

SIZE_DIMENSION = "Size"
COLOR_DIMENSION = "Color"

_SLUG_PATTERN = re.compile(r"\s+")


def get_archetype(archetype_id: str) -> Optional[Archetype]:
    """Find an archetype by its id (e.g. "hoodie")."""
    for archetype in PRODUCT_CATALOG:
        if archetype.id == archetype_id:
            return archetype
    return None


def get_archetype_by_name(product_type: str) -> Optional[Archetype]:
    """
    Resolve a free-text product type ("T-Shirt", "Zip Hoodie") to an archetype.

    Matches the slugged id first, then the display name case-insensitively.
    """
    if not product_type:
        return None
    slug = _SLUG_PATTERN.sub("-", product_type.strip().lower())
    found = get_archetype(slug)
    if found:
        return found
    lowered = product_type.strip().lower()
    for archetype in PRODUCT_CATALOG:
        if archetype.name.lower() == lowered:
            return archetype
    return None


def archetypes_by_category(category: ProductCategory) -> List[Archetype]:
    return [a for a in PRODUCT_CATALOG if a.category == category]


def category_label(category: ProductCategory) -> str:
    return CATEGORY_LABELS[category]


def sizes_for_archetype(archetype: Archetype, gender: Optional[Gender] = None) -> List[str]:
    """
    Sizes an archetype is sold in.

    Archetypes without sizes are always "One Size". Youth gender switches
    apparel to the youth size run.
    """
    if not archetype.has_sizes:
        return [ONE_SIZE]

    if archetype.size_type == SizeType.APPAREL:
        key = "youth" if gender == Gender.YOUTH else "standard"
        return list(APPAREL_SIZES[key])
    if archetype.size_type == SizeType.NUMERIC:
        return list(NUMERIC_SIZES)
    if archetype.size_type in (SizeType.DIMENSIONS, SizeType.VOLUME):
        return list(ARCHETYPE_SIZES.get(archetype.id, ["Standard"]))
    return [ONE_SIZE]


def material_for(archetype: Archetype, material_id: Optional[str]) -> Optional[MaterialOption]:
    """Material by id, falling back to the archetype's default material."""
    if material_id:
        for material in archetype.materials:
            if material.id == material_id:
                return material
        return None
    return archetype.default_material


def color_dimension() -> Dimension:
    """The standard apparel color axis; SKUs use the color ids as codes."""
    return Dimension(
        name=COLOR_DIMENSION,
        values=[c.name for c in STANDARD_COLORS],
        codes={c.name: c.id for c in STANDARD_COLORS},
    )


def default_dimensions(archetype: Archetype, gender: Optional[Gender] = None) -> List[Dimension]:
    """
    Dimensions a new configuration of this archetype starts with.

    Sized archetypes get a Size axis; apparel and accessories get the standard
    Color axis.
    """
    dimensions: List[Dimension] = []
    if archetype.has_sizes:
        dimensions.append(Dimension(name=SIZE_DIMENSION, values=sizes_for_archetype(archetype, gender)))
    if archetype.category in (ProductCategory.APPAREL, ProductCategory.ACCESSORIES):
        dimensions.append(color_dimension())
    return dimensions

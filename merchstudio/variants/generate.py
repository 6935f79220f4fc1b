"""
Variant Matrix Generator

Expands chosen dimension values into the cartesian product of concrete
variants, each with a derived price, weight and SKU.

The generator is:
- PURE: no side effects, no clock, no randomness
- IDEMPOTENT: same inputs (including the disambiguator seed) -> same output
- STRICT: invalid input fails fast, nothing is silently truncated
"""

import itertools
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Sequence

from merchstudio.catalog.models import MAX_DIMENSIONS, Dimension

from .models import (
    PriceBreakdown,
    Pricing,
    ProductOption,
    SIMPLE_SKU_POLICY,
    SkuPolicy,
    Variant,
)

CENTS = Decimal("0.01")
TITLE_SEPARATOR = " / "
DEFAULT_TITLE = "Default"

# UI bounds for the materials flow margin slider
MIN_FLOW_MARGIN = Decimal("20")
MAX_FLOW_MARGIN = Decimal("70")

_WHITESPACE = re.compile(r"\s+")


class VariantGenerationError(ValueError):
    """Base error for invalid generator input."""
    pass


class InvalidMargin(VariantGenerationError):
    """Margin outside [0, 100)."""

    def __init__(self, margin_pct):
        self.margin_pct = margin_pct
        super().__init__(f"Margin must be in [0, 100), got {margin_pct}")


class TooManyDimensions(VariantGenerationError):
    """More active dimensions than the catalog accepts."""

    def __init__(self, count: int, limit: int = MAX_DIMENSIONS):
        self.count = count
        self.limit = limit
        super().__init__(f"At most {limit} dimensions may be active, got {count}")


class InvalidSelection(VariantGenerationError):
    """Selected values that do not belong to their dimension."""
    pass


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def clamp_margin(margin_pct) -> Decimal:
    """Clamp a margin to the bounds the materials flow offers (20-70%)."""
    margin = Decimal(str(margin_pct))
    return max(MIN_FLOW_MARGIN, min(MAX_FLOW_MARGIN, margin))


def calculate_price(pricing: Pricing) -> PriceBreakdown:
    """
    Derive retail price from cost and target margin.

    cost = base_price * material_multiplier
    price = cost / (1 - margin_pct / 100)
    profit = price - cost

    Raises:
        InvalidMargin: margin_pct outside [0, 100)
    """
    margin = pricing.margin_pct
    if margin < 0 or margin >= 100:
        raise InvalidMargin(margin)

    cost = pricing.base_price * pricing.material_multiplier
    price = _money(cost / (1 - margin / Decimal(100)))
    cost = _money(cost)
    return PriceBreakdown(cost=cost, price=price, profit=price - cost)


def _check_selection(dimensions: Sequence[Dimension], selection: Dict[str, List[str]]) -> None:
    names = [d.name for d in dimensions]
    if len(set(names)) != len(names):
        raise InvalidSelection(f"Duplicate dimension names: {names}")

    unknown = sorted(set(selection) - set(names))
    if unknown:
        raise InvalidSelection(f"Selection references inactive dimensions: {unknown}")

    for dimension in dimensions:
        chosen = selection.get(dimension.name, [])
        if len(set(chosen)) != len(chosen):
            raise InvalidSelection(f"Duplicate values selected for {dimension.name}: {chosen}")
        not_allowed = [v for v in chosen if not dimension.allows(v)]
        if not_allowed:
            raise InvalidSelection(
                f"Values {not_allowed} are not allowed for {dimension.name}. "
                f"Allowed: {', '.join(dimension.values)}"
            )


def _normalize_code(code: str) -> str:
    return _WHITESPACE.sub("", code)


def build_sku(
    codes: Sequence[str],
    archetype_code: str,
    policy: SkuPolicy,
    disambiguator: str = "",
) -> str:
    """
    Build one SKU from dimension codes according to a policy.

    Empty codes produce the policy's default segment. An empty disambiguator
    drops the trailing segment.
    """
    segment = "-".join(_normalize_code(c) for c in codes) or policy.default_segment
    segment = segment.lower()
    if policy.segment_cap:
        segment = segment[:policy.segment_cap]

    code = _normalize_code(archetype_code) or "PRD"
    if policy.archetype_code_length:
        code = code[:policy.archetype_code_length]

    parts = [policy.prefix, code.upper(), segment]
    if disambiguator:
        parts.append(disambiguator)
    sku = "-".join(p for p in parts if p)

    if policy.uppercase:
        sku = sku.upper()
    if policy.max_length:
        sku = sku[:policy.max_length].rstrip("-")
    return sku


def _dedupe_skus(skus: List[str], policy: SkuPolicy) -> List[str]:
    """
    Make SKUs unique after truncation by appending an occurrence counter.

    The first occurrence keeps its SKU; later ones get -2, -3, ...
    """
    seen = set()
    result = []
    counts: Dict[str, int] = {}
    for sku in skus:
        if sku not in seen:
            seen.add(sku)
            result.append(sku)
            continue
        counts[sku] = counts.get(sku, 1)
        candidate = sku
        while candidate in seen:
            counts[sku] += 1
            suffix = f"-{counts[sku]}"
            base = sku
            if policy.max_length:
                base = sku[:policy.max_length - len(suffix)].rstrip("-")
            candidate = f"{base}{suffix}"
        seen.add(candidate)
        result.append(candidate)
    return result


def generate(
    dimensions: Sequence[Dimension],
    selection: Dict[str, List[str]],
    pricing: Pricing,
    *,
    archetype_code: str = "PRD",
    policy: SkuPolicy = SIMPLE_SKU_POLICY,
    disambiguator: str = "",
    weight_grams: Optional[int] = None,
) -> List[Variant]:
    """
    Generate the variant matrix for a configuration.

    Variants follow the cartesian order of the selected values: dimensions in
    declaration order, values in selection order. A dimension with no selected
    value yields an empty matrix.

    Args:
        dimensions: Active dimensions (at most MAX_DIMENSIONS)
        selection: Dimension name -> selected values (subset of allowed values)
        pricing: Base price, material multiplier, margin
        archetype_code: Archetype id used in SKUs
        policy: SKU strategy (simple or materials)
        disambiguator: Caller-supplied seed appended to every SKU
        weight_grams: Per-unit shipping weight

    Returns:
        List of Variant, or a single "Default" variant with no dimensions

    Raises:
        TooManyDimensions: more than MAX_DIMENSIONS dimensions
        InvalidMargin: margin outside [0, 100)
        InvalidSelection: selection does not match the dimensions
    """
    if len(dimensions) > MAX_DIMENSIONS:
        raise TooManyDimensions(len(dimensions))

    price = calculate_price(pricing).price

    if not dimensions:
        return [Variant(
            title=DEFAULT_TITLE,
            price=price,
            sku=build_sku([], archetype_code, policy, disambiguator),
            weight=weight_grams,
        )]

    _check_selection(dimensions, selection)

    axes = [selection.get(d.name, []) for d in dimensions]
    combinations = list(itertools.product(*axes))

    skus = _dedupe_skus(
        [
            build_sku(
                [d.code_for(v) for d, v in zip(dimensions, combo)],
                archetype_code,
                policy,
                disambiguator,
            )
            for combo in combinations
        ],
        policy,
    )

    variants: List[Variant] = []
    for combo, sku in zip(combinations, skus):
        slots = list(combo) + [None] * (MAX_DIMENSIONS - len(combo))
        variants.append(Variant(
            title=TITLE_SEPARATOR.join(combo),
            price=price,
            sku=sku,
            option1=slots[0],
            option2=slots[1],
            option3=slots[2],
            weight=weight_grams,
        ))
    return variants


def build_options(dimensions: Sequence[Dimension], selection: Dict[str, List[str]]) -> List[ProductOption]:
    """Option axes for the catalog payload; dimensions with nothing selected are left out."""
    return [
        ProductOption(name=d.name, values=list(selection.get(d.name, [])))
        for d in dimensions
        if selection.get(d.name)
    ]


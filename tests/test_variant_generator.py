"""
Variant Matrix Generator Tests

Mandatory test coverage:
- Cartesian completeness (n1 * n2 * ... * nk variants)
- Idempotence for identical inputs and seed
- Ordering follows dimension and value order as given
- Tee example: 6 variants at 33.33
- Zero dimensions => single "Default" variant
- Four dimensions => TooManyDimensions before any variant
- Margin domain [0, 100) => InvalidMargin otherwise
- Both SKU policies, unique SKUs after truncation
"""

import pytest
from decimal import Decimal

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from merchstudio.catalog.models import Dimension
from merchstudio.variants import (
    MATERIALS_SKU_POLICY,
    SIMPLE_SKU_POLICY,
    InvalidMargin,
    InvalidSelection,
    Pricing,
    SkuPolicy,
    TooManyDimensions,
    build_options,
    build_sku,
    calculate_price,
    clamp_margin,
    generate,
)


@pytest.fixture
def tee_dimensions():
    return [
        Dimension(name="Size", values=["S", "M", "L"]),
        Dimension(name="Color", values=["Black", "White"]),
    ]


@pytest.fixture
def tee_selection():
    return {"Size": ["S", "M", "L"], "Color": ["Black", "White"]}


@pytest.fixture
def tee_pricing():
    return Pricing(base_price=Decimal("20"), material_multiplier=Decimal("1"), margin_pct=Decimal("40"))


class TestTeeExample:
    """Size=[S,M,L] x Color=[Black,White] at base 20, margin 40."""

    def test_six_variants(self, tee_dimensions, tee_selection, tee_pricing):
        variants = generate(tee_dimensions, tee_selection, tee_pricing, archetype_code="tee")
        assert len(variants) == 6

    def test_price_is_33_33(self, tee_dimensions, tee_selection, tee_pricing):
        variants = generate(tee_dimensions, tee_selection, tee_pricing, archetype_code="tee")
        assert all(v.price == Decimal("33.33") for v in variants)

    def test_titles_in_cartesian_order(self, tee_dimensions, tee_selection, tee_pricing):
        variants = generate(tee_dimensions, tee_selection, tee_pricing, archetype_code="tee")
        assert [v.title for v in variants] == [
            "S / Black", "S / White",
            "M / Black", "M / White",
            "L / Black", "L / White",
        ]

    def test_option_slots(self, tee_dimensions, tee_selection, tee_pricing):
        first = generate(tee_dimensions, tee_selection, tee_pricing)[0]
        assert first.option1 == "S"
        assert first.option2 == "Black"
        assert first.option3 is None
        assert first.options == ["S", "Black"]


class TestCartesianCompleteness:

    @pytest.mark.parametrize("sizes,colors,materials", [
        (1, 1, 1),
        (3, 2, 1),
        (4, 3, 2),
        (7, 8, 3),
    ])
    def test_count_is_product_of_lengths(self, sizes, colors, materials, tee_pricing):
        dims = [
            Dimension(name="Size", values=[f"S{i}" for i in range(sizes)]),
            Dimension(name="Color", values=[f"C{i}" for i in range(colors)]),
            Dimension(name="Material", values=[f"M{i}" for i in range(materials)]),
        ]
        selection = {d.name: list(d.values) for d in dims}

        variants = generate(dims, selection, tee_pricing)

        assert len(variants) == sizes * colors * materials
        assert len({v.title for v in variants}) == len(variants)

    def test_subset_selection(self, tee_dimensions, tee_pricing):
        variants = generate(tee_dimensions, {"Size": ["M"], "Color": ["White"]}, tee_pricing)
        assert [v.title for v in variants] == ["M / White"]

    def test_empty_selection_on_a_dimension_yields_nothing(self, tee_dimensions, tee_pricing):
        variants = generate(tee_dimensions, {"Size": [], "Color": ["Black"]}, tee_pricing)
        assert variants == []


class TestDeterminism:

    def test_idempotent(self, tee_dimensions, tee_selection, tee_pricing):
        first = generate(tee_dimensions, tee_selection, tee_pricing, archetype_code="tee", disambiguator="k2x9")
        second = generate(tee_dimensions, tee_selection, tee_pricing, archetype_code="tee", disambiguator="k2x9")
        assert [v.model_dump() for v in first] == [v.model_dump() for v in second]

    def test_reordering_one_axis_reorders_only_that_axis(self, tee_dimensions, tee_pricing):
        forward = generate(tee_dimensions, {"Size": ["S", "M", "L"], "Color": ["Black", "White"]}, tee_pricing)
        reversed_sizes = generate(tee_dimensions, {"Size": ["L", "M", "S"], "Color": ["Black", "White"]}, tee_pricing)

        assert [v.option1 for v in forward] == ["S", "S", "M", "M", "L", "L"]
        assert [v.option1 for v in reversed_sizes] == ["L", "L", "M", "M", "S", "S"]
        assert [v.option2 for v in forward] == [v.option2 for v in reversed_sizes]

    def test_seed_changes_skus_only(self, tee_dimensions, tee_selection, tee_pricing):
        a = generate(tee_dimensions, tee_selection, tee_pricing, disambiguator="aaa")
        b = generate(tee_dimensions, tee_selection, tee_pricing, disambiguator="bbb")
        assert [v.title for v in a] == [v.title for v in b]
        assert [v.sku for v in a] != [v.sku for v in b]


class TestEdgeCases:

    def test_zero_dimensions_gives_default_variant(self, tee_pricing):
        variants = generate([], {}, tee_pricing, archetype_code="poster")
        assert len(variants) == 1
        assert variants[0].title == "Default"
        assert variants[0].price == Decimal("33.33")
        assert variants[0].option1 is None

    def test_four_dimensions_fail_fast(self, tee_pricing):
        dims = [Dimension(name=f"D{i}", values=["a"]) for i in range(4)]
        with pytest.raises(TooManyDimensions) as exc_info:
            generate(dims, {d.name: ["a"] for d in dims}, tee_pricing)
        assert exc_info.value.count == 4
        assert exc_info.value.limit == 3

    def test_too_many_dimensions_checked_before_margin(self):
        dims = [Dimension(name=f"D{i}", values=["a"]) for i in range(4)]
        bad = Pricing(base_price=Decimal("10"), margin_pct=Decimal("150"))
        with pytest.raises(TooManyDimensions):
            generate(dims, {}, bad)

    def test_value_outside_dimension_rejected(self, tee_dimensions, tee_pricing):
        with pytest.raises(InvalidSelection):
            generate(tee_dimensions, {"Size": ["XXXL"], "Color": ["Black"]}, tee_pricing)

    def test_selection_for_inactive_dimension_rejected(self, tee_dimensions, tee_pricing):
        with pytest.raises(InvalidSelection):
            generate(tee_dimensions, {"Size": ["S"], "Color": ["Black"], "Fit": ["Slim"]}, tee_pricing)

    def test_weight_carried_to_every_variant(self, tee_dimensions, tee_selection, tee_pricing):
        variants = generate(tee_dimensions, tee_selection, tee_pricing, weight_grams=200)
        assert {v.weight for v in variants} == {200}


class TestPricing:

    def test_price_breakdown(self):
        breakdown = calculate_price(Pricing(
            base_price=Decimal("45"),
            material_multiplier=Decimal("1.4"),
            margin_pct=Decimal("50"),
        ))
        assert breakdown.cost == Decimal("63.00")
        assert breakdown.price == Decimal("126.00")
        assert breakdown.profit == Decimal("63.00")

    def test_zero_margin_is_cost(self):
        breakdown = calculate_price(Pricing(base_price=Decimal("24"), margin_pct=Decimal("0")))
        assert breakdown.price == Decimal("24.00")
        assert breakdown.profit == Decimal("0.00")

    @pytest.mark.parametrize("margin", ["100", "120", "-1"])
    def test_margin_outside_domain(self, margin):
        with pytest.raises(InvalidMargin):
            calculate_price(Pricing(base_price=Decimal("20"), margin_pct=Decimal(margin)))

    def test_generator_raises_invalid_margin(self, tee_dimensions, tee_selection):
        with pytest.raises(InvalidMargin):
            generate(tee_dimensions, tee_selection, Pricing(base_price=Decimal("20"), margin_pct=Decimal("100")))

    def test_clamp_margin(self):
        assert clamp_margin(5) == Decimal("20")
        assert clamp_margin(95) == Decimal("70")
        assert clamp_margin("45") == Decimal("45")


class TestSkuPolicies:

    def test_simple_layout(self):
        sku = build_sku(["M", "black"], "hoodie", SIMPLE_SKU_POLICY, "k2x9")
        assert sku == "TD-HOODIE-M-BLACK-K2X9"

    def test_simple_truncates_to_40(self):
        sku = build_sku(["extra-long-size-code", "extra-long-color-code"], "hoodie", SIMPLE_SKU_POLICY, "seed")
        assert len(sku) <= 40
        assert sku.startswith("TD-HOODIE-")

    def test_materials_caps_segment_and_code(self):
        sku = build_sku(["XL", "heather-grey"], "hoodie", MATERIALS_SKU_POLICY, "k2x9")
        assert sku == "TD-HOO-XL-HEATH-K2X9"

    def test_empty_codes_use_default_segment(self):
        assert build_sku([], "poster", SIMPLE_SKU_POLICY) == "TD-POSTER-DEFAULT"

    def test_truncation_collisions_are_disambiguated(self, tee_pricing):
        policy = SkuPolicy(name="tight", max_length=12)
        dims = [Dimension(name="Print", values=["front-large", "front-small"])]
        variants = generate(dims, {"Print": ["front-large", "front-small"]}, tee_pricing,
                            archetype_code="tee", policy=policy)
        skus = [v.sku for v in variants]
        assert len(set(skus)) == 2
        assert all(len(s) <= 12 for s in skus)
        assert skus[1].endswith("-2")

    def test_color_codes_used_in_sku(self, tee_pricing):
        dims = [Dimension(name="Color", values=["Heather Grey"], codes={"Heather Grey": "heather-grey"})]
        variants = generate(dims, {"Color": ["Heather Grey"]}, tee_pricing, archetype_code="tee")
        assert variants[0].sku == "TD-TEE-HEATHER-GREY"
        assert variants[0].title == "Heather Grey"


class TestBuildOptions:

    def test_options_skip_empty_dimensions(self, tee_dimensions):
        options = build_options(tee_dimensions, {"Size": ["S", "M"], "Color": []})
        assert [o.name for o in options] == ["Size"]
        assert options[0].values == ["S", "M"]


# Run tests
if __name__ == "__main__":
    pytest.main([__file__, "-v"])

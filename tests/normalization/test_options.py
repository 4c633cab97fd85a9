"""Tests for vendor_onboarding/normalization/options.py"""

from vendor_onboarding.models import Variant, VariantOption
from vendor_onboarding.normalization.options import aggregate_options, distinct_values


class TestDistinctValues:
    def test_first_seen_order(self):
        assert distinct_values(["Red", "Blue", "Red", "", None, " Blue "]) == ["Red", "Blue"]


class TestAggregateOptions:
    def test_distinct_comma_joined(self):
        variants = [Variant(options=["Red"]), Variant(options=["Blue"]), Variant(options=["Red"])]
        result = aggregate_options([VariantOption(key="Color", value="")], variants)
        assert result == [VariantOption(key="Color", value="Red,Blue")]

    def test_multiple_axes(self):
        variants = [Variant(options=["Red", "M"]), Variant(options=["Blue", "L"])]
        options = [VariantOption(key="Color"), VariantOption(key="Size")]
        result = aggregate_options(options, variants)
        assert [o.to_dict() for o in result] == [
            {"key": "Color", "value": "Red,Blue"},
            {"key": "Size", "value": "M,L"},
        ]

    def test_declared_values_replaced_by_observed(self):
        variants = [Variant(options=["Blue"])]
        result = aggregate_options([VariantOption(key="Color", value="Red,Blue,Green")], variants)
        assert result[0].value == "Blue"

    def test_declared_values_kept_when_variants_carry_none(self):
        variants = [Variant(options=[])]
        result = aggregate_options([VariantOption(key="Size", value="S,M")], variants)
        assert result == [VariantOption(key="Size", value="S,M")]

    def test_undeclared_position_gets_generic_key(self):
        variants = [Variant(options=["Red", "M"])]
        result = aggregate_options([VariantOption(key="Color")], variants)
        assert result[1] == VariantOption(key="Option 2", value="M")

    def test_no_options(self):
        assert aggregate_options([], [Variant()]) == []

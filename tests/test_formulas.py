"""Tests for the IP-ROAS formula library and the critical-product selector."""

import math

import pytest

from iproas.schemas.roas import ClientParameters, Product
from iproas.services.formulas import (
    absolute_margin,
    composite_traditional_roas,
    estimated_cost_per_result,
    ip_roas,
    min_traditional_roas,
    min_units_to_sell,
    total_cost,
)
from iproas.services.portfolio import select_critical_product


class TestHelpers:
    def test_absolute_margin(self, product_a, product_b, product_c):
        assert absolute_margin(product_a) == pytest.approx(300)
        assert absolute_margin(product_b) == pytest.approx(100)
        assert absolute_margin(product_c) == pytest.approx(1000)

    def test_absolute_margin_is_not_clamped(self):
        assert absolute_margin(Product(name="x", price=-10, gross_margin=0.5)) == -5
        assert absolute_margin(Product(name="x", price=100, gross_margin=0)) == 0

    def test_total_cost(self, base_params):
        assert total_cost(base_params) == 75_000

    def test_total_cost_with_zero_fees(self, base_params):
        params = base_params.model_copy(update={"fixed_fee": 0, "expected_income": 0})
        assert total_cost(params) == 50_000

    def test_total_cost_negative_inputs(self):
        params = ClientParameters(ad_spend=-10, fixed_fee=5, expected_income=-1)
        assert total_cost(params) == -6


class TestIpRoas:
    def test_formula(self):
        assert ip_roas(50_000, 10_000, 15_000) == 1.5

    @pytest.mark.parametrize("ad_spend", [0, -1, -50_000])
    def test_non_positive_ad_spend_is_infinite(self, ad_spend):
        assert ip_roas(ad_spend, 10_000, 15_000) == math.inf

    @pytest.mark.parametrize("ad_spend", [1, 50_000, 1e12])
    def test_no_fees_is_exactly_one(self, ad_spend):
        assert ip_roas(ad_spend, 0, 0) == 1

    def test_large_values(self):
        assert ip_roas(1_000_000, 500_000, 200_000) == pytest.approx(1.7)


class TestMinUnitsToSell:
    def test_uses_portfolio_minimum_margin(self, base_params):
        # ceil(75000 / 100)
        assert min_units_to_sell(base_params) == 750

    def test_explicit_margin(self, base_params):
        assert min_units_to_sell(base_params, 300) == 250

    def test_rounds_up(self, base_params):
        # ceil(187.5)
        assert min_units_to_sell(base_params, 400) == 188

    def test_empty_portfolio(self, empty_params):
        assert min_units_to_sell(empty_params) == 0

    @pytest.mark.parametrize("margin", [0, -5])
    def test_non_positive_margin(self, base_params, margin):
        assert min_units_to_sell(base_params, margin) == 0

    def test_returns_int(self, base_params):
        assert isinstance(min_units_to_sell(base_params, 400), int)


class TestTraditionalRoasAndCpr:
    def test_min_traditional_roas(self):
        assert min_traditional_roas(50_000, 750, 500) == 7.5

    def test_min_traditional_roas_without_spend(self):
        assert min_traditional_roas(0, 750, 500) == math.inf

    def test_cost_per_result(self):
        assert estimated_cost_per_result(50_000, 750) == pytest.approx(66.6667, abs=1e-3)

    def test_cost_per_result_without_units(self):
        assert estimated_cost_per_result(50_000, 0) == math.inf

    def test_composite(self):
        assert composite_traditional_roas(50_000, 10_000, 15_000, 100, 500) == 7.5

    def test_composite_guards(self):
        assert composite_traditional_roas(0, 10_000, 15_000, 100, 500) == math.inf
        assert composite_traditional_roas(50_000, 10_000, 15_000, 0, 500) == math.inf


class TestCriticalProduct:
    def test_lowest_absolute_margin(self, product_a, product_b, product_c):
        assert select_critical_product([product_a, product_b, product_c]) is product_b

    def test_empty(self):
        assert select_critical_product([]) is None

    def test_single(self, product_a):
        assert select_critical_product([product_a]) is product_a

    def test_tie_keeps_first_occurrence(self):
        first = Product(name="first", price=50, gross_margin=0.1)
        second = Product(name="second", price=25, gross_margin=0.2)
        third = Product(name="third", price=100, gross_margin=0.1)
        assert select_critical_product([first, second, third]) is first


class TestHugeValues:
    """Values near the float limit give sentinels instead of raising."""

    @pytest.mark.parametrize(
        "ad_spend, fixed_fee, margin",
        [
            (1e308, 1e308, 3.0),  # total cost overflows to inf
            (1e10, 0, 5e-301),  # near-zero margin
            (1.7e308, 0, 0.5),  # finite total, ratio overflows
        ],
    )
    def test_min_units_overflow_is_infinite(self, ad_spend, fixed_fee, margin):
        params = ClientParameters(ad_spend=ad_spend, fixed_fee=fixed_fee)
        assert min_units_to_sell(params, margin) == math.inf

    def test_min_units_near_limit_stays_integer(self):
        params = ClientParameters(ad_spend=1e300)
        units = min_units_to_sell(params, 1.0)
        assert isinstance(units, int)
        assert units == int(1e300)

    @pytest.mark.parametrize(
        "ad_spend, fixed_fee, expected_income, margin",
        [
            (1e308, 1e308, 0, 3.0),
            (1e10, 0, 0, 5e-301),
            (1e308, 0, 1e308, 1e-10),
        ],
    )
    def test_composite_overflow_is_infinite(self, ad_spend, fixed_fee, expected_income, margin):
        assert composite_traditional_roas(ad_spend, fixed_fee, expected_income, margin, 10) == math.inf

    def test_traditional_roas_with_infinite_units(self):
        assert min_traditional_roas(1e10, math.inf, 1e-300) == math.inf

    def test_cost_per_result_with_infinite_units(self):
        assert estimated_cost_per_result(1e10, math.inf) == 0

    def test_ip_roas_with_huge_fees(self):
        assert ip_roas(1e308, 1e308, 1e308) == math.inf
        assert ip_roas(1e308, 1e308, 0) == 2

# iproas/services/formulas.py
# -----------------------------------------------------------------------------
# IP-ROAS formula library
# - IP-ROAS = 1 + (TF + IE) / IP
# - VUM     = ceil((IP + TF + IE) / m*)      m* = min(price * gross_margin)
# - ROAS_min_tradicional = (p* * VUM) / IP
# - CPR     = IP / VUM
# Every formula is total: a non-positive denominator gives float("inf")
# (VUM gives 0), a ratio past the float range gives float("inf"), never
# an exception.
# -----------------------------------------------------------------------------
from __future__ import annotations

import math
from typing import Optional, Union

from iproas.schemas.roas import ClientParameters, Product

INF = float("inf")


def absolute_margin(product: Product) -> float:
    return product.price * product.gross_margin


def total_cost(params: ClientParameters) -> float:
    return params.ad_spend + params.fixed_fee + params.expected_income


def ip_roas(ad_spend: float, fixed_fee: float, expected_income: float) -> float:
    if ad_spend <= 0:
        return INF
    return 1 + (fixed_fee + expected_income) / ad_spend


def min_units_to_sell(
    params: ClientParameters, margin: Optional[float] = None
) -> Union[int, float]:
    """
    Minimum units (VUM) to cover IP + TF + IE.
    Without `margin` the smallest absolute margin of the portfolio is used.
    A ratio that overflows the float range gives INF.
    """
    if margin is None:
        margin = min((absolute_margin(p) for p in params.products), default=0.0)
    if margin <= 0:
        return 0
    ratio = total_cost(params) / margin
    if not math.isfinite(ratio):
        return INF
    return math.ceil(ratio)


def min_traditional_roas(ad_spend: float, units: Union[int, float], price: float) -> float:
    if ad_spend <= 0 or not math.isfinite(units):
        return INF
    return (price * units) / ad_spend


def estimated_cost_per_result(ad_spend: float, units: Union[int, float]) -> float:
    if units <= 0:
        return INF
    return ad_spend / units


def composite_traditional_roas(
    ad_spend: float,
    fixed_fee: float,
    expected_income: float,
    min_margin: float,
    price: float,
) -> float:
    """Traditional ROAS with VUM recomputed from arbitrary inputs (sweeps)."""
    if ad_spend <= 0 or min_margin <= 0:
        return INF
    ratio = (fixed_fee + ad_spend + expected_income) / min_margin
    if not math.isfinite(ratio):
        return INF
    units = math.ceil(ratio)
    return (price * units) / ad_spend

# iproas/services/sensitivity.py
# -----------------------------------------------------------------------------
# Sensitivity sweeps
# - one input (IP / TF / IE / gross margin) varied linearly, others fixed
# - critical product (m*, p*) resolved once and held for the whole sweep
# - empty portfolio -> None (nothing to anchor the curve)
# -----------------------------------------------------------------------------
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from iproas.core.config import settings
from iproas.schemas.roas import (
    ClientParameters,
    Product,
    SensitivityKind,
    SensitivityPoint,
)
from iproas.services.formulas import absolute_margin, composite_traditional_roas, ip_roas
from iproas.services.portfolio import select_critical_product


# ── range rules per swept input ───────────────────────────────────────────────
@dataclass(slots=True, frozen=True)
class SweepRange:
    default: float  # substituted when the base value is <= 0
    floor: float
    cap: float = float("inf")

    def bounds(self, base: float) -> tuple[float, float]:
        if base <= 0:
            base = self.default
        # base * 1.5 may overflow for huge inputs; keep the range finite
        return max(self.floor, base * 0.5), min(self.cap, base * 1.5, sys.float_info.max)


SWEEP_RANGES = {
    SensitivityKind.AD_SPEND: SweepRange(default=10_000, floor=100),
    SensitivityKind.FIXED_FEE: SweepRange(default=5_000, floor=0),
    SensitivityKind.EXPECTED_INCOME: SweepRange(default=5_000, floor=0),
    SensitivityKind.GROSS_MARGIN: SweepRange(default=0.3, floor=0.05, cap=0.95),
}


def _base_value(kind: SensitivityKind, params: ClientParameters, critical: Product) -> float:
    if kind is SensitivityKind.AD_SPEND:
        return params.ad_spend
    if kind is SensitivityKind.FIXED_FEE:
        return params.fixed_fee
    if kind is SensitivityKind.EXPECTED_INCOME:
        return params.expected_income
    return critical.gross_margin


def sweep_values(kind: SensitivityKind, base: float, point_count: int) -> List[float]:
    low, high = SWEEP_RANGES[kind].bounds(base)
    # linspace(low, high, 1) == [low]
    return np.linspace(low, high, point_count).tolist()


def sweep(
    kind: SensitivityKind,
    params: ClientParameters,
    point_count: int = settings.SENSITIVITY_POINTS,
) -> Optional[List[SensitivityPoint]]:
    if point_count < 1:
        raise ValueError(f"point_count must be >= 1, got {point_count}")

    critical = select_critical_product(params.products)
    if critical is None:
        return None

    m_star = absolute_margin(critical)
    p_star = critical.price
    ip, tf, ie = params.ad_spend, params.fixed_fee, params.expected_income
    xs = sweep_values(kind, _base_value(kind, params, critical), point_count)

    if kind is SensitivityKind.AD_SPEND:
        return [
            SensitivityPoint(
                x=x,
                ip_roas=ip_roas(x, tf, ie),
                traditional_roas=composite_traditional_roas(x, tf, ie, m_star, p_star),
            )
            for x in xs
        ]
    if kind is SensitivityKind.FIXED_FEE:
        return [
            SensitivityPoint(
                x=x,
                ip_roas=ip_roas(ip, x, ie),
                traditional_roas=composite_traditional_roas(ip, x, ie, m_star, p_star),
            )
            for x in xs
        ]
    if kind is SensitivityKind.EXPECTED_INCOME:
        return [
            SensitivityPoint(
                x=x,
                ip_roas=ip_roas(ip, tf, x),
                traditional_roas=composite_traditional_roas(ip, tf, x, m_star, p_star),
            )
            for x in xs
        ]

    # gross margin: IP-ROAS does not depend on margin, price stays fixed
    base_ip_roas = ip_roas(ip, tf, ie)
    return [
        SensitivityPoint(
            x=x,
            ip_roas=base_ip_roas,
            traditional_roas=composite_traditional_roas(ip, tf, ie, p_star * x, p_star),
        )
        for x in xs
    ]

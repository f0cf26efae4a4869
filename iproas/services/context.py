# iproas/services/context.py
# -----------------------------------------------------------------------------
# Text snapshot of the calculator for the chat assistant
# - same number formatting as the metric cards ($1,234.56 / 1.5000 / --)
# -----------------------------------------------------------------------------
import math

from iproas.schemas.roas import ClientParameters, Results
from iproas.services.formulas import absolute_margin


def format_currency(n: float) -> str:
    if not math.isfinite(n):
        return "$--"
    return f"${n:,.2f}"


def format_number(n: float, decimals: int = 4) -> str:
    if not math.isfinite(n):
        return "--"
    return f"{n:.{decimals}f}"


def format_units(n: float) -> str:
    if not math.isfinite(n):
        return "--"
    return f"{n:,}"


def build_context(params: ClientParameters, results: Results) -> str:
    lines = [
        f"- Inversión Publicitaria (IP): {format_currency(params.ad_spend)}",
        f"- Tarifa Fija (TF): {format_currency(params.fixed_fee)}",
        f"- Ingreso Esperado (IE): {format_currency(params.expected_income)}",
    ]

    if not params.products:
        lines.append("- Portafolio: sin productos cargados")
        return "\n".join(lines)

    lines.append(f"- Portafolio ({len(params.products)} productos):")
    for p in params.products:
        lines.append(
            f"  - {p.name}: precio {format_currency(p.price)}, "
            f"margen bruto {p.gross_margin * 100:.1f}%, "
            f"margen absoluto {format_currency(absolute_margin(p))}"
        )

    lines += [
        f"- Producto crítico: {results.critical_product_name} "
        f"(precio {format_currency(results.critical_product_price)}, "
        f"margen absoluto {format_currency(results.min_margin_used)})",
        f"- Costos totales (IP + TF + IE): {format_currency(results.total_cost)}",
        f"- IP-ROAS: {format_number(results.ip_roas)}",
        f"- VUM: {format_units(results.min_units_to_sell)} unidades",
        f"- ROAS mínimo tradicional: {format_number(results.min_traditional_roas)}",
        f"- CPR estimado: {format_currency(results.estimated_cost_per_result)}",
    ]
    return "\n".join(lines)

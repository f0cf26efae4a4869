from iproas.schemas.roas import ClientParameters, Results
from iproas.services.formulas import (
    absolute_margin,
    estimated_cost_per_result,
    ip_roas,
    min_traditional_roas,
    min_units_to_sell,
    total_cost,
)
from iproas.services.portfolio import select_critical_product

EMPTY_RESULTS = Results(
    ip_roas=0.0,
    min_units_to_sell=0,
    min_traditional_roas=0.0,
    estimated_cost_per_result=0.0,
    total_cost=0.0,
    min_margin_used=0.0,
    critical_product_price=0.0,
    critical_product_name="N/A",
)


def evaluate(params: ClientParameters) -> Results:
    critical = select_critical_product(params.products)
    if critical is None:
        return EMPTY_RESULTS

    margin = absolute_margin(critical)
    units = min_units_to_sell(params, margin)
    return Results(
        ip_roas=ip_roas(params.ad_spend, params.fixed_fee, params.expected_income),
        min_units_to_sell=units,
        min_traditional_roas=min_traditional_roas(params.ad_spend, units, critical.price),
        estimated_cost_per_result=estimated_cost_per_result(params.ad_spend, units),
        total_cost=total_cost(params),
        min_margin_used=margin,
        critical_product_price=critical.price,
        critical_product_name=critical.name,
    )

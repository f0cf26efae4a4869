from typing import Optional, Sequence

from iproas.schemas.roas import Product
from iproas.services.formulas import absolute_margin


def select_critical_product(products: Sequence[Product]) -> Optional[Product]:
    """
    Product with the lowest absolute margin (price * gross_margin).
    Ties keep the first occurrence; None for an empty portfolio.
    """
    critical: Optional[Product] = None
    for p in products:
        if critical is None or absolute_margin(p) < absolute_margin(critical):
            critical = p
    return critical

# iproas/services/csv_import.py
# -----------------------------------------------------------------------------
# Best-effort portfolio CSV import
# - header aliases: nombre|name, precio|price, margen|margen_bruto|margin
# - margin > 1 is read as a percentage (35 -> 0.35)
# - unusable rows are skipped, the import itself never fails
# -----------------------------------------------------------------------------
from __future__ import annotations

import math

from loguru import logger

from iproas.schemas.roas import Product

NAME_COLUMNS = ("nombre", "name")
PRICE_COLUMNS = ("precio", "price")
MARGIN_COLUMNS = ("margen", "margen_bruto", "margin")


def _first(row: dict[str, str], columns: tuple[str, ...]) -> str | None:
    for c in columns:
        v = row.get(c)
        if v:
            return v
    return None


def _to_float(raw: str) -> float | None:
    try:
        v = float(raw)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(v) else v


def parse_products_csv(text: str) -> list[Product]:
    lines = [ln for ln in text.splitlines() if ln.strip()]
    if len(lines) < 2:
        return []

    headers = [h.strip().lower() for h in lines[0].split(",")]
    products: list[Product] = []

    for lineno, line in enumerate(lines[1:], start=2):
        values = [v.strip() for v in line.split(",")]
        if len(values) < len(headers):
            logger.debug(f"[csv] line {lineno}: {len(values)} fields < {len(headers)}, skipped")
            continue

        row = dict(zip(headers, values))
        name = _first(row, NAME_COLUMNS) or f"P{len(products) + 1}"
        price = _to_float(_first(row, PRICE_COLUMNS) or "0")
        margin = _to_float(_first(row, MARGIN_COLUMNS) or "0")
        if price is None or margin is None:
            logger.debug(f"[csv] line {lineno}: non-numeric price/margin, skipped")
            continue

        if margin > 1:
            margin = margin / 100

        products.append(Product(name=name, price=price, gross_margin=margin))

    logger.info(f"[csv] parsed {len(products)} product(s) from {len(lines) - 1} row(s)")
    return products

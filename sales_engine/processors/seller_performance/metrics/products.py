"""
Top Products — Best-selling SKUs per seller.
"""

from __future__ import annotations

from collections.abc import Mapping

import pandas as pd

from ....config import settings


def top_products(
    products_sold: Mapping[str, float],
    top_n: int | None = None,
) -> list[dict]:
    """
    Rank a seller's SKUs by quantity sold.

    Ties keep the order in which the SKU was first sold.

    Args:
        products_sold: SKU → accumulated quantity (insertion ordered).
        top_n:         Maximum entries. Defaults to settings.TOP_PRODUCTS_LIMIT.

    Returns:
        [{"sku": "SKU_001", "quantity": 12}, ...]  (at most top_n)
    """
    limit = settings.TOP_PRODUCTS_LIMIT if top_n is None else top_n
    if not products_sold or limit <= 0:
        return []

    ranked = (
        pd.Series(dict(products_sold), dtype=float)
        .sort_values(ascending=False, kind="stable")
        .head(limit)
    )
    return [{"sku": sku, "quantity": products_sold[sku]} for sku in ranked.index]

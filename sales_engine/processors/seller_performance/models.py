"""
Data models for seller performance analysis.

Input entities (Seller, Product, LineItem, PurchaseRecord) are pydantic models
parsed from the raw dataset. SellerStat is the mutable per-run accumulator
owned by the aggregation engine. SellerReport is one entry of the final,
ranked output.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


Number = Union[int, float]


def _numeric_or_none(value: Any) -> Optional[float]:
    """Keep real numbers, drop everything else (strings, bools, None)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


class _InputModel(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        coerce_numbers_to_str=True,
    )


class Seller(_InputModel):
    id: str
    first_name: str = ""
    last_name: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Product(_InputModel):
    sku: str
    purchase_price: float
    sale_price: Optional[float] = None

    @field_validator("sale_price", mode="before")
    @classmethod
    def sale_price_numeric(cls, v):
        return _numeric_or_none(v)


class LineItem(_InputModel):
    sku: Optional[str] = None
    quantity: Number = 0
    discount: Number = 0
    sale_price: Optional[float] = Field(
        None,
        description="Item-level price override; ignored unless numeric",
    )

    @field_validator("quantity", "discount", mode="before")
    @classmethod
    def missing_as_zero(cls, v):
        return 0 if v is None else v

    @field_validator("sale_price", mode="before")
    @classmethod
    def sale_price_numeric(cls, v):
        return _numeric_or_none(v)


class PurchaseRecord(_InputModel):
    seller_id: Optional[str] = None
    items: list[LineItem] = Field(default_factory=list)
    total_amount: Optional[float] = None

    @field_validator("total_amount", mode="before")
    @classmethod
    def total_numeric(cls, v):
        return _numeric_or_none(v)


@dataclass
class SellerStat:
    """Running totals for one seller during a single analysis run."""

    seller_id: str
    name: str
    revenue: float = 0.0
    profit: float = 0.0
    sales_count: int = 0
    products_sold: dict[str, Number] = field(default_factory=dict)
    top_products: list[dict] = field(default_factory=list)
    bonus: float = 0.0

    @classmethod
    def from_seller(cls, seller: Seller) -> "SellerStat":
        return cls(seller_id=seller.id, name=seller.display_name)

    def add_quantity(self, sku: str, quantity: Number) -> None:
        self.products_sold[sku] = self.products_sold.get(sku, 0) + quantity


class TopProduct(BaseModel):
    sku: str
    quantity: Number


class SellerReport(BaseModel):
    """
    One ranked row of the final report.

    `seller_id` is always a string: ids are coerced to str when the dataset
    is parsed, so a seller given as `7` is reported as `"7"`.
    """

    seller_id: str
    name: str
    revenue: float
    profit: float
    sales_count: int
    top_products: list[TopProduct]
    bonus: float


def is_real_number(value: Any) -> bool:
    """True for real numbers (numpy scalars included) that are not bool or NaN."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return not math.isnan(value)

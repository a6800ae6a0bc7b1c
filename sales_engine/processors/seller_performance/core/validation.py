"""
Validation — Fail-fast structural checks on the dataset and options.

Any violation raises SalesDataValidationError before aggregation starts,
so no partial report is ever produced.

Check order:
    1. dataset is a mapping
    2. purchase_records / products / sellers are present and are sequences
    3. each of them is non-empty
    4. options (if given) are a mapping with a valid profit margin,
       invocable strategy overrides, a known rounding policy and top_n
    5. every record parses against its model; ids and SKUs are unique
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from ....config import settings
from ..metrics.bonus import BonusStrategy, CallableBonus, RankTieredBonus
from ..metrics.revenue import CallableRevenue, RevenueStrategy, SimpleRevenue
from ..models import Product, PurchaseRecord, Seller, is_real_number
from .rounding import RoundingPolicy


REQUIRED_COLLECTIONS = ("purchase_records", "products", "sellers")

# option name → accepted spellings (camelCase first, as documented)
_OPTION_KEYS = {
    "profit_margin": ("profitMargin", "profit_margin"),
    "revenue": ("calculateRevenue", "calculate_revenue"),
    "bonus": ("calculateBonus", "calculate_bonus"),
    "rounding": ("rounding",),
    "top_n": ("top_n", "topN"),
}


class SalesDataValidationError(ValueError):
    """Fatal input error. `field` names the offending path."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


@dataclass(frozen=True)
class SalesDataset:
    purchase_records: tuple[PurchaseRecord, ...]
    products: tuple[Product, ...]
    sellers: tuple[Seller, ...]


@dataclass(frozen=True)
class AnalysisOptions:
    profit_margin: float = field(default_factory=lambda: settings.DEFAULT_PROFIT_MARGIN)
    revenue_strategy: RevenueStrategy = field(default_factory=SimpleRevenue)
    bonus_strategy: BonusStrategy = field(default_factory=RankTieredBonus)
    rounding: RoundingPolicy = field(
        default_factory=lambda: RoundingPolicy(settings.ROUNDING)
    )
    top_n: int = field(default_factory=lambda: settings.TOP_PRODUCTS_LIMIT)


# ------------------------------------------------------------------
# Dataset
# ------------------------------------------------------------------

def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _parse_records(name: str, raw: Sequence, model) -> tuple:
    parsed = []
    for i, item in enumerate(raw):
        path = f"{name}[{i}]"
        if not isinstance(item, Mapping):
            raise SalesDataValidationError(path, "must be an object")
        try:
            parsed.append(model.model_validate(dict(item)))
        except ValidationError as exc:
            err = exc.errors()[0]
            loc = ".".join(str(p) for p in err["loc"])
            raise SalesDataValidationError(f"{path}.{loc}" if loc else path, err["msg"]) from exc
    return tuple(parsed)


def _check_unique(name: str, keys: list[str], key_name: str) -> None:
    seen: set[str] = set()
    for i, key in enumerate(keys):
        if key in seen:
            raise SalesDataValidationError(
                f"{name}[{i}].{key_name}", f"duplicate {key_name} {key!r}"
            )
        seen.add(key)


def check_structure(data: Any) -> None:
    """Raise unless *data* is a mapping of three non-empty sequences."""
    if isinstance(data, SalesDataset):
        return

    if not isinstance(data, Mapping):
        raise SalesDataValidationError("data", "must be a valid object")

    for key in REQUIRED_COLLECTIONS:
        if not _is_sequence(data.get(key)):
            raise SalesDataValidationError(key, "must be an array")
        if len(data[key]) == 0:
            raise SalesDataValidationError(key, "array is empty")


def validate_dataset(data: Any) -> SalesDataset:
    """
    Check the raw dataset and parse it into models.

    Args:
        data: Mapping with purchase_records, products and sellers lists,
              or an already validated SalesDataset.

    Returns:
        SalesDataset with immutable, parsed records.
    """
    check_structure(data)
    if isinstance(data, SalesDataset):
        return data

    sellers = _parse_records("sellers", data["sellers"], Seller)
    products = _parse_records("products", data["products"], Product)
    records = _parse_records("purchase_records", data["purchase_records"], PurchaseRecord)

    _check_unique("sellers", [s.id for s in sellers], "id")
    _check_unique("products", [p.sku for p in products], "sku")

    return SalesDataset(purchase_records=records, products=products, sellers=sellers)


# ------------------------------------------------------------------
# Options
# ------------------------------------------------------------------

def _lookup(options: Mapping, name: str) -> tuple[str | None, Any]:
    for key in _OPTION_KEYS[name]:
        if key in options and options[key] is not None:
            return key, options[key]
    return None, None


def _revenue_strategy(key: str, value: Any) -> RevenueStrategy:
    if callable(getattr(value, "compute_revenue", None)):
        return value
    if callable(value):
        return CallableRevenue(value)
    raise SalesDataValidationError(f"options.{key}", "must be a function")


def _bonus_strategy(key: str, value: Any) -> BonusStrategy:
    if callable(getattr(value, "compute_bonus", None)):
        return value
    if callable(value):
        return CallableBonus(value)
    raise SalesDataValidationError(f"options.{key}", "must be a function")


def validate_options(options: Any = None) -> AnalysisOptions:
    """
    Normalise caller options into AnalysisOptions.

    Absent or None fields fall back to defaults from settings.
    """
    if options is None:
        return AnalysisOptions()
    if isinstance(options, AnalysisOptions):
        return options
    if not isinstance(options, Mapping):
        raise SalesDataValidationError("options", "must be an object or None")

    kwargs: dict[str, Any] = {}

    key, margin = _lookup(options, "profit_margin")
    if key is not None:
        if not is_real_number(margin) or not 0 <= margin <= 1:
            raise SalesDataValidationError(
                f"options.{key}", "must be a number between 0 and 1"
            )
        kwargs["profit_margin"] = float(margin)

    key, fn = _lookup(options, "revenue")
    if key is not None:
        kwargs["revenue_strategy"] = _revenue_strategy(key, fn)

    key, fn = _lookup(options, "bonus")
    if key is not None:
        kwargs["bonus_strategy"] = _bonus_strategy(key, fn)

    key, rounding = _lookup(options, "rounding")
    if key is not None:
        try:
            kwargs["rounding"] = RoundingPolicy(rounding)
        except ValueError:
            raise SalesDataValidationError(
                "options.rounding", "must be 'per_step' or 'final'"
            ) from None

    key, top_n = _lookup(options, "top_n")
    if key is not None:
        if isinstance(top_n, bool) or not isinstance(top_n, int) or top_n < 1:
            raise SalesDataValidationError(f"options.{key}", "must be a positive integer")
        kwargs["top_n"] = top_n

    return AnalysisOptions(**kwargs)


def validate_input(data: Any, options: Any = None) -> tuple[SalesDataset, AnalysisOptions]:
    """Run every check in order and return the parsed dataset and options."""
    check_structure(data)
    opts = validate_options(options)
    return validate_dataset(data), opts

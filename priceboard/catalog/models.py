"""Catalog and submission data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class PriceType(str, Enum):
    REGULAR = "regular"
    SALE = "sale"


class Mode(str, Enum):
    """Which price a board cell shows."""

    BEST = "best"
    REGULAR = "regular"
    SALE = "sale"

    @classmethod
    def parse(cls, value: Mode | str | None) -> Mode:
        if not value:
            return cls.BEST
        return cls(value.strip().lower())


@dataclass(slots=True, frozen=True)
class Store:
    id: int
    name: str
    sort_order: int = 0


@dataclass(slots=True, frozen=True)
class Size:
    value: Decimal
    unit: str

    @classmethod
    def from_columns(cls, value: Decimal | float | None, unit: str | None) -> Size | None:
        if value is None or not unit:
            return None
        return cls(value=Decimal(str(value)), unit=unit)

    def __str__(self) -> str:
        # 1.50 -> "1.5", 2.0 -> "2"
        text = format(self.value.normalize(), "f")
        return f"{text}{self.unit}"


@dataclass(slots=True, frozen=True)
class ProductVariant:
    id: int
    product_name: str
    brand_name: str
    size: Size | None = None
    flavour: str | None = None


@dataclass(slots=True, frozen=True)
class PriceSubmission:
    id: int
    store_id: int
    variant_id: int | None
    price_cents: int
    price_type: PriceType
    created_at: datetime
    sale_end_date: date | None = None
    approved: bool = True

    @property
    def is_sale(self) -> bool:
        return self.price_type is PriceType.SALE

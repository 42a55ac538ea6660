"""Cheapest-store ranking per board row."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from priceboard.catalog.models import Mode, Store
from priceboard.logic.feed import LatestIndex
from priceboard.logic.pricing import resolve_display


@dataclass(slots=True, frozen=True)
class RowRanking:
    cheapest_store_id: int | None
    save_pct: float | None


@dataclass(slots=True, frozen=True)
class StorePrice:
    store_id: int
    price_cents: int


def ordered_stores(stores: Sequence[Store]) -> list[Store]:
    return sorted(stores, key=lambda s: s.sort_order)


def priced_stores(
    index: LatestIndex,
    variant_id: int,
    stores: Sequence[Store],
    mode: Mode,
    as_of: date | datetime,
) -> list[StorePrice]:
    values: list[StorePrice] = []
    for store in ordered_stores(stores):
        cell = resolve_display(index.get((variant_id, store.id)), mode, as_of)
        if cell is not None:
            values.append(StorePrice(store_id=store.id, price_cents=cell.price_cents))
    return values


def savings_percentage(lowest_cents: int, second_cents: int) -> float | None:
    """Percent saved against the runner-up, one decimal, halves away from zero."""
    if second_cents <= 0:
        return None
    pct = Decimal(second_cents - lowest_cents) * 100 / Decimal(second_cents)
    return float(pct.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def rank_row(
    index: LatestIndex,
    variant_id: int,
    stores: Sequence[Store],
    mode: Mode,
    as_of: date | datetime,
) -> RowRanking:
    values = priced_stores(index, variant_id, stores, mode, as_of)
    values.sort(key=lambda v: v.price_cents)
    if not values:
        return RowRanking(cheapest_store_id=None, save_pct=None)
    cheapest = values[0]
    if len(values) == 1:
        return RowRanking(cheapest_store_id=cheapest.store_id, save_pct=None)
    second = values[1]
    return RowRanking(
        cheapest_store_id=cheapest.store_id,
        save_pct=savings_percentage(cheapest.price_cents, second.price_cents),
    )


def has_any_price(
    index: LatestIndex,
    variant_id: int,
    stores: Sequence[Store],
    mode: Mode,
    as_of: date | datetime,
) -> bool:
    return any(
        resolve_display(index.get((variant_id, store.id)), mode, as_of) is not None
        for store in stores
    )

"""Board computation: per-row cells, cheapest store and savings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable

from priceboard.catalog.models import Mode, PriceSubmission, ProductVariant, Store
from priceboard.logic.feed import build_latest_index
from priceboard.logic.pricing import DisplayPrice, resolve_display
from priceboard.logic.ranking import RowRanking, has_any_price, ordered_stores, rank_row
from priceboard.logic.search import matches, variant_label, variant_sort_key
from priceboard.utils.dates import days_since, now_in_tz

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BoardCell:
    store: Store
    display: DisplayPrice | None
    is_cheapest: bool
    age_days: int | None


@dataclass(slots=True)
class BoardRow:
    variant: ProductVariant
    label: str
    cells: list[BoardCell]
    cheapest_store_id: int | None
    save_pct: float | None


class Aggregator:
    """Read-only view over one catalog and feed snapshot.

    The feed is indexed once; every query afterwards is a pure lookup, so the
    same instance can serve any number of mode or filter changes.
    """

    def __init__(
        self,
        stores: Iterable[Store],
        variants: Iterable[ProductVariant],
        feed: Iterable[PriceSubmission],
    ) -> None:
        self.stores = ordered_stores(list(stores))
        self.variants = sorted(variants, key=variant_sort_key)
        self.index = build_latest_index(feed)
        logger.info(
            "Indexed %s priced pairs for %s variants across %s stores",
            len(self.index),
            len(self.variants),
            len(self.stores),
        )

    def display_price(
        self, variant_id: int, store_id: int, mode: Mode = Mode.BEST, as_of: date | datetime | None = None
    ) -> DisplayPrice | None:
        return resolve_display(self.index.get((variant_id, store_id)), mode, as_of or now_in_tz())

    def rank_row(self, variant_id: int, mode: Mode = Mode.BEST, as_of: date | datetime | None = None) -> RowRanking:
        return rank_row(self.index, variant_id, self.stores, mode, as_of or now_in_tz())

    def has_any_price(self, variant_id: int, mode: Mode = Mode.BEST, as_of: date | datetime | None = None) -> bool:
        return has_any_price(self.index, variant_id, self.stores, mode, as_of or now_in_tz())

    def board(
        self,
        mode: Mode = Mode.BEST,
        query: str | None = None,
        *,
        only_with_prices: bool = True,
        as_of: date | datetime | None = None,
    ) -> list[BoardRow]:
        as_of = as_of or now_in_tz()
        rows: list[BoardRow] = []
        for variant in self.variants:
            if not matches(variant, query):
                continue
            if only_with_prices and not self.has_any_price(variant.id, mode, as_of):
                continue
            rows.append(self._build_row(variant, mode, as_of))
        return rows

    def _build_row(self, variant: ProductVariant, mode: Mode, as_of: date | datetime) -> BoardRow:
        ranking = self.rank_row(variant.id, mode, as_of)
        cells: list[BoardCell] = []
        for store in self.stores:
            display = self.display_price(variant.id, store.id, mode, as_of)
            cells.append(
                BoardCell(
                    store=store,
                    display=display,
                    is_cheapest=display is not None and ranking.cheapest_store_id == store.id,
                    age_days=days_since(display.created_at, as_of) if display else None,
                )
            )
        return BoardRow(
            variant=variant,
            label=variant_label(variant),
            cells=cells,
            cheapest_store_id=ranking.cheapest_store_id,
            save_pct=ranking.save_pct,
        )

"""Display-price resolution for a single (variant, store) cell."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from priceboard.catalog.models import Mode, PriceSubmission
from priceboard.logic.feed import LatestPair
from priceboard.utils.dates import local_day
from priceboard.utils.money import cents_to_decimal


@dataclass(slots=True, frozen=True)
class DisplayPrice:
    price_cents: int
    is_sale: bool
    created_at: datetime

    @property
    def price(self) -> Decimal:
        return cents_to_decimal(self.price_cents)


def is_sale_active(submission: PriceSubmission | None, as_of: date | datetime) -> bool:
    """A sale runs through its end date inclusive; no end date means it never lapses."""
    if submission is None:
        return False
    if submission.sale_end_date is None:
        return True
    return submission.sale_end_date >= local_day(as_of)


def _display(submission: PriceSubmission) -> DisplayPrice:
    return DisplayPrice(
        price_cents=submission.price_cents,
        is_sale=submission.is_sale,
        created_at=submission.created_at,
    )


def resolve_display(
    pair: LatestPair | None, mode: Mode | str, as_of: date | datetime
) -> DisplayPrice | None:
    mode = Mode.parse(mode)
    if pair is None:
        return None
    regular = pair.regular
    sale = pair.sale if is_sale_active(pair.sale, as_of) else None

    if mode is Mode.REGULAR:
        return _display(regular) if regular else None
    if mode is Mode.SALE:
        return _display(sale) if sale else None
    if mode is Mode.BEST:
        if sale and regular:
            # ties go to the sale
            chosen = sale if sale.price_cents <= regular.price_cents else regular
            return _display(chosen)
        if sale:
            return _display(sale)
        if regular:
            return _display(regular)
        return None
    raise ValueError(f"Unsupported mode: {mode!r}")

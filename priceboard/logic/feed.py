"""Latest-submission index over the approved price feed."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from priceboard.catalog.models import PriceSubmission, PriceType

logger = logging.getLogger(__name__)

PairKey = tuple[int, int]


@dataclass(slots=True)
class LatestPair:
    regular: PriceSubmission | None = None
    sale: PriceSubmission | None = None


LatestIndex = Mapping[PairKey, LatestPair]


def newest_first(feed: Iterable[PriceSubmission]) -> list[PriceSubmission]:
    # sorted() is stable with reverse=True, so equal timestamps keep feed order
    return sorted(feed, key=lambda s: s.created_at, reverse=True)


def build_latest_index(feed: Iterable[PriceSubmission]) -> dict[PairKey, LatestPair]:
    """Map (variant_id, store_id) to its latest regular and latest sale submission.

    The first submission of each type seen in newest-first order fills its
    slot and is never replaced.
    """
    index: dict[PairKey, LatestPair] = {}
    skipped = 0
    for submission in newest_first(feed):
        if not submission.variant_id or not submission.approved:
            skipped += 1
            continue
        key = (submission.variant_id, submission.store_id)
        slot = index.get(key)
        if slot is None:
            slot = index[key] = LatestPair()
        if submission.price_type is PriceType.REGULAR and slot.regular is None:
            slot.regular = submission
        elif submission.price_type is PriceType.SALE and slot.sale is None:
            slot.sale = submission
    if skipped:
        logger.debug("Skipped %s unusable submissions while indexing", skipped)
    return index

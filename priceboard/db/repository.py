"""Read side: load the catalog and the approved price feed."""

from __future__ import annotations

import logging
import os

from sqlalchemy import select
from sqlalchemy.engine import Engine

from priceboard.catalog.models import PriceSubmission, PriceType, ProductVariant, Size, Store
from priceboard.db.tables import brands, price_submissions, product_variants, products, stores
from priceboard.logic.board import Aggregator
from priceboard.utils.dates import as_utc

logger = logging.getLogger(__name__)

FEED_LIMIT = int(os.environ.get("FEED_LIMIT", 5000))
VARIANT_LIMIT = int(os.environ.get("VARIANT_LIMIT", 5000))


def load_stores(engine: Engine) -> list[Store]:
    query = select(stores.c.id, stores.c.name, stores.c.sort_order).order_by(stores.c.sort_order, stores.c.id)
    with engine.connect() as conn:
        return [Store(id=row.id, name=row.name, sort_order=row.sort_order) for row in conn.execute(query)]


def load_variants(engine: Engine, limit: int = VARIANT_LIMIT) -> list[ProductVariant]:
    query = (
        select(
            product_variants.c.id,
            product_variants.c.size_value,
            product_variants.c.size_unit,
            product_variants.c.flavour,
            products.c.name.label("product_name"),
            brands.c.name.label("brand_name"),
        )
        .select_from(product_variants)
        .outerjoin(products, products.c.id == product_variants.c.product_id)
        .outerjoin(brands, brands.c.id == product_variants.c.brand_id)
        .order_by(product_variants.c.id)
        .limit(limit)
    )
    with engine.connect() as conn:
        rows = conn.execute(query).mappings().all()
    return [
        ProductVariant(
            id=row["id"],
            product_name=row["product_name"] or "",
            brand_name=row["brand_name"] or "",
            size=Size.from_columns(row["size_value"], row["size_unit"]),
            flavour=row["flavour"] or None,
        )
        for row in rows
    ]


def load_approved_feed(engine: Engine, limit: int = FEED_LIMIT) -> list[PriceSubmission]:
    query = (
        select(price_submissions)
        .where(price_submissions.c.is_approved.is_(True))
        .order_by(price_submissions.c.created_at.desc(), price_submissions.c.id.desc())
        .limit(limit)
    )
    with engine.connect() as conn:
        rows = conn.execute(query).mappings().all()
    feed: list[PriceSubmission] = []
    for row in rows:
        try:
            price_type = PriceType(row["price_type"])
        except ValueError:
            logger.warning("Ignoring submission %s with price type %r", row["id"], row["price_type"])
            continue
        feed.append(
            PriceSubmission(
                id=row["id"],
                store_id=row["store_id"],
                variant_id=row["variant_id"],
                price_cents=row["price_cents"],
                price_type=price_type,
                created_at=as_utc(row["created_at"]),
                sale_end_date=row["sale_end_date"],
                approved=bool(row["is_approved"]),
            )
        )
    return feed


def load_aggregator(engine: Engine) -> Aggregator:
    store_list = load_stores(engine)
    variants = load_variants(engine)
    feed = load_approved_feed(engine)
    logger.info("Loaded %s stores, %s variants, %s approved submissions", len(store_list), len(variants), len(feed))
    return Aggregator(store_list, variants, feed)


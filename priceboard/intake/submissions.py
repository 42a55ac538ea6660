"""Price submission intake and moderation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime, timezone

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine

from priceboard.catalog.models import PriceType, ProductVariant, Size
from priceboard.db.tables import brands, price_submissions, product_variants, products, stores
from priceboard.intake.errors import IntakeError, SubmissionNotFound
from priceboard.logic.search import variant_label
from priceboard.utils.dates import as_utc
from priceboard.utils.money import decimal_to_cents, parse_dollars

logger = logging.getLogger(__name__)

PENDING_LIMIT = int(os.environ.get("PENDING_LIMIT", 100))


@dataclass(slots=True)
class PriceRequest:
    store_id: int | None
    variant_id: int | None
    price: str
    price_type: PriceType = PriceType.REGULAR
    sale_end_date: date | None = None


@dataclass(slots=True)
class PendingSubmission:
    id: int
    created_at: datetime
    price_cents: int
    price_type: PriceType
    store_name: str
    product_label: str


def parse_price_to_cents(text: str) -> int:
    dollars = parse_dollars(text)
    if dollars is None or dollars <= 0:
        raise IntakeError("Enter a valid price like 12.99.")
    cents = decimal_to_cents(dollars)
    if cents <= 0:
        raise IntakeError("Enter a valid price like 12.99.")
    return cents


def submit_price(engine: Engine, request: PriceRequest) -> int:
    """Record a new, unapproved price submission and return its id."""
    if not request.store_id:
        raise IntakeError("Pick a store.")
    if not request.variant_id:
        raise IntakeError("Pick a product (brand/size/flavour).")
    cents = parse_price_to_cents(request.price)
    sale_end = request.sale_end_date if request.price_type is PriceType.SALE else None

    with engine.begin() as conn:
        store_exists = conn.execute(
            select(stores.c.id).where(stores.c.id == request.store_id)
        ).scalar_one_or_none()
        if store_exists is None:
            raise IntakeError("Pick a store.")
        variant_exists = conn.execute(
            select(product_variants.c.id).where(product_variants.c.id == request.variant_id)
        ).scalar_one_or_none()
        if variant_exists is None:
            raise IntakeError("Pick a product (brand/size/flavour).")
        result = conn.execute(
            insert(price_submissions).values(
                store_id=request.store_id,
                variant_id=request.variant_id,
                price_cents=cents,
                price_type=request.price_type.value,
                sale_end_date=sale_end,
                created_at=datetime.now(timezone.utc),
                is_approved=False,
            )
        )
        submission_id = int(result.inserted_primary_key[0])
    logger.info(
        "Submission %s: %s cents (%s) for variant %s at store %s pending approval",
        submission_id,
        cents,
        request.price_type.value,
        request.variant_id,
        request.store_id,
    )
    return submission_id


def list_pending(engine: Engine, limit: int = PENDING_LIMIT) -> list[PendingSubmission]:
    query = (
        select(
            price_submissions.c.id,
            price_submissions.c.created_at,
            price_submissions.c.price_cents,
            price_submissions.c.price_type,
            stores.c.name.label("store_name"),
            product_variants.c.size_value,
            product_variants.c.size_unit,
            product_variants.c.flavour,
            products.c.name.label("product_name"),
            brands.c.name.label("brand_name"),
        )
        .select_from(price_submissions)
        .outerjoin(stores, stores.c.id == price_submissions.c.store_id)
        .outerjoin(product_variants, product_variants.c.id == price_submissions.c.variant_id)
        .outerjoin(products, products.c.id == product_variants.c.product_id)
        .outerjoin(brands, brands.c.id == product_variants.c.brand_id)
        .where(price_submissions.c.is_approved.is_(False))
        .order_by(price_submissions.c.created_at.desc(), price_submissions.c.id.desc())
        .limit(limit)
    )
    with engine.connect() as conn:
        rows = conn.execute(query).mappings().all()
    pending: list[PendingSubmission] = []
    for row in rows:
        variant = ProductVariant(
            id=0,
            product_name=row["product_name"] or "",
            brand_name=row["brand_name"] or "",
            size=Size.from_columns(row["size_value"], row["size_unit"]),
            flavour=row["flavour"] or None,
        )
        pending.append(
            PendingSubmission(
                id=row["id"],
                created_at=as_utc(row["created_at"]),
                price_cents=row["price_cents"],
                price_type=PriceType(row["price_type"]),
                store_name=row["store_name"] or "",
                product_label=variant_label(variant),
            )
        )
    return pending


def approve_submission(engine: Engine, submission_id: int) -> None:
    with engine.begin() as conn:
        result = conn.execute(
            update(price_submissions)
            .where(price_submissions.c.id == submission_id)
            .values(is_approved=True)
        )
    if result.rowcount == 0:
        raise SubmissionNotFound(submission_id)
    logger.info("Approved submission %s", submission_id)

"""Product variant intake: product, brand and size/flavour combinations."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from sqlalchemy import insert, select
from sqlalchemy.engine import Connection, Engine

from priceboard.db.tables import brands, product_variants, products
from priceboard.intake.errors import IntakeError

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(slots=True)
class VariantRequest:
    product_name: str
    brand_id: int | None = None
    new_brand_name: str = ""
    size_value: str = ""
    size_unit: str = "L"
    flavour: str = ""
    notes: str = ""


@dataclass(slots=True)
class BrandRecord:
    id: int
    name: str


def normalize_name(value: str | None) -> str:
    return _WHITESPACE_RE.sub(" ", (value or "").strip())


def parse_size(value: str, unit: str) -> tuple[Decimal | None, str | None]:
    """Blank size means no size; otherwise a positive number and a unit."""
    if normalize_name(value) == "":
        return None, None
    try:
        size = Decimal(value.strip())
    except InvalidOperation:
        size = None
    if size is None or not size.is_finite() or size <= 0:
        raise IntakeError("Size must be a positive number (or leave it blank).")
    unit = normalize_name(unit)
    if not unit:
        raise IntakeError("Please choose a unit.")
    return size, unit


def list_brands(engine: Engine) -> list[BrandRecord]:
    with engine.connect() as conn:
        rows = conn.execute(select(brands.c.id, brands.c.name).order_by(brands.c.name))
        return [BrandRecord(id=row.id, name=row.name) for row in rows]


def add_variant(engine: Engine, request: VariantRequest) -> int:
    """Create the variant described by ``request``, or return the matching one."""
    product_name = normalize_name(request.product_name)
    if not product_name:
        raise IntakeError("Please enter a product name.")
    new_brand = normalize_name(request.new_brand_name)
    if not request.brand_id and not new_brand:
        raise IntakeError("Pick a brand OR type a new brand.")
    size_value, size_unit = parse_size(request.size_value, request.size_unit)
    flavour = request.flavour.strip() or None
    notes = normalize_name(request.notes) or None

    with engine.begin() as conn:
        product_id = _ensure_named(conn, products, product_name)
        if new_brand:
            brand_id = _ensure_named(conn, brands, new_brand)
        else:
            brand_id = conn.execute(
                select(brands.c.id).where(brands.c.id == request.brand_id)
            ).scalar_one_or_none()
            if brand_id is None:
                raise IntakeError("Brand not found (try refresh and select again).")

        existing = conn.execute(
            select(product_variants.c.id).where(
                product_variants.c.product_id == product_id,
                product_variants.c.brand_id == brand_id,
                product_variants.c.size_value.is_not_distinct_from(size_value),
                product_variants.c.size_unit.is_not_distinct_from(size_unit),
                product_variants.c.flavour.is_not_distinct_from(flavour),
            )
        ).scalar_one_or_none()
        if existing is not None:
            logger.info("Variant %s already exists for %s", existing, product_name)
            return int(existing)

        result = conn.execute(
            insert(product_variants).values(
                product_id=product_id,
                brand_id=brand_id,
                size_value=size_value,
                size_unit=size_unit,
                flavour=flavour,
                notes=notes,
            )
        )
        variant_id = int(result.inserted_primary_key[0])
    logger.info("Created variant %s for %s", variant_id, product_name)
    return variant_id


def _ensure_named(conn: Connection, table, name: str) -> int:
    existing = conn.execute(select(table.c.id).where(table.c.name == name)).scalar_one_or_none()
    if existing is not None:
        return int(existing)
    result = conn.execute(insert(table).values(name=name))
    return int(result.inserted_primary_key[0])

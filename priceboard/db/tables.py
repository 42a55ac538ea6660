"""Table definitions for the catalog and the price feed."""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)

metadata = MetaData()

stores = Table(
    "stores",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False, unique=True),
    Column("sort_order", Integer, nullable=False, default=0),
)

brands = Table(
    "brands",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False, unique=True),
)

products = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False, unique=True),
)

product_variants = Table(
    "product_variants",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("product_id", Integer, ForeignKey("products.id"), nullable=False),
    Column("brand_id", Integer, ForeignKey("brands.id"), nullable=False),
    Column("size_value", Numeric(10, 3)),
    Column("size_unit", String(16)),
    Column("flavour", Text),
    Column("notes", Text),
    UniqueConstraint("product_id", "brand_id", "size_value", "size_unit", "flavour"),
)

price_submissions = Table(
    "price_submissions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("store_id", Integer, ForeignKey("stores.id"), nullable=False),
    Column("variant_id", Integer, ForeignKey("product_variants.id")),
    Column("price_cents", Integer, nullable=False),
    Column("price_type", String(16), nullable=False),
    Column("sale_end_date", Date),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("is_approved", Boolean, nullable=False, default=False),
)

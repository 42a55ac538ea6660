from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from priceboard.catalog.models import PriceSubmission, PriceType
from priceboard.db.tables import brands, metadata, price_submissions, product_variants, products, stores


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def seeded_engine(engine):
    with engine.begin() as conn:
        conn.execute(stores.insert(), [
            {"id": 1, "name": "Sobeys", "sort_order": 1},
            {"id": 2, "name": "Metro", "sort_order": 2},
            {"id": 3, "name": "Walmart", "sort_order": 3},
        ])
        conn.execute(brands.insert(), [
            {"id": 1, "name": "Kedem"},
            {"id": 2, "name": "Manischewitz"},
        ])
        conn.execute(products.insert(), [
            {"id": 1, "name": "Grape Juice"},
            {"id": 2, "name": "Matzo"},
        ])
        conn.execute(product_variants.insert(), [
            {"id": 1, "product_id": 1, "brand_id": 1, "size_value": Decimal("1.5"), "size_unit": "L", "flavour": "Concord"},
            {"id": 2, "product_id": 2, "brand_id": 2, "size_value": None, "size_unit": None, "flavour": None},
            {"id": 3, "product_id": 1, "brand_id": 1, "size_value": Decimal("1.89"), "size_unit": "L", "flavour": "White"},
        ])
        conn.execute(price_submissions.insert(), [
            {"store_id": 1, "variant_id": 1, "price_cents": 899, "price_type": "regular",
             "sale_end_date": None, "created_at": datetime(2026, 3, 1, 12), "is_approved": True},
            {"store_id": 1, "variant_id": 1, "price_cents": 799, "price_type": "regular",
             "sale_end_date": None, "created_at": datetime(2026, 3, 5, 12), "is_approved": True},
            {"store_id": 2, "variant_id": 1, "price_cents": 1000, "price_type": "regular",
             "sale_end_date": None, "created_at": datetime(2026, 3, 4, 12), "is_approved": True},
            {"store_id": 2, "variant_id": 1, "price_cents": 750, "price_type": "sale",
             "sale_end_date": date(2026, 3, 9), "created_at": datetime(2026, 3, 6, 12), "is_approved": True},
            {"store_id": 3, "variant_id": 1, "price_cents": 699, "price_type": "sale",
             "sale_end_date": None, "created_at": datetime(2026, 3, 2, 12), "is_approved": True},
            {"store_id": 3, "variant_id": 1, "price_cents": 1299, "price_type": "regular",
             "sale_end_date": None, "created_at": datetime(2026, 3, 7, 12), "is_approved": False},
            {"store_id": 2, "variant_id": 2, "price_cents": 450, "price_type": "regular",
             "sale_end_date": None, "created_at": datetime(2026, 3, 3, 12), "is_approved": True},
            {"store_id": 1, "variant_id": 2, "price_cents": 399, "price_type": "sale",
             "sale_end_date": None, "created_at": datetime(2026, 3, 8, 12), "is_approved": False},
        ])
    return engine


@pytest.fixture()
def make_submission():
    counter = iter(range(1, 10_000))

    def factory(
        price_cents,
        price_type=PriceType.REGULAR,
        *,
        created_at=datetime(2026, 3, 1, 12),
        store_id=1,
        variant_id=1,
        sale_end_date=None,
        approved=True,
    ):
        return PriceSubmission(
            id=next(counter),
            store_id=store_id,
            variant_id=variant_id,
            price_cents=price_cents,
            price_type=price_type,
            created_at=created_at,
            sale_end_date=sale_end_date,
            approved=approved,
        )

    return factory

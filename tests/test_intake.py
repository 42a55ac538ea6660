from datetime import date

import pytest
from sqlalchemy import select

from priceboard.catalog.models import PriceType
from priceboard.db.repository import load_approved_feed, load_variants
from priceboard.db.tables import brands, price_submissions, products
from priceboard.intake.errors import IntakeError, SubmissionNotFound
from priceboard.intake.submissions import (
    PriceRequest,
    approve_submission,
    list_pending,
    parse_price_to_cents,
    submit_price,
)
from priceboard.intake.variants import VariantRequest, add_variant, list_brands, normalize_name


def test_parse_price_to_cents():
    assert parse_price_to_cents("12.99") == 1299
    assert parse_price_to_cents(" $4.5 ") == 450
    assert parse_price_to_cents("0.005") == 1
    assert parse_price_to_cents("1.005") == 101


@pytest.mark.parametrize("text", ["", "abc", "0", "-1", "0.001", "inf", "NaN"])
def test_parse_price_rejects_bad_input(text):
    with pytest.raises(IntakeError, match="valid price"):
        parse_price_to_cents(text)


def test_submit_price_is_pending_until_approved(seeded_engine):
    submission_id = submit_price(
        seeded_engine,
        PriceRequest(store_id=1, variant_id=2, price="3.49"),
    )
    assert submission_id not in {s.id for s in load_approved_feed(seeded_engine)}
    assert list_pending(seeded_engine)[0].id == submission_id

    approve_submission(seeded_engine, submission_id)
    approved = {s.id: s for s in load_approved_feed(seeded_engine)}
    assert approved[submission_id].price_cents == 349


def test_sale_end_date_only_kept_for_sales(seeded_engine):
    regular_id = submit_price(
        seeded_engine,
        PriceRequest(store_id=1, variant_id=2, price="3.49", sale_end_date=date(2026, 4, 1)),
    )
    sale_id = submit_price(
        seeded_engine,
        PriceRequest(store_id=1, variant_id=2, price="2.99", price_type=PriceType.SALE,
                     sale_end_date=date(2026, 4, 1)),
    )
    with seeded_engine.connect() as conn:
        ends = dict(conn.execute(select(price_submissions.c.id, price_submissions.c.sale_end_date)).all())
    assert ends[regular_id] is None
    assert ends[sale_id] == date(2026, 4, 1)


@pytest.mark.parametrize(
    "request_kwargs, message",
    [
        ({"store_id": None, "variant_id": 1, "price": "1"}, "Pick a store."),
        ({"store_id": 1, "variant_id": None, "price": "1"}, "Pick a product"),
        ({"store_id": 99, "variant_id": 1, "price": "1"}, "Pick a store."),
        ({"store_id": 1, "variant_id": 99, "price": "1"}, "Pick a product"),
        ({"store_id": 1, "variant_id": 1, "price": "free"}, "valid price"),
    ],
)
def test_submit_price_validation(seeded_engine, request_kwargs, message):
    with pytest.raises(IntakeError, match=message):
        submit_price(seeded_engine, PriceRequest(**request_kwargs))


def test_list_pending_labels(seeded_engine):
    pending = list_pending(seeded_engine)
    assert [p.id for p in pending] == [8, 6]
    assert pending[0].product_label == "Manischewitz — Matzo"
    assert pending[0].price_type is PriceType.SALE
    assert pending[1].product_label == "Kedem — Grape Juice — 1.5L — Concord"
    assert pending[1].store_name == "Walmart"


def test_approve_unknown_submission(seeded_engine):
    with pytest.raises(SubmissionNotFound):
        approve_submission(seeded_engine, 404)


def test_normalize_name():
    assert normalize_name("  Grape   Juice ") == "Grape Juice"
    assert normalize_name(None) == ""


def test_add_variant_with_new_brand(seeded_engine):
    variant_id = add_variant(
        seeded_engine,
        VariantRequest(product_name=" Honey ", new_brand_name="Gefen", size_value="500", size_unit="g"),
    )
    variant = {v.id: v for v in load_variants(seeded_engine)}[variant_id]
    assert variant.brand_name == "Gefen"
    assert variant.product_name == "Honey"
    assert str(variant.size) == "500g"
    assert "Gefen" in [b.name for b in list_brands(seeded_engine)]


def test_add_variant_reuses_product_and_existing_variant(seeded_engine):
    request = VariantRequest(product_name="Grape  Juice", brand_id=1, size_value="1.5", size_unit="L",
                             flavour="Concord")
    assert add_variant(seeded_engine, request) == 1
    with seeded_engine.connect() as conn:
        assert conn.execute(select(products.c.id).where(products.c.name == "Grape Juice")).scalars().all() == [1]
        assert len(conn.execute(select(brands.c.id)).all()) == 2


def test_add_variant_without_size(seeded_engine):
    variant_id = add_variant(seeded_engine, VariantRequest(product_name="Matzo", brand_id=1, size_unit="L"))
    variant = {v.id: v for v in load_variants(seeded_engine)}[variant_id]
    assert variant.size is None
    assert variant.brand_name == "Kedem"


@pytest.mark.parametrize(
    "request_kwargs, message",
    [
        ({"product_name": "   "}, "product name"),
        ({"product_name": "Honey"}, "Pick a brand"),
        ({"product_name": "Honey", "brand_id": 1, "size_value": "-2"}, "positive number"),
        ({"product_name": "Honey", "brand_id": 1, "size_value": "$1.5"}, "positive number"),
        ({"product_name": "Honey", "brand_id": 1, "size_value": "inf"}, "positive number"),
        ({"product_name": "Honey", "brand_id": 1, "size_value": "2", "size_unit": " "}, "choose a unit"),
        ({"product_name": "Honey", "brand_id": 42}, "Brand not found"),
    ],
)
def test_add_variant_validation(seeded_engine, request_kwargs, message):
    with pytest.raises(IntakeError, match=message):
        add_variant(seeded_engine, VariantRequest(**request_kwargs))

"""FastAPI application for the price board, intake and moderation."""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.engine import Engine

from priceboard.catalog.models import Mode, PriceType
from priceboard.db.repository import load_aggregator, load_stores
from priceboard.db.session import create_engine_from_env
from priceboard.intake.errors import IntakeError, SubmissionNotFound
from priceboard.intake.submissions import PriceRequest, approve_submission, list_pending, submit_price
from priceboard.intake.variants import VariantRequest, add_variant, list_brands
from priceboard.logic.board import BoardRow

load_dotenv()

logger = logging.getLogger(__name__)

app = FastAPI(title="Price Board API")


class StoreOut(BaseModel):
    id: int
    name: str
    sort_order: int


class BrandOut(BaseModel):
    id: int
    name: str


class CellOut(BaseModel):
    store_id: int
    price: Decimal | None = None
    is_sale: bool = False
    is_cheapest: bool = False
    age_days: int | None = None
    created_at: datetime | None = None


class RowOut(BaseModel):
    variant_id: int
    label: str
    cheapest_store_id: int | None
    save_pct: float | None
    cells: list[CellOut]


class BoardResponse(BaseModel):
    mode: Mode
    stores: list[StoreOut]
    rows: list[RowOut]


class SubmissionIn(BaseModel):
    store_id: int | None = None
    variant_id: int | None = None
    price: str
    price_type: PriceType = PriceType.REGULAR
    sale_end_date: date | None = None


class VariantIn(BaseModel):
    product_name: str
    brand_id: int | None = None
    new_brand_name: str = ""
    size_value: str = ""
    size_unit: str = "L"
    flavour: str = ""
    notes: str = ""


class CreatedResponse(BaseModel):
    id: int
    message: str


class PendingOut(BaseModel):
    id: int
    created_at: datetime
    price_cents: int
    price_type: PriceType
    store_name: str
    product_label: str


def get_engine() -> Engine:
    return create_engine_from_env()


def _row_out(row: BoardRow) -> RowOut:
    return RowOut(
        variant_id=row.variant.id,
        label=row.label,
        cheapest_store_id=row.cheapest_store_id,
        save_pct=row.save_pct,
        cells=[
            CellOut(
                store_id=cell.store.id,
                price=cell.display.price if cell.display else None,
                is_sale=cell.display.is_sale if cell.display else False,
                is_cheapest=cell.is_cheapest,
                age_days=cell.age_days,
                created_at=cell.display.created_at if cell.display else None,
            )
            for cell in row.cells
        ],
    )


@app.get("/board", response_model=BoardResponse)
async def board(
    mode: Mode = Query(Mode.BEST),
    q: str | None = None,
    only_with_prices: bool = True,
    as_of: datetime | None = Query(
        None,
        description="Reference time; without a UTC offset it is read as local time in TIMEZONE.",
    ),
    engine: Engine = Depends(get_engine),
) -> BoardResponse:
    aggregator = load_aggregator(engine)
    rows = aggregator.board(mode, q, only_with_prices=only_with_prices, as_of=as_of)
    return BoardResponse(
        mode=mode,
        stores=[StoreOut(id=s.id, name=s.name, sort_order=s.sort_order) for s in aggregator.stores],
        rows=[_row_out(row) for row in rows],
    )


@app.get("/stores", response_model=list[StoreOut])
async def stores(engine: Engine = Depends(get_engine)) -> list[StoreOut]:
    return [StoreOut(id=s.id, name=s.name, sort_order=s.sort_order) for s in load_stores(engine)]


@app.get("/brands", response_model=list[BrandOut])
async def brands(engine: Engine = Depends(get_engine)) -> list[BrandOut]:
    return [BrandOut(id=b.id, name=b.name) for b in list_brands(engine)]


@app.post("/submissions", response_model=CreatedResponse, status_code=201)
async def create_submission(payload: SubmissionIn, engine: Engine = Depends(get_engine)) -> CreatedResponse:
    request = PriceRequest(
        store_id=payload.store_id,
        variant_id=payload.variant_id,
        price=payload.price,
        price_type=payload.price_type,
        sale_end_date=payload.sale_end_date,
    )
    try:
        submission_id = submit_price(engine, request)
    except IntakeError as exc:
        logger.warning("Rejected submission: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return CreatedResponse(
        id=submission_id,
        message="Saved! If it doesn't appear right away, it may be pending approval.",
    )


@app.post("/variants", response_model=CreatedResponse, status_code=201)
async def create_variant(payload: VariantIn, engine: Engine = Depends(get_engine)) -> CreatedResponse:
    try:
        variant_id = add_variant(engine, VariantRequest(**payload.model_dump()))
    except IntakeError as exc:
        logger.warning("Rejected variant: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return CreatedResponse(id=variant_id, message=f"Saved! Variant created (id: {variant_id}).")


@app.get("/moderation/pending", response_model=list[PendingOut])
async def pending(engine: Engine = Depends(get_engine)) -> list[PendingOut]:
    return [
        PendingOut(
            id=item.id,
            created_at=item.created_at,
            price_cents=item.price_cents,
            price_type=item.price_type,
            store_name=item.store_name,
            product_label=item.product_label,
        )
        for item in list_pending(engine)
    ]


@app.post("/moderation/{submission_id}/approve")
async def approve(submission_id: int, engine: Engine = Depends(get_engine)) -> dict[str, str]:
    try:
        approve_submission(engine, submission_id)
    except SubmissionNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"status": "approved"}

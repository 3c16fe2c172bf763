"""sg_stock REST API — stock reference data and price updates."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.sg_common.database import get_db_session
from src.sg_common.response import ApiResponse, success_response
from src.sg_stock.application.schemas import CreateStockRequest, UpdateStockRequest
from src.sg_stock.application.service import StockApplicationService

router = APIRouter(prefix="/stocks", tags=["stocks"])

_service = StockApplicationService()


@router.get("")
async def list_stocks(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    items = await _service.list_stocks(db)
    return success_response([i.model_dump() for i in items], request)


@router.get("/{ticker}")
async def get_stock(
    ticker: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_stock(db, ticker)
    return success_response(data.model_dump(), request)


@router.post("", status_code=201)
async def create_stock(
    body: CreateStockRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_stock(db, body)
    return success_response(data.model_dump(), request)


@router.patch("/{ticker}")
async def update_stock(
    ticker: str,
    body: UpdateStockRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.update_stock(db, ticker, body)
    return success_response(data.model_dump(), request)


@router.delete("/{ticker}")
async def delete_stock(
    ticker: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    await _service.delete_stock(db, ticker)
    return success_response({"ticker": ticker, "deleted": True}, request)

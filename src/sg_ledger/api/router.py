"""sg_ledger REST API — the four state-changing operations.

The ledger manages its own session per operation, so these handlers take no
database dependency.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.sg_common.database import async_session_factory
from src.sg_common.response import ApiResponse, success_response
from src.sg_ledger.application.schemas import (
    BuyRequest,
    EntityWireRequest,
    SellRequest,
    WireRequest,
)
from src.sg_ledger.application.service import LedgerService
from src.sg_transaction.application.schemas import TransactionItem

router = APIRouter(prefix="/ledger", tags=["ledger"])

_service = LedgerService(async_session_factory)


def get_ledger_service() -> LedgerService:
    return _service


@router.post("/buy")
async def buy(
    body: BuyRequest,
    ledger: Annotated[LedgerService, Depends(get_ledger_service)],
    request: Request,
) -> ApiResponse:
    record = await ledger.buy(body.uid, body.ticker, body.quantity, body.use_credit)
    return success_response(TransactionItem.from_record(record).model_dump(), request)


@router.post("/sell")
async def sell(
    body: SellRequest,
    ledger: Annotated[LedgerService, Depends(get_ledger_service)],
    request: Request,
) -> ApiResponse:
    record = await ledger.sell(body.uid, body.ticker, body.quantity)
    return success_response(TransactionItem.from_record(record).model_dump(), request)


@router.post("/wire")
async def wire_to_user(
    body: WireRequest,
    ledger: Annotated[LedgerService, Depends(get_ledger_service)],
    request: Request,
) -> ApiResponse:
    record = await ledger.wire_to_user(body.from_uid, body.dest_uid, body.amount_cents)
    return success_response(TransactionItem.from_record(record).model_dump(), request)


@router.post("/wire-entity")
async def wire_to_entity(
    body: EntityWireRequest,
    ledger: Annotated[LedgerService, Depends(get_ledger_service)],
    request: Request,
) -> ApiResponse:
    record = await ledger.wire_to_entity(body.from_uid, body.destination, body.amount_cents)
    return success_response(TransactionItem.from_record(record).model_dump(), request)

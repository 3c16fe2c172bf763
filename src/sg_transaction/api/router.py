"""sg_transaction REST API — read-only history, newest first."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.sg_common.database import get_db_session
from src.sg_common.response import ApiResponse, success_response
from src.sg_transaction.application.service import TransactionApplicationService

router = APIRouter(prefix="/users", tags=["transactions"])

_service = TransactionApplicationService()


@router.get("/{uid}/transactions")
async def list_transactions(
    uid: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
) -> ApiResponse:
    data = await _service.list_transactions(db, uid, cursor, limit)
    return success_response(data.model_dump(), request)

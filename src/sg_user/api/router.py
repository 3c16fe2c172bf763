"""sg_user REST API — profile creation, portfolio view, administrative delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.sg_common.database import get_db_session
from src.sg_common.response import ApiResponse, success_response
from src.sg_user.application.schemas import CreateUserRequest
from src.sg_user.application.service import UserApplicationService

router = APIRouter(prefix="/users", tags=["users"])

_service = UserApplicationService()


@router.post("", status_code=201)
async def create_user(
    body: CreateUserRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_user(db, body.uid)
    return success_response(data.model_dump(), request)


@router.get("/{uid}/portfolio")
async def get_portfolio(
    uid: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_portfolio(db, uid)
    return success_response(data.model_dump(), request)


@router.delete("/{uid}")
async def delete_user(
    uid: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    await _service.delete_user(db, uid)
    return success_response({"uid": uid, "deleted": True}, request)

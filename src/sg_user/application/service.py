"""UserApplicationService — profile lifecycle outside the ledger.

Creating a profile and the administrative delete are single-statement writes;
they commit here. Balance, credit and holding changes go through LedgerService.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.sg_common.errors import UserNotFoundError
from src.sg_user.application.schemas import PortfolioResponse, UserResponse
from src.sg_user.domain.models import User
from src.sg_user.domain.repository import UserRepositoryProtocol
from src.sg_user.infrastructure.persistence import UserRepository

logger = logging.getLogger(__name__)


class UserApplicationService:
    def __init__(self, repo: UserRepositoryProtocol | None = None) -> None:
        self._repo: UserRepositoryProtocol = repo or UserRepository()

    async def create_user(self, db: AsyncSession, uid: str) -> UserResponse:
        user = User(
            uid=uid,
            balance=settings.STARTING_BALANCE_CENTS,
            credit_limit=settings.DEFAULT_CREDIT_LIMIT_CENTS,
        )
        try:
            created = await self._repo.create(db, user)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("User created: uid=%s balance=%d", uid, created.balance)
        return UserResponse.from_user(created)

    async def get_portfolio(self, db: AsyncSession, uid: str) -> PortfolioResponse:
        portfolio = await self._repo.get_portfolio(db, uid)
        if portfolio is None:
            raise UserNotFoundError(uid)
        return PortfolioResponse.from_portfolio(portfolio)

    async def delete_user(self, db: AsyncSession, uid: str) -> None:
        try:
            await self._repo.delete(db, uid)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.warning("User deleted: uid=%s", uid)

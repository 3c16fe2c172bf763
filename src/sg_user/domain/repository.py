"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.sg_user.domain.models import Holding, User, UserPortfolio, UserUpdate


class UserRepositoryProtocol(Protocol):
    async def create(self, db: AsyncSession, user: User) -> User: ...

    async def get(
        self, db: AsyncSession, uid: str, for_update: bool = False
    ) -> User | None: ...

    async def update(self, db: AsyncSession, uid: str, fields: UserUpdate) -> None: ...

    async def delete(self, db: AsyncSession, uid: str) -> None: ...

    async def get_portfolio(self, db: AsyncSession, uid: str) -> UserPortfolio | None: ...

    async def create_holding(self, db: AsyncSession, holding: Holding) -> Holding: ...

    async def get_latest_holding(
        self, db: AsyncSession, uid: str, ticker: str
    ) -> Holding | None: ...

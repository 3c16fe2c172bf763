"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.sg_stock.domain.models import Stock, StockUpdate


class StockRepositoryProtocol(Protocol):
    async def create(self, db: AsyncSession, stock: Stock) -> Stock: ...

    async def get(self, db: AsyncSession, ticker: str) -> Stock | None: ...

    async def update(self, db: AsyncSession, ticker: str, fields: StockUpdate) -> None: ...

    async def delete(self, db: AsyncSession, ticker: str) -> None: ...

    async def list_all(self, db: AsyncSession) -> list[Stock]: ...

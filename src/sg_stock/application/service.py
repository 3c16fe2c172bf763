"""StockApplicationService — reference-data access for the command layer
and the external price-update job."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.sg_common.errors import StockNotFoundError
from src.sg_stock.application.schemas import (
    CreateStockRequest,
    StockItem,
    UpdateStockRequest,
)
from src.sg_stock.domain.models import Stock, StockUpdate
from src.sg_stock.domain.repository import StockRepositoryProtocol
from src.sg_stock.infrastructure.persistence import StockRepository


class StockApplicationService:
    def __init__(self, repo: StockRepositoryProtocol | None = None) -> None:
        self._repo: StockRepositoryProtocol = repo or StockRepository()

    async def list_stocks(self, db: AsyncSession) -> list[StockItem]:
        return [StockItem.from_stock(s) for s in await self._repo.list_all(db)]

    async def get_stock(self, db: AsyncSession, ticker: str) -> StockItem:
        stock = await self._repo.get(db, ticker)
        if stock is None:
            raise StockNotFoundError(ticker)
        return StockItem.from_stock(stock)

    async def create_stock(self, db: AsyncSession, req: CreateStockRequest) -> StockItem:
        stock = Stock(
            ticker=req.ticker,
            name=req.name,
            price=req.price_cents,
            description=req.description,
        )
        try:
            created = await self._repo.create(db, stock)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return StockItem.from_stock(created)

    async def update_stock(
        self, db: AsyncSession, ticker: str, req: UpdateStockRequest
    ) -> StockItem:
        fields = StockUpdate(name=req.name, price=req.price_cents, description=req.description)
        try:
            # Repository update is a silent no-op on a missing row; surface it as 404.
            if await self._repo.get(db, ticker) is None:
                raise StockNotFoundError(ticker)
            await self._repo.update(db, ticker, fields)
            updated = await self._repo.get(db, ticker)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        if updated is None:
            raise StockNotFoundError(ticker)
        return StockItem.from_stock(updated)

    async def delete_stock(self, db: AsyncSession, ticker: str) -> None:
        try:
            await self._repo.delete(db, ticker)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

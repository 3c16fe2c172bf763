"""StockRepository — keyed CRUD over the `stocks` reference table.

Prices are written by the external price-update job through `update` and read
by the ledger at trade time.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.sg_common.errors import DuplicateStockError, EmptyUpdateError
from src.sg_stock.domain.models import Stock, StockUpdate

_INSERT_STOCK_SQL = text("""
    INSERT INTO stocks (ticker, name, price, description)
    VALUES (:ticker, :name, :price, :description)
    ON CONFLICT (ticker) DO NOTHING
    RETURNING ticker, name, price, description, created_at
""")

_GET_STOCK_SQL = text("""
    SELECT ticker, name, price, description, created_at
    FROM stocks
    WHERE ticker = :ticker
""")

_LIST_STOCKS_SQL = text("""
    SELECT ticker, name, price, description, created_at
    FROM stocks
    ORDER BY ticker
""")

_DELETE_STOCK_SQL = text("DELETE FROM stocks WHERE ticker = :ticker")


def _row_to_stock(row: object) -> Stock:
    return Stock(
        ticker=row.ticker,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        price=row.price,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class StockRepository:
    async def create(self, db: AsyncSession, stock: Stock) -> Stock:
        result = await db.execute(
            _INSERT_STOCK_SQL,
            {
                "ticker": stock.ticker,
                "name": stock.name,
                "price": stock.price,
                "description": stock.description,
            },
        )
        row = result.fetchone()
        if row is None:
            raise DuplicateStockError(stock.ticker)
        return _row_to_stock(row)

    async def get(self, db: AsyncSession, ticker: str) -> Stock | None:
        result = await db.execute(_GET_STOCK_SQL, {"ticker": ticker})
        row = result.fetchone()
        return _row_to_stock(row) if row else None

    async def update(self, db: AsyncSession, ticker: str, fields: StockUpdate) -> None:
        params = fields.as_params()
        if not params:
            raise EmptyUpdateError()
        assignments = ", ".join(f"{name} = :{name}" for name in params)
        await db.execute(
            text(f"UPDATE stocks SET {assignments} WHERE ticker = :ticker"),
            {**params, "ticker": ticker},
        )

    async def delete(self, db: AsyncSession, ticker: str) -> None:
        await db.execute(_DELETE_STOCK_SQL, {"ticker": ticker})

    async def list_all(self, db: AsyncSession) -> list[Stock]:
        result = await db.execute(_LIST_STOCKS_SQL)
        return [_row_to_stock(row) for row in result.fetchall()]

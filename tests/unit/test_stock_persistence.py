"""Unit tests for StockRepository using MagicMock AsyncSession."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.sg_common.errors import DuplicateStockError, EmptyUpdateError
from src.sg_stock.domain.models import Stock, StockUpdate
from src.sg_stock.infrastructure.persistence import StockRepository


def _make_stock_row(ticker="XYZ", price=100):
    row = MagicMock()
    row.ticker = ticker
    row.name = f"{ticker} Corp"
    row.price = price
    row.description = None
    row.created_at = datetime.now(UTC)
    return row


@pytest.fixture
def db():
    return MagicMock()


def _returning(db, *, one=None, many=None):
    result_mock = MagicMock()
    result_mock.fetchone.return_value = one
    result_mock.fetchall.return_value = many or []
    db.execute = AsyncMock(return_value=result_mock)


class TestCreate:
    async def test_returns_stock(self, db):
        _returning(db, one=_make_stock_row("XYZ", 2500))

        stock = await StockRepository().create(db, Stock(ticker="XYZ", name="XYZ Corp", price=2500))

        assert stock.ticker == "XYZ"
        assert stock.price == 2500

    async def test_duplicate_ticker(self, db):
        _returning(db, one=None)

        with pytest.raises(DuplicateStockError) as exc_info:
            await StockRepository().create(db, Stock(ticker="XYZ", name="XYZ Corp", price=1))

        assert exc_info.value.ticker == "XYZ"


class TestGet:
    async def test_found(self, db):
        _returning(db, one=_make_stock_row("ABC", 42))
        stock = await StockRepository().get(db, "ABC")
        assert stock is not None
        assert stock.price == 42

    async def test_not_found(self, db):
        _returning(db, one=None)
        assert await StockRepository().get(db, "NOPE") is None


class TestUpdate:
    async def test_price_only(self, db):
        _returning(db)

        await StockRepository().update(db, "XYZ", StockUpdate(price=150))

        sql, params = db.execute.await_args.args
        assert "UPDATE stocks SET price = :price WHERE ticker = :ticker" in str(sql)
        assert params == {"price": 150, "ticker": "XYZ"}

    async def test_empty_update_rejected(self, db):
        _returning(db)

        with pytest.raises(EmptyUpdateError):
            await StockRepository().update(db, "XYZ", StockUpdate())

        db.execute.assert_not_awaited()


class TestListAndDelete:
    async def test_list_all(self, db):
        _returning(db, many=[_make_stock_row("AAA"), _make_stock_row("BBB")])
        stocks = await StockRepository().list_all(db)
        assert [s.ticker for s in stocks] == ["AAA", "BBB"]

    async def test_list_all_empty(self, db):
        _returning(db, many=[])
        assert await StockRepository().list_all(db) == []

    async def test_delete(self, db):
        _returning(db)
        await StockRepository().delete(db, "XYZ")
        assert db.execute.await_args.args[1] == {"ticker": "XYZ"}

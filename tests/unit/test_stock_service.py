"""Unit tests for StockApplicationService using a mock repository."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.sg_common.errors import DuplicateStockError, StockNotFoundError
from src.sg_stock.application.schemas import CreateStockRequest, UpdateStockRequest
from src.sg_stock.application.service import StockApplicationService
from src.sg_stock.domain.models import Stock, StockUpdate


def _stock(ticker: str = "XYZ", price: int = 100) -> Stock:
    return Stock(ticker=ticker, name=f"{ticker} Corp", price=price)


def _db() -> MagicMock:
    db = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    return db


class TestRead:
    async def test_list(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.list_all.return_value = [_stock("AAA"), _stock("BBB")]
        svc = StockApplicationService(repo=mock_repo)

        items = await svc.list_stocks(MagicMock())

        assert [i.ticker for i in items] == ["AAA", "BBB"]

    async def test_get_missing(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get.return_value = None
        svc = StockApplicationService(repo=mock_repo)

        with pytest.raises(StockNotFoundError):
            await svc.get_stock(MagicMock(), "XYZ")


class TestCreate:
    async def test_creates_and_commits(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.create.side_effect = lambda db, stock: stock
        svc = StockApplicationService(repo=mock_repo)
        db = _db()

        item = await svc.create_stock(
            db, CreateStockRequest(ticker="XYZ", name="Xyz Corp", price_cents=1250)
        )

        assert item.price_cents == 1250
        db.commit.assert_awaited_once()

    async def test_duplicate_rolls_back(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.create.side_effect = DuplicateStockError("XYZ")
        svc = StockApplicationService(repo=mock_repo)
        db = _db()

        with pytest.raises(DuplicateStockError):
            await svc.create_stock(
                db, CreateStockRequest(ticker="XYZ", name="Xyz Corp", price_cents=1)
            )

        db.rollback.assert_awaited_once()


class TestUpdate:
    async def test_price_update(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get.side_effect = [_stock(price=100), _stock(price=140)]
        svc = StockApplicationService(repo=mock_repo)
        db = _db()

        item = await svc.update_stock(db, "XYZ", UpdateStockRequest(price_cents=140))

        assert item.price_cents == 140
        mock_repo.update.assert_awaited_once_with(db, "XYZ", StockUpdate(price=140))
        db.commit.assert_awaited_once()

    async def test_missing_stock_is_404(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get.return_value = None
        svc = StockApplicationService(repo=mock_repo)
        db = _db()

        with pytest.raises(StockNotFoundError):
            await svc.update_stock(db, "XYZ", UpdateStockRequest(price_cents=140))

        mock_repo.update.assert_not_awaited()
        db.rollback.assert_awaited_once()

"""Unit tests for the append-only TransactionLogRepository."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.sg_common.enums import TransactionType
from src.sg_common.errors import InternalError
from src.sg_transaction.domain.models import StockTransaction, WireTransaction
from src.sg_transaction.infrastructure.persistence import TransactionLogRepository

NOW = datetime(2026, 10, 19, 15, 30, tzinfo=UTC)


def _buy() -> StockTransaction:
    return StockTransaction(
        type=TransactionType.BUY,
        uid="A",
        ticker="XYZ",
        balance_change=-100,
        credit_change=100,
        quantity=2,
        price=100,
        total_price=200,
        timestamp=NOW,
    )


def _wire() -> WireTransaction:
    return WireTransaction(
        uid="A",
        balance_change=-50,
        destination="B",
        is_destination_user=True,
        timestamp=NOW,
    )


def _db_with_id(new_id):
    db = MagicMock()
    result_mock = MagicMock()
    result_mock.fetchone.return_value = MagicMock(id=new_id) if new_id else None
    db.execute = AsyncMock(return_value=result_mock)
    return db


class TestAppend:
    async def test_stock_record_params(self):
        db = _db_with_id(41)

        stored = await TransactionLogRepository().append(db, _buy())

        assert stored.id == 41
        sql, params = db.execute.await_args.args
        assert "INSERT INTO transactions" in str(sql)
        assert params["type"] == "buy"
        assert params["credit_change"] == 100
        assert params["total_price"] == 200
        assert params["destination"] is None
        assert params["is_destination_user"] is None

    async def test_wire_record_params(self):
        db = _db_with_id(42)

        stored = await TransactionLogRepository().append(db, _wire())

        assert stored.id == 42
        _, params = db.execute.await_args.args
        assert params["type"] == "wire"
        assert params["destination"] == "B"
        assert params["is_destination_user"] is True
        assert params["ticker"] is None
        assert params["quantity"] is None

    async def test_input_record_is_untouched(self):
        record = _buy()
        await TransactionLogRepository().append(_db_with_id(7), record)
        assert record.id is None

    async def test_missing_returning_row(self):
        with pytest.raises(InternalError):
            await TransactionLogRepository().append(_db_with_id(None), _buy())

    def test_no_mutating_methods(self):
        repo = TransactionLogRepository()
        assert not hasattr(repo, "update")
        assert not hasattr(repo, "delete")


def _row(**kwargs):
    row = MagicMock()
    row.id = kwargs.get("id", 1)
    row.type = kwargs.get("type", "buy")
    row.uid = "A"
    row.balance_change = kwargs.get("balance_change", -200)
    row.timestamp = NOW
    row.ticker = kwargs.get("ticker", "XYZ")
    row.credit_change = kwargs.get("credit_change", 0)
    row.quantity = kwargs.get("quantity", 2)
    row.price = kwargs.get("price", 100)
    row.total_price = kwargs.get("total_price", 200)
    row.destination = kwargs.get("destination")
    row.is_destination_user = kwargs.get("is_destination_user")
    return row


class TestListForUser:
    async def test_maps_both_shapes(self):
        db = MagicMock()
        result_mock = MagicMock()
        result_mock.fetchall.return_value = [
            _row(id=2, type="wire", ticker=None, balance_change=-10,
                 destination="shop", is_destination_user=False),
            _row(id=1, type="sell", balance_change=200),
        ]
        db.execute = AsyncMock(return_value=result_mock)

        records = await TransactionLogRepository().list_for_user(db, "A", None, 20)

        assert isinstance(records[0], WireTransaction)
        assert records[0].is_destination_user is False
        assert isinstance(records[1], StockTransaction)
        assert records[1].type is TransactionType.SELL
        assert db.execute.await_args.args[1] == {"uid": "A", "cursor_id": None, "limit": 20}

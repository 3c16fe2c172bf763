"""Unit tests for TransactionApplicationService pagination."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.sg_common.errors import UserNotFoundError
from src.sg_transaction.application.schemas import cursor_decode, cursor_encode
from src.sg_transaction.application.service import TransactionApplicationService
from src.sg_transaction.domain.models import WireTransaction
from src.sg_user.domain.models import User


def _wire(record_id: int) -> WireTransaction:
    return WireTransaction(
        uid="A",
        balance_change=-100,
        destination="B",
        is_destination_user=True,
        timestamp=datetime.now(UTC),
        id=record_id,
    )


def _service(records: list[WireTransaction], user: User | None = None):
    repo = AsyncMock()
    repo.list_for_user.return_value = records
    users = AsyncMock()
    users.get.return_value = user if user is not None else User(uid="A", balance=0)
    return TransactionApplicationService(repo=repo, users=users), repo


class TestListTransactions:
    async def test_has_more(self) -> None:
        svc, repo = _service([_wire(9), _wire(8), _wire(7)])
        db = MagicMock()

        result = await svc.list_transactions(db, "A", None, limit=2)

        assert [i.id for i in result.items] == [9, 8]
        assert result.has_more is True
        assert cursor_decode(result.next_cursor) == 8
        repo.list_for_user.assert_awaited_once_with(db, "A", None, 3)

    async def test_last_page(self) -> None:
        svc, repo = _service([_wire(3)])

        result = await svc.list_transactions(MagicMock(), "A", cursor_encode(4), limit=2)

        assert result.has_more is False
        assert result.next_cursor is None
        assert repo.list_for_user.await_args.args[2] == 4

    async def test_unknown_user(self) -> None:
        svc, repo = _service([])
        svc._users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await svc.list_transactions(MagicMock(), "missing", None, limit=20)

        repo.list_for_user.assert_not_awaited()

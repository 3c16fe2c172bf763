"""Read-only access to a user's transaction history."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.sg_common.errors import UserNotFoundError
from src.sg_transaction.application.schemas import (
    TransactionItem,
    TransactionListResponse,
    cursor_decode,
    cursor_encode,
)
from src.sg_transaction.domain.repository import TransactionLogRepositoryProtocol
from src.sg_transaction.infrastructure.persistence import TransactionLogRepository
from src.sg_user.domain.repository import UserRepositoryProtocol
from src.sg_user.infrastructure.persistence import UserRepository


class TransactionApplicationService:
    def __init__(
        self,
        repo: TransactionLogRepositoryProtocol | None = None,
        users: UserRepositoryProtocol | None = None,
    ) -> None:
        self._repo: TransactionLogRepositoryProtocol = repo or TransactionLogRepository()
        self._users: UserRepositoryProtocol = users or UserRepository()

    async def list_transactions(
        self,
        db: AsyncSession,
        uid: str,
        cursor: str | None,
        limit: int,
    ) -> TransactionListResponse:
        if await self._users.get(db, uid) is None:
            raise UserNotFoundError(uid)

        cursor_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        records = await self._repo.list_for_user(db, uid, cursor_id, limit + 1)
        has_more = len(records) > limit
        page = records[:limit]

        next_cursor = cursor_encode(page[-1].id) if has_more and page and page[-1].id else None
        return TransactionListResponse(
            items=[TransactionItem.from_record(r) for r in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )

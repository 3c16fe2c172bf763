"""Repository Protocol for the append-only transaction log.

The log is write-once: no update or delete exists on it.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.sg_transaction.domain.models import TransactionRecord


class TransactionLogRepositoryProtocol(Protocol):
    async def append(
        self, db: AsyncSession, record: TransactionRecord
    ) -> TransactionRecord: ...

    async def list_for_user(
        self,
        db: AsyncSession,
        uid: str,
        cursor_id: int | None,
        limit: int,
    ) -> list[TransactionRecord]: ...

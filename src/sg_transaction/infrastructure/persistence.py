"""TransactionLogRepository — append-only writer over `transactions`.

Stock and wire records share one table; columns that do not apply to a
record's shape are NULL. Nothing in this module issues UPDATE or DELETE.
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.
"""

from dataclasses import replace

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.sg_common.enums import TransactionType
from src.sg_common.errors import InternalError
from src.sg_transaction.domain.models import (
    StockTransaction,
    TransactionRecord,
    WireTransaction,
)

_INSERT_TRANSACTION_SQL = text("""
    INSERT INTO transactions
        (type, uid, balance_change, timestamp,
         ticker, credit_change, quantity, price, total_price,
         destination, is_destination_user)
    VALUES
        (:type, :uid, :balance_change, :timestamp,
         :ticker, :credit_change, :quantity, :price, :total_price,
         :destination, :is_destination_user)
    RETURNING id
""")

_LIST_TRANSACTIONS_SQL = text("""
    SELECT id, type, uid, balance_change, timestamp,
           ticker, credit_change, quantity, price, total_price,
           destination, is_destination_user
    FROM transactions
    WHERE uid = :uid
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < CAST(:cursor_id AS BIGINT))
    ORDER BY id DESC
    LIMIT :limit
""")


def _record_to_params(record: TransactionRecord) -> dict[str, object]:
    params: dict[str, object] = {
        "type": record.type.value,
        "uid": record.uid,
        "balance_change": record.balance_change,
        "timestamp": record.timestamp,
        "ticker": None,
        "credit_change": None,
        "quantity": None,
        "price": None,
        "total_price": None,
        "destination": None,
        "is_destination_user": None,
    }
    if isinstance(record, StockTransaction):
        params.update(
            ticker=record.ticker,
            credit_change=record.credit_change,
            quantity=record.quantity,
            price=record.price,
            total_price=record.total_price,
        )
    else:
        params.update(
            destination=record.destination,
            is_destination_user=record.is_destination_user,
        )
    return params


def _row_to_record(row: object) -> TransactionRecord:
    tx_type = TransactionType(row.type)  # type: ignore[attr-defined]
    if tx_type is TransactionType.WIRE:
        return WireTransaction(
            id=row.id,  # type: ignore[attr-defined]
            uid=row.uid,  # type: ignore[attr-defined]
            balance_change=row.balance_change,  # type: ignore[attr-defined]
            destination=row.destination,  # type: ignore[attr-defined]
            is_destination_user=row.is_destination_user,  # type: ignore[attr-defined]
            timestamp=row.timestamp,  # type: ignore[attr-defined]
        )
    return StockTransaction(
        id=row.id,  # type: ignore[attr-defined]
        type=tx_type,
        uid=row.uid,  # type: ignore[attr-defined]
        ticker=row.ticker,  # type: ignore[attr-defined]
        balance_change=row.balance_change,  # type: ignore[attr-defined]
        credit_change=row.credit_change,  # type: ignore[attr-defined]
        quantity=row.quantity,  # type: ignore[attr-defined]
        price=row.price,  # type: ignore[attr-defined]
        total_price=row.total_price,  # type: ignore[attr-defined]
        timestamp=row.timestamp,  # type: ignore[attr-defined]
    )


class TransactionLogRepository:
    async def append(
        self, db: AsyncSession, record: TransactionRecord
    ) -> TransactionRecord:
        result = await db.execute(_INSERT_TRANSACTION_SQL, _record_to_params(record))
        row = result.fetchone()
        if row is None:
            raise InternalError("Transaction insert returned no rows — this should never happen")
        return replace(record, id=row.id)

    async def list_for_user(
        self,
        db: AsyncSession,
        uid: str,
        cursor_id: int | None,
        limit: int,
    ) -> list[TransactionRecord]:
        result = await db.execute(
            _LIST_TRANSACTIONS_SQL,
            {"uid": uid, "cursor_id": cursor_id, "limit": limit},
        )
        return [_row_to_record(row) for row in result.fetchall()]

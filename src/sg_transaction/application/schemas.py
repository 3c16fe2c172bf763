"""Pydantic schemas and cursor utilities for transaction history."""

import base64
import json

from pydantic import BaseModel

from src.sg_transaction.domain.models import StockTransaction, TransactionRecord

# ---------------------------------------------------------------------------
# Cursor-based pagination utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_id: int) -> str:
    """Encode a BIGINT primary key into an opaque Base64 cursor string."""
    payload = json.dumps({"id": last_id})
    return base64.b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Decode a cursor string back to the last seen id. Returns None on error."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.b64decode(cursor.encode()).decode())
        return int(payload["id"])
    except (ValueError, KeyError, TypeError):
        return None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class TransactionItem(BaseModel):
    id: int | None
    type: str
    uid: str
    balance_change_cents: int
    timestamp: str  # ISO8601 string
    # buy / sell
    ticker: str | None = None
    credit_change_cents: int | None = None
    quantity: int | None = None
    price_cents: int | None = None
    total_price_cents: int | None = None
    # wire
    destination: str | None = None
    is_destination_user: bool | None = None

    @classmethod
    def from_record(cls, record: TransactionRecord) -> "TransactionItem":
        item = cls(
            id=record.id,
            type=record.type.value,
            uid=record.uid,
            balance_change_cents=record.balance_change,
            timestamp=record.timestamp.isoformat(),
        )
        if isinstance(record, StockTransaction):
            item.ticker = record.ticker
            item.credit_change_cents = record.credit_change
            item.quantity = record.quantity
            item.price_cents = record.price
            item.total_price_cents = record.total_price
        else:
            item.destination = record.destination
            item.is_destination_user = record.is_destination_user
        return item


class TransactionListResponse(BaseModel):
    items: list[TransactionItem]
    next_cursor: str | None
    has_more: bool

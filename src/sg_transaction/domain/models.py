"""Transaction records — immutable once appended to the log."""

from dataclasses import dataclass
from datetime import datetime

from src.sg_common.enums import TransactionType


@dataclass(frozen=True)
class StockTransaction:
    type: TransactionType            # BUY or SELL
    uid: str
    ticker: str
    balance_change: int              # cents, negative on buy
    credit_change: int               # cents drawn against credit, 0 on sell
    quantity: int
    price: int                       # cents per share at trade time
    total_price: int                 # cents, price * quantity
    timestamp: datetime
    id: int | None = None            # BIGSERIAL, assigned on append


@dataclass(frozen=True)
class WireTransaction:
    uid: str                         # source user
    balance_change: int              # cents, always negative
    destination: str                 # user uid or opaque external identifier
    is_destination_user: bool
    timestamp: datetime
    type: TransactionType = TransactionType.WIRE
    id: int | None = None


TransactionRecord = StockTransaction | WireTransaction

"""Domain models for sg_user — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field, fields
from datetime import datetime


@dataclass
class User:
    uid: str                 # Discord user snowflake
    balance: int             # cents
    credit_limit: int = 0    # cents
    loan_balance: int = 0    # cents currently drawn against credit_limit
    created_at: datetime | None = None

    @property
    def available_credit(self) -> int:
        return max(self.credit_limit - self.loan_balance, 0)


@dataclass
class UserUpdate:
    """Sparse update: a field left as None is not written."""

    balance: int | None = None
    credit_limit: int | None = None
    loan_balance: int | None = None

    def as_params(self) -> dict[str, int]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass
class Holding:
    """One immutable position snapshot. The latest timestamp wins."""

    uid: str
    ticker: str
    quantity: int
    timestamp: datetime
    id: int | None = None    # BIGSERIAL, tie-break for equal timestamps


@dataclass
class HeldStock:
    ticker: str
    quantity: int
    timestamp: datetime
    name: str | None = None
    price: int | None = None  # None when the stock row no longer exists

    @property
    def value(self) -> int:
        return (self.price or 0) * self.quantity


@dataclass
class UserPortfolio:
    user: User
    holdings: list[HeldStock] = field(default_factory=list)

    @property
    def net_worth(self) -> int:
        return self.user.balance + sum(h.value for h in self.holdings)

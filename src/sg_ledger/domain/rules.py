"""Pure trade and wire rules — no I/O, no SQLAlchemy.

Each plan_* function validates a request against a snapshot of state and
returns the deltas the ledger must persist, or raises a typed AppError.
"""

from dataclasses import dataclass

from src.sg_common.errors import (
    InsufficientBalanceError,
    InsufficientStockQuantityError,
    InvalidAmountError,
)
from src.sg_stock.domain.models import Stock
from src.sg_user.domain.models import Holding, User


@dataclass(frozen=True)
class BuyPlan:
    cost: int
    credit_amount: int
    new_quantity: int
    new_balance: int
    new_loan_balance: int

    @property
    def balance_change(self) -> int:
        return -(self.cost - self.credit_amount)


@dataclass(frozen=True)
class SellPlan:
    proceeds: int
    new_quantity: int
    new_balance: int


def require_positive(field: str, value: int) -> None:
    if value <= 0:
        raise InvalidAmountError(field, value)


def plan_buy(
    user: User,
    stock: Stock,
    holding: Holding | None,
    quantity: int,
    use_credit: bool,
) -> BuyPlan:
    """Credit covers only the shortfall, and only when it strictly suffices."""
    cost = stock.price * quantity
    credit_amount = 0
    if user.balance < cost:
        if use_credit and user.balance + user.available_credit > cost:
            credit_amount = cost - user.balance
        else:
            raise InsufficientBalanceError(user.uid, user.balance, cost)

    previous = holding.quantity if holding else 0
    return BuyPlan(
        cost=cost,
        credit_amount=credit_amount,
        new_quantity=previous + quantity,
        new_balance=user.balance + credit_amount - cost,
        new_loan_balance=user.loan_balance + credit_amount,
    )


def plan_sell(user: User, stock: Stock, holding: Holding | None, quantity: int) -> SellPlan:
    owned = holding.quantity if holding else 0
    if holding is None or quantity > owned:
        raise InsufficientStockQuantityError(user.uid, owned, quantity)

    proceeds = stock.price * quantity
    return SellPlan(
        proceeds=proceeds,
        new_quantity=owned - quantity,
        new_balance=user.balance + proceeds,
    )


def check_wire(source: User, amount: int) -> None:
    if source.balance < amount:
        raise InsufficientBalanceError(source.uid, source.balance, amount)

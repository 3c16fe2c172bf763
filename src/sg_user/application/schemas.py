"""Pydantic schemas for sg_user API."""

from pydantic import BaseModel, Field

from src.sg_common.cents import cents_to_display
from src.sg_user.domain.models import User, UserPortfolio


class CreateUserRequest(BaseModel):
    uid: str = Field(..., min_length=1, max_length=64, description="Discord user id")


class UserResponse(BaseModel):
    uid: str
    balance_cents: int
    credit_limit_cents: int
    loan_balance_cents: int

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            uid=user.uid,
            balance_cents=user.balance,
            credit_limit_cents=user.credit_limit,
            loan_balance_cents=user.loan_balance,
        )


class HeldStockItem(BaseModel):
    ticker: str
    name: str | None
    quantity: int
    price_cents: int | None
    value_cents: int


class PortfolioResponse(BaseModel):
    user: UserResponse
    holdings: list[HeldStockItem]
    net_worth_cents: int
    net_worth_display: str

    @classmethod
    def from_portfolio(cls, portfolio: UserPortfolio) -> "PortfolioResponse":
        return cls(
            user=UserResponse.from_user(portfolio.user),
            holdings=[
                HeldStockItem(
                    ticker=h.ticker,
                    name=h.name,
                    quantity=h.quantity,
                    price_cents=h.price,
                    value_cents=h.value,
                )
                for h in portfolio.holdings
            ],
            net_worth_cents=portfolio.net_worth,
            net_worth_display=cents_to_display(portfolio.net_worth),
        )

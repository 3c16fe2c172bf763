"""Request schemas for ledger operations.

Responses reuse TransactionItem: every ledger operation returns the record it appended.
"""

from pydantic import BaseModel, Field


class BuyRequest(BaseModel):
    uid: str = Field(..., min_length=1, max_length=64)
    ticker: str = Field(..., min_length=1, max_length=16)
    quantity: int = Field(..., gt=0, description="Shares to buy")
    use_credit: bool = Field(False, description="Cover a cash shortfall with available credit")


class SellRequest(BaseModel):
    uid: str = Field(..., min_length=1, max_length=64)
    ticker: str = Field(..., min_length=1, max_length=16)
    quantity: int = Field(..., gt=0, description="Shares to sell")


class WireRequest(BaseModel):
    from_uid: str = Field(..., min_length=1, max_length=64)
    dest_uid: str = Field(..., min_length=1, max_length=64)
    amount_cents: int = Field(..., gt=0)


class EntityWireRequest(BaseModel):
    from_uid: str = Field(..., min_length=1, max_length=64)
    destination: str = Field(..., min_length=1, max_length=128, description="External entity id")
    amount_cents: int = Field(..., gt=0)

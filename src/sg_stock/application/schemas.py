"""Pydantic schemas for sg_stock API."""

from pydantic import BaseModel, Field

from src.sg_stock.domain.models import Stock


class CreateStockRequest(BaseModel):
    ticker: str = Field(..., min_length=1, max_length=16)
    name: str = Field(..., min_length=1, max_length=128)
    price_cents: int = Field(..., ge=0)
    description: str | None = Field(None, max_length=1000)


class UpdateStockRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=128)
    price_cents: int | None = Field(None, ge=0)
    description: str | None = Field(None, max_length=1000)


class StockItem(BaseModel):
    ticker: str
    name: str
    price_cents: int
    description: str | None

    @classmethod
    def from_stock(cls, stock: Stock) -> "StockItem":
        return cls(
            ticker=stock.ticker,
            name=stock.name,
            price_cents=stock.price,
            description=stock.description,
        )

"""Domain models for sg_stock — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, fields
from datetime import datetime


@dataclass
class Stock:
    ticker: str
    name: str
    price: int                       # cents
    description: str | None = None
    created_at: datetime | None = None


@dataclass
class StockUpdate:
    """Sparse update: a field left as None is not written."""

    name: str | None = None
    price: int | None = None
    description: str | None = None

    def as_params(self) -> dict[str, str | int]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

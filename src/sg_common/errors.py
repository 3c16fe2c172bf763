"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: User
  2xxx: Balance / wire
  3xxx: Stock
  4xxx: Holding
  9xxx: System

Every ledger error carries the identifiers and amounts that caused it so the
command layer can render a message without re-querying.
"""

from src.sg_common.cents import cents_to_display


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: User ---

class UserNotFoundError(AppError):
    def __init__(self, uid: str) -> None:
        self.uid = uid
        super().__init__(1001, f"User not found: {uid}", 404)


class DuplicateUserError(AppError):
    def __init__(self, uid: str) -> None:
        self.uid = uid
        super().__init__(1002, f"User already exists: {uid}", 409)


# --- 2xxx: Balance / wire ---

class InsufficientBalanceError(AppError):
    def __init__(self, uid: str, balance: int, required: int) -> None:
        self.uid = uid
        self.balance = balance
        self.required = required
        super().__init__(
            2001,
            f"Insufficient balance for user {uid}: "
            f"required {cents_to_display(required)}, available {cents_to_display(balance)}",
            422,
        )


class SelfTransferError(AppError):
    def __init__(self, uid: str) -> None:
        self.uid = uid
        super().__init__(2002, f"User {uid} cannot wire money to themselves", 422)


# --- 3xxx: Stock ---

class StockNotFoundError(AppError):
    def __init__(self, ticker: str) -> None:
        self.ticker = ticker
        super().__init__(3001, f"Stock not found: {ticker}", 404)


class DuplicateStockError(AppError):
    def __init__(self, ticker: str) -> None:
        self.ticker = ticker
        super().__init__(3002, f"Stock already exists: {ticker}", 409)


# --- 4xxx: Holding ---

class InsufficientStockQuantityError(AppError):
    def __init__(self, uid: str, owned: int, requested: int) -> None:
        self.uid = uid
        self.owned = owned
        self.requested = requested
        super().__init__(
            4001,
            f"Insufficient shares for user {uid}: requested {requested}, owned {owned}",
            422,
        )


# --- 9xxx: System ---

class EmptyUpdateError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "No fields to update", 400)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class InvalidAmountError(AppError):
    def __init__(self, field: str, value: int) -> None:
        self.field = field
        self.value = value
        super().__init__(9003, f"{field} must be positive, got {value}", 422)

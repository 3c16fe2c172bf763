"""LedgerService — the only writer of balances, credit and holdings.

Every operation runs validate → compute → persist inside ONE database
transaction on ONE session:

1. Lock the involved user row(s) with SELECT ... FOR UPDATE. Two users are
   locked in sorted uid order so opposing wires cannot deadlock.
2. Read the stock and latest holding, then validate and compute via the pure
   rules in `sg_ledger.domain.rules`. Typed errors raised here roll back an
   empty transaction, so nothing is ever written for a rejected request.
3. Append the holding snapshot, update the user row(s), append exactly one
   transaction log record, commit.

Because validation reads happen under the row lock, two concurrent operations
on the same user are serialized by PostgreSQL and the second one validates
against the first one's committed state. There are no in-process locks.

Any exception (including asyncio.CancelledError from a caller's timeout)
rolls back and re-raises; the session is closed, and its connection returned
to the pool, on every exit path. Nothing is retried here.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.sg_common.datetime_utils import utc_now
from src.sg_common.enums import TransactionType
from src.sg_common.errors import (
    AppError,
    SelfTransferError,
    StockNotFoundError,
    UserNotFoundError,
)
from src.sg_ledger.domain.rules import check_wire, plan_buy, plan_sell, require_positive
from src.sg_stock.domain.repository import StockRepositoryProtocol
from src.sg_stock.infrastructure.persistence import StockRepository
from src.sg_transaction.domain.models import StockTransaction, WireTransaction
from src.sg_transaction.domain.repository import TransactionLogRepositoryProtocol
from src.sg_transaction.infrastructure.persistence import TransactionLogRepository
from src.sg_user.domain.models import Holding, User, UserUpdate
from src.sg_user.domain.repository import UserRepositoryProtocol
from src.sg_user.infrastructure.persistence import UserRepository

logger = logging.getLogger(__name__)


class LedgerService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        users: UserRepositoryProtocol | None = None,
        stocks: StockRepositoryProtocol | None = None,
        transactions: TransactionLogRepositoryProtocol | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._users: UserRepositoryProtocol = users or UserRepository()
        self._stocks: StockRepositoryProtocol = stocks or StockRepository()
        self._transactions: TransactionLogRepositoryProtocol = (
            transactions or TransactionLogRepository()
        )

    @asynccontextmanager
    async def _atomic(self, operation: str) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as db:
            try:
                yield db
                await db.commit()
            except BaseException as exc:  # CancelledError included
                await db.rollback()
                if isinstance(exc, AppError):
                    logger.info("%s rejected: %s", operation, exc.message)
                else:
                    logger.warning("%s rolled back: %s", operation, type(exc).__name__)
                raise

    async def _lock_user(self, db: AsyncSession, uid: str) -> User:
        user = await self._users.get(db, uid, for_update=True)
        if user is None:
            raise UserNotFoundError(uid)
        return user

    async def buy(
        self, uid: str, ticker: str, quantity: int, use_credit: bool = False
    ) -> StockTransaction:
        """Buy `quantity` shares at the current price, drawing credit for any shortfall
        when `use_credit` is set."""
        require_positive("quantity", quantity)
        async with self._atomic("buy") as db:
            user = await self._lock_user(db, uid)
            stock = await self._stocks.get(db, ticker)
            if stock is None:
                raise StockNotFoundError(ticker)
            holding = await self._users.get_latest_holding(db, uid, ticker)
            plan = plan_buy(user, stock, holding, quantity, use_credit)

            now = utc_now()
            await self._users.create_holding(
                db, Holding(uid=uid, ticker=ticker, quantity=plan.new_quantity, timestamp=now)
            )
            await self._users.update(
                db,
                uid,
                UserUpdate(balance=plan.new_balance, loan_balance=plan.new_loan_balance),
            )
            record = await self._transactions.append(
                db,
                StockTransaction(
                    type=TransactionType.BUY,
                    uid=uid,
                    ticker=ticker,
                    balance_change=plan.balance_change,
                    credit_change=plan.credit_amount,
                    quantity=quantity,
                    price=stock.price,
                    total_price=plan.cost,
                    timestamp=now,
                ),
            )

        logger.info(
            "Buy committed: uid=%s ticker=%s qty=%d cost=%d credit=%d tx=%s",
            uid, ticker, quantity, plan.cost, plan.credit_amount, record.id,
        )
        return record

    async def sell(self, uid: str, ticker: str, quantity: int) -> StockTransaction:
        require_positive("quantity", quantity)
        async with self._atomic("sell") as db:
            user = await self._lock_user(db, uid)
            stock = await self._stocks.get(db, ticker)
            if stock is None:
                raise StockNotFoundError(ticker)
            holding = await self._users.get_latest_holding(db, uid, ticker)
            plan = plan_sell(user, stock, holding, quantity)

            now = utc_now()
            await self._users.create_holding(
                db, Holding(uid=uid, ticker=ticker, quantity=plan.new_quantity, timestamp=now)
            )
            await self._users.update(db, uid, UserUpdate(balance=plan.new_balance))
            record = await self._transactions.append(
                db,
                StockTransaction(
                    type=TransactionType.SELL,
                    uid=uid,
                    ticker=ticker,
                    balance_change=plan.proceeds,
                    credit_change=0,
                    quantity=quantity,
                    price=stock.price,
                    total_price=plan.proceeds,
                    timestamp=now,
                ),
            )

        logger.info(
            "Sell committed: uid=%s ticker=%s qty=%d proceeds=%d tx=%s",
            uid, ticker, quantity, plan.proceeds, record.id,
        )
        return record

    async def wire_to_user(self, from_uid: str, dest_uid: str, amount: int) -> WireTransaction:
        """Move cash between two tracked users. The sum of both balances is unchanged."""
        require_positive("amount", amount)
        if from_uid == dest_uid:
            raise SelfTransferError(from_uid)
        async with self._atomic("wire_to_user") as db:
            locked: dict[str, User | None] = {}
            for uid in sorted((from_uid, dest_uid)):
                locked[uid] = await self._users.get(db, uid, for_update=True)
            source, dest = locked[from_uid], locked[dest_uid]
            if source is None:
                raise UserNotFoundError(from_uid)
            if dest is None:
                raise UserNotFoundError(dest_uid)
            check_wire(source, amount)

            await self._users.update(db, from_uid, UserUpdate(balance=source.balance - amount))
            await self._users.update(db, dest_uid, UserUpdate(balance=dest.balance + amount))
            record = await self._transactions.append(
                db,
                WireTransaction(
                    uid=from_uid,
                    balance_change=-amount,
                    destination=dest_uid,
                    is_destination_user=True,
                    timestamp=utc_now(),
                ),
            )

        logger.info(
            "Wire committed: from=%s to=%s amount=%d tx=%s",
            from_uid, dest_uid, amount, record.id,
        )
        return record

    async def wire_to_entity(
        self, from_uid: str, destination: str, amount: int
    ) -> WireTransaction:
        """Debit a user in favour of an untracked external entity (no matching credit)."""
        require_positive("amount", amount)
        async with self._atomic("wire_to_entity") as db:
            source = await self._lock_user(db, from_uid)
            check_wire(source, amount)

            await self._users.update(db, from_uid, UserUpdate(balance=source.balance - amount))
            record = await self._transactions.append(
                db,
                WireTransaction(
                    uid=from_uid,
                    balance_change=-amount,
                    destination=destination,
                    is_destination_user=False,
                    timestamp=utc_now(),
                ),
            )

        logger.info(
            "Entity wire committed: from=%s to=%s amount=%d tx=%s",
            from_uid, destination, amount, record.id,
        )
        return record

"""UserRepository — concrete implementation of UserRepositoryProtocol.

Holdings are append-only snapshots in `users_stocks`: a quantity change is a
new row, never an UPDATE. The current holding for (uid, ticker) is the row
with the greatest (timestamp, id).

Transaction ownership: The CALLER (ledger or application service) is
responsible for committing or rolling back.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.sg_common.errors import DuplicateUserError, EmptyUpdateError, InternalError
from src.sg_user.domain.models import HeldStock, Holding, User, UserPortfolio, UserUpdate

# ---------------------------------------------------------------------------
# SQL: users
# ---------------------------------------------------------------------------

_INSERT_USER_SQL = text("""
    INSERT INTO users (uid, balance, credit_limit, loan_balance)
    VALUES (:uid, :balance, :credit_limit, :loan_balance)
    ON CONFLICT (uid) DO NOTHING
    RETURNING uid, balance, credit_limit, loan_balance, created_at
""")

_GET_USER_SQL = text("""
    SELECT uid, balance, credit_limit, loan_balance, created_at
    FROM users
    WHERE uid = :uid
""")

_GET_USER_FOR_UPDATE_SQL = text("""
    SELECT uid, balance, credit_limit, loan_balance, created_at
    FROM users
    WHERE uid = :uid
    FOR UPDATE
""")

_DELETE_USER_SQL = text("DELETE FROM users WHERE uid = :uid")

# LEFT JOINs keep the user row when nothing is held; quantity > 0 is applied
# after picking the latest snapshot so a liquidated position stays hidden.
_GET_PORTFOLIO_SQL = text("""
    SELECT u.uid, u.balance, u.credit_limit, u.loan_balance, u.created_at,
           h.ticker, h.quantity, h.timestamp,
           s.name, s.price
    FROM users u
    LEFT JOIN (
        SELECT DISTINCT ON (ticker) uid, ticker, quantity, timestamp
        FROM users_stocks
        WHERE uid = :uid
        ORDER BY ticker, timestamp DESC, id DESC
    ) h ON h.uid = u.uid AND h.quantity > 0
    LEFT JOIN stocks s ON s.ticker = h.ticker
    WHERE u.uid = :uid
    ORDER BY s.price * h.quantity DESC NULLS LAST, h.ticker
""")

# ---------------------------------------------------------------------------
# SQL: users_stocks (holding snapshots)
# ---------------------------------------------------------------------------

_INSERT_HOLDING_SQL = text("""
    INSERT INTO users_stocks (uid, ticker, quantity, timestamp)
    VALUES (:uid, :ticker, :quantity, :timestamp)
    RETURNING id, uid, ticker, quantity, timestamp
""")

_GET_LATEST_HOLDING_SQL = text("""
    SELECT id, uid, ticker, quantity, timestamp
    FROM users_stocks
    WHERE uid = :uid AND ticker = :ticker
    ORDER BY timestamp DESC, id DESC
    LIMIT 1
""")


def _row_to_user(row: object) -> User:
    return User(
        uid=row.uid,  # type: ignore[attr-defined]
        balance=row.balance,  # type: ignore[attr-defined]
        credit_limit=row.credit_limit,  # type: ignore[attr-defined]
        loan_balance=row.loan_balance,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


def _row_to_holding(row: object) -> Holding:
    return Holding(
        id=row.id,  # type: ignore[attr-defined]
        uid=row.uid,  # type: ignore[attr-defined]
        ticker=row.ticker,  # type: ignore[attr-defined]
        quantity=row.quantity,  # type: ignore[attr-defined]
        timestamp=row.timestamp,  # type: ignore[attr-defined]
    )


def _row_to_held_stock(row: object) -> HeldStock:
    return HeldStock(
        ticker=row.ticker,  # type: ignore[attr-defined]
        quantity=row.quantity,  # type: ignore[attr-defined]
        timestamp=row.timestamp,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        price=row.price,  # type: ignore[attr-defined]
    )


class UserRepository:
    """Concrete repository — every statement runs in the caller's session."""

    async def create(self, db: AsyncSession, user: User) -> User:
        result = await db.execute(
            _INSERT_USER_SQL,
            {
                "uid": user.uid,
                "balance": user.balance,
                "credit_limit": user.credit_limit,
                "loan_balance": user.loan_balance,
            },
        )
        row = result.fetchone()
        if row is None:
            raise DuplicateUserError(user.uid)
        return _row_to_user(row)

    async def get(
        self, db: AsyncSession, uid: str, for_update: bool = False
    ) -> User | None:
        sql = _GET_USER_FOR_UPDATE_SQL if for_update else _GET_USER_SQL
        result = await db.execute(sql, {"uid": uid})
        row = result.fetchone()
        return _row_to_user(row) if row else None

    async def update(self, db: AsyncSession, uid: str, fields: UserUpdate) -> None:
        params = fields.as_params()
        if not params:
            raise EmptyUpdateError()
        # Column names come from UserUpdate's declared fields, never from input.
        assignments = ", ".join(f"{name} = :{name}" for name in params)
        await db.execute(
            text(f"UPDATE users SET {assignments} WHERE uid = :uid"),
            {**params, "uid": uid},
        )

    async def delete(self, db: AsyncSession, uid: str) -> None:
        await db.execute(_DELETE_USER_SQL, {"uid": uid})

    async def get_portfolio(self, db: AsyncSession, uid: str) -> UserPortfolio | None:
        result = await db.execute(_GET_PORTFOLIO_SQL, {"uid": uid})
        rows = result.fetchall()
        if not rows:
            return None
        holdings = [_row_to_held_stock(row) for row in rows if row.ticker is not None]
        return UserPortfolio(user=_row_to_user(rows[0]), holdings=holdings)

    async def create_holding(self, db: AsyncSession, holding: Holding) -> Holding:
        result = await db.execute(
            _INSERT_HOLDING_SQL,
            {
                "uid": holding.uid,
                "ticker": holding.ticker,
                "quantity": holding.quantity,
                "timestamp": holding.timestamp,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Holding insert returned no rows — this should never happen")
        return _row_to_holding(row)

    async def get_latest_holding(
        self, db: AsyncSession, uid: str, ticker: str
    ) -> Holding | None:
        result = await db.execute(_GET_LATEST_HOLDING_SQL, {"uid": uid, "ticker": ticker})
        row = result.fetchone()
        return _row_to_holding(row) if row else None

"""003: create users_stocks holding snapshots

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # No FK on ticker: snapshots outlive a delisted stock and show up unpriced.
    op.execute("""
        CREATE TABLE users_stocks (
            id              BIGSERIAL       PRIMARY KEY,
            uid             VARCHAR(64)     NOT NULL REFERENCES users (uid) ON DELETE CASCADE,
            ticker          VARCHAR(16)     NOT NULL,
            quantity        INT             NOT NULL,
            timestamp       TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_users_stocks_quantity_gte_0 CHECK (quantity >= 0)
        );
    """)
    op.execute(
        "CREATE INDEX idx_users_stocks_latest "
        "ON users_stocks (uid, ticker, timestamp DESC, id DESC);"
    )
    op.execute("COMMENT ON TABLE users_stocks IS 'Holding snapshots — Append-Only, latest timestamp is current';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS users_stocks CASCADE;")

"""001: create users table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE users (
            uid             VARCHAR(64)     PRIMARY KEY,
            balance         BIGINT          NOT NULL DEFAULT 0,
            credit_limit    BIGINT          NOT NULL DEFAULT 0,
            loan_balance    BIGINT          NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_users_credit_limit_gte_0 CHECK (credit_limit >= 0),
            CONSTRAINT ck_users_loan_balance_gte_0 CHECK (loan_balance >= 0)
        );
    """)
    op.execute("COMMENT ON TABLE users IS 'Players — balances in cents, mutated only by the ledger';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS users CASCADE;")

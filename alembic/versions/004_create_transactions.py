"""004: create transactions log

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE transactions (
            id                  BIGSERIAL       PRIMARY KEY,
            type                VARCHAR(8)      NOT NULL,
            uid                 VARCHAR(64)     NOT NULL,
            balance_change      BIGINT          NOT NULL,
            timestamp           TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            ticker              VARCHAR(16),
            credit_change       BIGINT,
            quantity            INT,
            price               BIGINT,
            total_price         BIGINT,
            destination         VARCHAR(128),
            is_destination_user BOOLEAN,
            CONSTRAINT ck_transactions_type CHECK (type IN ('buy', 'sell', 'wire')),
            CONSTRAINT ck_transactions_stock_shape CHECK (
                type = 'wire' OR (
                    ticker IS NOT NULL AND credit_change IS NOT NULL
                    AND quantity > 0 AND price IS NOT NULL AND total_price IS NOT NULL
                )
            ),
            CONSTRAINT ck_transactions_wire_shape CHECK (
                type <> 'wire' OR (
                    destination IS NOT NULL AND is_destination_user IS NOT NULL
                    AND balance_change < 0
                )
            )
        );
    """)
    op.execute("CREATE INDEX idx_transactions_uid_id ON transactions (uid, id DESC);")
    op.execute("COMMENT ON TABLE transactions IS 'Transaction log — Append-Only, never updated or deleted, amounts in cents';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS transactions CASCADE;")

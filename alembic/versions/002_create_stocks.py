"""002: create stocks table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE stocks (
            ticker          VARCHAR(16)     PRIMARY KEY,
            name            VARCHAR(128)    NOT NULL,
            price           BIGINT          NOT NULL,
            description     VARCHAR(1000),
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_stocks_price_gte_0 CHECK (price >= 0)
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS stocks CASCADE;")

"""001: create accounts table

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
        CREATE TABLE accounts (
            id                  VARCHAR(64) PRIMARY KEY,
            credits             INTEGER     NOT NULL DEFAULT 0,
            total_credits_used  INTEGER     NOT NULL DEFAULT 0,
            created_at          TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            last_purchase_at    TIMESTAMPTZ,
            CONSTRAINT ck_accounts_credits_gte_0  CHECK (credits >= 0),
            CONSTRAINT ck_accounts_used_gte_0     CHECK (total_credits_used >= 0)
        );
    """)
    op.execute("COMMENT ON TABLE accounts IS 'AI credit balances — mutated only by ledger debit/credit';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS accounts CASCADE;")

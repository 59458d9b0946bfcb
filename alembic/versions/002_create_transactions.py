"""002: create transactions table

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
        CREATE TABLE transactions (
            id              BIGSERIAL       PRIMARY KEY,
            account_id      VARCHAR(64)     NOT NULL REFERENCES accounts (id),
            kind            VARCHAR(16)     NOT NULL,
            amount          INTEGER         NOT NULL,
            description     VARCHAR(500)    NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_transactions_kind CHECK (kind IN ('usage', 'purchase')),
            CONSTRAINT ck_transactions_amount_sign CHECK (
                (kind = 'usage' AND amount < 0) OR (kind = 'purchase' AND amount > 0)
            )
        );
    """)
    op.execute(
        "CREATE INDEX idx_transactions_account_time ON transactions (account_id, created_at);"
    )
    op.execute("COMMENT ON TABLE transactions IS 'Credit audit log — Append-Only, never updated or deleted';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS transactions CASCADE;")

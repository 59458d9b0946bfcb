"""003: create soap_drafts table

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
    op.execute("""
        CREATE TABLE soap_drafts (
            id                  BIGSERIAL       PRIMARY KEY,
            account_id          VARCHAR(64)     NOT NULL,
            title               VARCHAR(200)    NOT NULL,
            patient_info        JSONB,
            subjective          TEXT,
            objective           TEXT,
            assessment          TEXT,
            plan                TEXT,
            completed_sections  JSONB           NOT NULL DEFAULT '[]'::jsonb,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)
    op.execute(
        "CREATE INDEX idx_soap_drafts_account_updated ON soap_drafts (account_id, updated_at);"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS soap_drafts CASCADE;")

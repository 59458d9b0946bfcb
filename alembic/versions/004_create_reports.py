"""004: create reports table

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
        CREATE TABLE reports (
            id                  BIGSERIAL       PRIMARY KEY,
            account_id          VARCHAR(64)     NOT NULL,
            report_type         VARCHAR(16)     NOT NULL,
            patient_notes       TEXT            NOT NULL,
            generated_report    TEXT            NOT NULL,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_reports_type CHECK (report_type IN ('soap', 'progress', 'discharge'))
        );
    """)
    op.execute("CREATE INDEX idx_reports_account_time ON reports (account_id, created_at);")
    op.execute("COMMENT ON TABLE reports IS 'Generated reports — Append-Only';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS reports CASCADE;")

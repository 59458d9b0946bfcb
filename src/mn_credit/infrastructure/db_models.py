"""SQLAlchemy ORM models for mn_credit.

These map to tables created by Alembic migrations (alembic/versions/001, 002).
DO NOT add/remove columns here without a corresponding migration.
"""

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.mn_common.database import Base


class CreditAccountORM(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("credits >= 0", name="ck_accounts_credits_gte_0"),
        CheckConstraint("total_credits_used >= 0", name="ck_accounts_used_gte_0"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    credits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_credits_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    last_purchase_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class CreditTransactionORM(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("kind IN ('usage', 'purchase')", name="ck_transactions_kind"),
        CheckConstraint(
            "(kind = 'usage' AND amount < 0) OR (kind = 'purchase' AND amount > 0)",
            name="ck_transactions_amount_sign",
        ),
        Index("idx_transactions_account_time", "account_id", "created_at"),
    )

    # SQLite only auto-increments INTEGER PRIMARY KEY
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    account_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("accounts.id"), nullable=False
    )
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    # NOTE: No updated_at — transactions is append-only

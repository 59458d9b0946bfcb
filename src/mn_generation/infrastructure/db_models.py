"""SQLAlchemy ORM model for the reports table (alembic/versions/004)."""

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, DateTime, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.mn_common.database import Base


class GeneratedReportORM(Base):
    __tablename__ = "reports"
    __table_args__ = (
        CheckConstraint(
            "report_type IN ('soap', 'progress', 'discharge')", name="ck_reports_type"
        ),
        Index("idx_reports_account_time", "account_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    account_id: Mapped[str] = mapped_column(String(64), nullable=False)
    report_type: Mapped[str] = mapped_column(String(16), nullable=False)
    patient_notes: Mapped[str] = mapped_column(Text, nullable=False)
    generated_report: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    # NOTE: No updated_at — reports is append-only

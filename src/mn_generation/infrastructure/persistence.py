"""SqlReportRepository — relational implementation of ReportRepositoryProtocol."""

import logging

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncEngine

from src.mn_common.database import build_session_factory
from src.mn_common.datetime_utils import utc_now
from src.mn_common.errors import InternalError
from src.mn_generation.domain.models import GeneratedReport
from src.mn_generation.infrastructure.db_models import GeneratedReportORM

logger = logging.getLogger("mn.generation")

_reports = GeneratedReportORM.__table__


def _row_to_report(row: object) -> GeneratedReport:
    return GeneratedReport(
        id=row.id,  # type: ignore[attr-defined]
        account_id=row.account_id,  # type: ignore[attr-defined]
        report_type=row.report_type,  # type: ignore[attr-defined]
        patient_notes=row.patient_notes,  # type: ignore[attr-defined]
        generated_report=row.generated_report,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class SqlReportRepository:
    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = build_session_factory(engine)

    async def save(
        self,
        account_id: str,
        report_type: str,
        patient_notes: str,
        generated_report: str,
    ) -> GeneratedReport:
        async with self._session_factory() as db:
            try:
                result = await db.execute(
                    insert(_reports)
                    .values(
                        account_id=account_id,
                        report_type=report_type,
                        patient_notes=patient_notes,
                        generated_report=generated_report,
                        created_at=utc_now(),
                    )
                    .returning(*_reports.c)
                )
                row = result.fetchone()
                if row is None:
                    raise InternalError("Report insert returned no rows — this should never happen")
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        report = _row_to_report(row)
        logger.info("report saved account=%s report=%d", account_id, report.id)
        return report

    async def list_for_account(self, account_id: str) -> list[GeneratedReport]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(_reports)
                .where(_reports.c.account_id == account_id)
                .order_by(_reports.c.created_at.desc(), _reports.c.id.desc())
            )
            return [_row_to_report(row) for row in result.fetchall()]

    async def close(self) -> None:
        await self._engine.dispose()

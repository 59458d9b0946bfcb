"""InMemoryReportRepository — process-local implementation of ReportRepositoryProtocol."""

import itertools
import logging

from src.mn_common.datetime_utils import utc_now
from src.mn_generation.domain.models import GeneratedReport

logger = logging.getLogger("mn.generation")


class InMemoryReportRepository:
    def __init__(self) -> None:
        self._reports: list[GeneratedReport] = []
        self._ids = itertools.count(1)

    async def save(
        self,
        account_id: str,
        report_type: str,
        patient_notes: str,
        generated_report: str,
    ) -> GeneratedReport:
        report = GeneratedReport(
            id=next(self._ids),
            account_id=account_id,
            report_type=report_type,
            patient_notes=patient_notes,
            generated_report=generated_report,
            created_at=utc_now(),
        )
        self._reports.append(report)
        logger.info("report saved account=%s report=%d", account_id, report.id)
        return report

    async def list_for_account(self, account_id: str) -> list[GeneratedReport]:
        # Newest first
        return [r for r in reversed(self._reports) if r.account_id == account_id]

    async def close(self) -> None:
        return None

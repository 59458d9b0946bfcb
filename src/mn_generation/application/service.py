"""GenerationApplicationService — credit-gated AI operations.

Order matters: the account is debited first and the provider is only called
after the debit succeeds. InsufficientCreditsError propagates untouched so the
API answers 402 and no provider call is made. A provider failure after the
debit is not refunded.
"""

import logging

from src.mn_credit.domain.ledger import CreditLedgerProtocol
from src.mn_generation.application.schemas import (
    GenerateReportResponse,
    GenerateSectionResponse,
    ReviewReportResponse,
)
from src.mn_generation.domain.provider import TextGenerationProvider
from src.mn_generation.domain.repository import ReportRepositoryProtocol

logger = logging.getLogger("mn.generation")

GENERATION_COST = 1
REVIEW_LABEL = "AI report review"


def section_label(section: str) -> str:
    return f"Generated {section} section"


def report_label(report_type: str) -> str:
    return f"Generated {report_type} report"


class GenerationApplicationService:
    def __init__(
        self,
        ledger: CreditLedgerProtocol,
        provider: TextGenerationProvider,
        reports: ReportRepositoryProtocol,
    ) -> None:
        self._ledger = ledger
        self._provider = provider
        self._reports = reports

    async def _charge(self, account_id: str, label: str) -> None:
        await self._ledger.get_balance(account_id)
        await self._ledger.debit(account_id, GENERATION_COST, label)

    async def generate_section(
        self,
        account_id: str,
        section: str,
        content: str,
        patient_info: dict[str, str] | None,
        report_type: str,
    ) -> GenerateSectionResponse:
        await self._charge(account_id, section_label(section))
        generated = await self._provider.generate_section(
            section, content, patient_info, report_type
        )
        balance = await self._ledger.get_balance(account_id)
        logger.info("section generated account=%s section=%s", account_id, section)
        return GenerateSectionResponse(
            section=section,
            content=generated,
            credits_used=GENERATION_COST,
            credits_remaining=balance.credits,
        )

    async def review_report(
        self,
        account_id: str,
        subjective: str,
        objective: str,
        assessment: str,
        plan: str,
    ) -> ReviewReportResponse:
        await self._charge(account_id, REVIEW_LABEL)
        review = await self._provider.review_report(subjective, objective, assessment, plan)
        balance = await self._ledger.get_balance(account_id)
        logger.info("report reviewed account=%s", account_id)
        return ReviewReportResponse(
            review=review,
            credits_used=GENERATION_COST,
            credits_remaining=balance.credits,
        )

    async def generate_report(
        self, account_id: str, report_type: str, patient_notes: str
    ) -> GenerateReportResponse:
        """Generate a whole note in one call and keep it in the report store."""
        await self._charge(account_id, report_label(report_type))
        generated = await self._provider.generate_report(patient_notes, report_type)
        report = await self._reports.save(account_id, report_type, patient_notes, generated)
        balance = await self._ledger.get_balance(account_id)
        logger.info(
            "report generated account=%s type=%s report=%d", account_id, report_type, report.id
        )
        return GenerateReportResponse(
            report_id=report.id,
            report_type=report_type,
            report=generated,
            credits_used=GENERATION_COST,
            credits_remaining=balance.credits,
        )

"""Repository Protocol for generated reports. Reports are append-only."""

from typing import Protocol

from src.mn_generation.domain.models import GeneratedReport


class ReportRepositoryProtocol(Protocol):
    async def save(
        self,
        account_id: str,
        report_type: str,
        patient_notes: str,
        generated_report: str,
    ) -> GeneratedReport: ...

    async def list_for_account(self, account_id: str) -> list[GeneratedReport]: ...

    async def close(self) -> None: ...

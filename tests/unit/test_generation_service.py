"""Unit tests for GenerationApplicationService — credit gating order."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.mn_common.errors import GenerationFailedError, InsufficientCreditsError
from src.mn_credit.domain.models import CreditBalance
from src.mn_credit.infrastructure.memory import InMemoryCreditLedger
from src.mn_generation.infrastructure.memory import InMemoryReportRepository
from src.mn_generation.application.service import (
    GENERATION_COST,
    REVIEW_LABEL,
    report_label,
    GenerationApplicationService,
    section_label,
)


class TestGenerateSection:
    async def test_debits_before_calling_provider(self) -> None:
        calls: list[str] = []
        mock_ledger = AsyncMock()
        mock_ledger.get_balance.return_value = CreditBalance(2, 1)
        mock_ledger.debit.side_effect = lambda *a: calls.append("debit")
        mock_provider = AsyncMock()
        mock_provider.generate_section.side_effect = lambda *a: calls.append("provider") or "S"
        svc = GenerationApplicationService(mock_ledger, mock_provider, AsyncMock())

        result = await svc.generate_section("acct-1", "subjective", "cough", None, "soap")

        assert calls == ["debit", "provider"]
        mock_ledger.debit.assert_awaited_once_with(
            "acct-1", GENERATION_COST, "Generated subjective section"
        )
        assert result.content == "S"
        assert result.credits_used == 1
        assert result.credits_remaining == 2

    async def test_insufficient_credits_skips_provider(self) -> None:
        mock_ledger = AsyncMock()
        mock_ledger.get_balance.return_value = CreditBalance(0, 3)
        mock_ledger.debit.side_effect = InsufficientCreditsError(1, 0)
        mock_provider = AsyncMock()
        svc = GenerationApplicationService(mock_ledger, mock_provider, AsyncMock())

        with pytest.raises(InsufficientCreditsError):
            await svc.generate_section("acct-1", "plan", "notes", None, "soap")

        mock_provider.generate_section.assert_not_awaited()

    async def test_provider_failure_keeps_debit(self) -> None:
        ledger = InMemoryCreditLedger(starting_credits=3)
        mock_provider = MagicMock()
        mock_provider.generate_section = AsyncMock(side_effect=GenerationFailedError("down"))
        svc = GenerationApplicationService(ledger, mock_provider, InMemoryReportRepository())

        with pytest.raises(GenerationFailedError):
            await svc.generate_section("acct-1", "objective", "bp 120/80", None, "soap")

        assert await ledger.get_balance("acct-1") == CreditBalance(2, 1)


class TestReviewReport:
    async def test_review_costs_one_credit(self) -> None:
        ledger = InMemoryCreditLedger(starting_credits=3)
        mock_provider = AsyncMock()
        mock_provider.review_report.return_value = "Add allergies."
        svc = GenerationApplicationService(ledger, mock_provider, InMemoryReportRepository())

        result = await svc.review_report("acct-1", "s", "o", "a", "p")

        assert result.review == "Add allergies."
        assert result.credits_remaining == 2
        entries = await ledger.list_transactions("acct-1")
        assert [(e.kind, e.amount, e.description) for e in entries] == [
            ("usage", -1, REVIEW_LABEL)
        ]
        mock_provider.review_report.assert_awaited_once_with("s", "o", "a", "p")

    async def test_exhausted_account_never_reviews(self) -> None:
        ledger = InMemoryCreditLedger(starting_credits=0)
        mock_provider = AsyncMock()
        svc = GenerationApplicationService(ledger, mock_provider, InMemoryReportRepository())

        with pytest.raises(InsufficientCreditsError):
            await svc.review_report("acct-1", "s", "o", "a", "p")

        mock_provider.review_report.assert_not_awaited()
        assert await ledger.list_transactions("acct-1") == []


def test_section_label() -> None:
    assert section_label("assessment") == "Generated assessment section"


class TestGenerateReport:
    async def test_charges_then_saves_report(self) -> None:
        ledger = InMemoryCreditLedger(starting_credits=3)
        reports = InMemoryReportRepository()
        mock_provider = AsyncMock()
        mock_provider.generate_report.return_value = "DISCHARGE SUMMARY ..."
        svc = GenerationApplicationService(ledger, mock_provider, reports)

        result = await svc.generate_report("acct-1", "discharge", "admitted for pneumonia")

        assert result.report == "DISCHARGE SUMMARY ..."
        assert result.report_type == "discharge"
        assert result.credits_used == GENERATION_COST
        assert result.credits_remaining == 2
        mock_provider.generate_report.assert_awaited_once_with(
            "admitted for pneumonia", "discharge"
        )
        saved = await reports.list_for_account("acct-1")
        assert [(r.id, r.patient_notes, r.generated_report) for r in saved] == [
            (result.report_id, "admitted for pneumonia", "DISCHARGE SUMMARY ...")
        ]
        entries = await ledger.list_transactions("acct-1")
        assert [(e.amount, e.description) for e in entries] == [
            (-1, "Generated discharge report")
        ]

    async def test_exhausted_account_never_generates_or_saves(self) -> None:
        ledger = InMemoryCreditLedger(starting_credits=0)
        reports = InMemoryReportRepository()
        mock_provider = AsyncMock()
        svc = GenerationApplicationService(ledger, mock_provider, reports)

        with pytest.raises(InsufficientCreditsError):
            await svc.generate_report("acct-1", "soap", "notes")

        mock_provider.generate_report.assert_not_awaited()
        assert await reports.list_for_account("acct-1") == []

    async def test_provider_failure_saves_nothing_and_keeps_debit(self) -> None:
        ledger = InMemoryCreditLedger(starting_credits=3)
        reports = InMemoryReportRepository()
        mock_provider = MagicMock()
        mock_provider.generate_report = AsyncMock(side_effect=GenerationFailedError("down"))
        svc = GenerationApplicationService(ledger, mock_provider, reports)

        with pytest.raises(GenerationFailedError):
            await svc.generate_report("acct-1", "progress", "stable")

        assert await reports.list_for_account("acct-1") == []
        assert await ledger.get_balance("acct-1") == CreditBalance(2, 1)


def test_report_label() -> None:
    assert report_label("progress") == "Generated progress report"

"""Tests for mn_credit and mn_generation Pydantic schemas."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from src.mn_common.enums import CreditPackageId, NoteSection, ReportType
from src.mn_credit.application.schemas import PurchaseRequest, TransactionItem
from src.mn_credit.domain.models import CreditTransaction
from src.mn_generation.application.schemas import GenerateSectionRequest, ReviewReportRequest


class TestPurchaseRequest:
    def test_valid(self) -> None:
        assert PurchaseRequest(package="medium").package == CreditPackageId.MEDIUM.value

    def test_unknown_selector_left_to_catalogue(self) -> None:
        # get_package answers unknown selectors with code 2003
        assert PurchaseRequest(package="jumbo").package == "jumbo"

    def test_missing_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PurchaseRequest()  # type: ignore[call-arg]


class TestTransactionItem:
    def test_from_domain(self) -> None:
        entry = CreditTransaction(
            id=4,
            account_id="acct-1",
            kind="purchase",
            amount=35,
            description="Purchased Premium package",
            created_at=datetime(2026, 10, 19, 12, 0),
        )
        item = TransactionItem.from_domain(entry)
        assert item.id == 4
        assert item.amount == 35
        assert item.created_at == "2026-10-19T12:00:00+00:00"


class TestGenerateSectionRequest:
    def test_defaults_to_soap(self) -> None:
        req = GenerateSectionRequest(section="plan", content="rest and fluids")
        assert req.section is NoteSection.PLAN
        assert req.report_type is ReportType.SOAP
        assert req.patient_info is None

    def test_empty_content_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GenerateSectionRequest(section="plan", content="")

    def test_unknown_section_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GenerateSectionRequest(section="history", content="x")


class TestReviewReportRequest:
    def test_all_sections_required(self) -> None:
        with pytest.raises(ValidationError):
            ReviewReportRequest(subjective="s", objective="o", assessment="a")  # type: ignore[call-arg]

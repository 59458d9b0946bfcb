"""Shared test fixtures."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import create_app
from src.mn_credit.infrastructure.memory import InMemoryCreditLedger
from src.mn_draft.infrastructure.memory import InMemoryDraftRepository
from src.mn_generation.infrastructure.memory import InMemoryReportRepository


@pytest.fixture
def ledger() -> InMemoryCreditLedger:
    """Fresh in-memory ledger with the default starting grant of 3 credits."""
    return InMemoryCreditLedger(starting_credits=3)


@pytest.fixture
def drafts() -> InMemoryDraftRepository:
    return InMemoryDraftRepository()


@pytest.fixture
def reports() -> InMemoryReportRepository:
    return InMemoryReportRepository()


@pytest.fixture
def provider() -> AsyncMock:
    """Stub text generation provider — never reaches the network."""
    mock = AsyncMock()
    mock.generate_section.return_value = "Patient reports intermittent chest pain."
    mock.review_report.return_value = "Consider documenting vital signs."
    mock.generate_report.return_value = "SUBJECTIVE: cough. PLAN: rest."
    return mock


@pytest.fixture
async def client(
    ledger: InMemoryCreditLedger,
    provider: AsyncMock,
    drafts: InMemoryDraftRepository,
    reports: InMemoryReportRepository,
) -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints against injected collaborators."""
    app = create_app(ledger=ledger, provider=provider, drafts=drafts, reports=reports)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

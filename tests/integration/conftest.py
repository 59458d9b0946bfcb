"""Integration-test fixtures.

The SQL stores run against a throwaway SQLite file per test (aiosqlite), with
tables created from the ORM metadata. A file rather than :memory: so separate
pooled connections see the same database and contend for its write lock.
"""

from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine

from src.mn_common.database import Base, build_engine
from src.mn_credit.infrastructure import db_models  # noqa: F401
from src.mn_credit.infrastructure.persistence import SqlCreditLedger
from src.mn_draft.infrastructure import db_models as draft_db_models  # noqa: F401
from src.mn_draft.infrastructure.persistence import SqlDraftRepository
from src.mn_generation.infrastructure import db_models as report_db_models  # noqa: F401
from src.mn_generation.infrastructure.persistence import SqlReportRepository


@pytest.fixture
async def sql_engine(tmp_path: Path) -> AsyncEngine:
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'medical_notes.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def sql_ledger(sql_engine: AsyncEngine) -> SqlCreditLedger:
    return SqlCreditLedger(sql_engine, starting_credits=3)


@pytest.fixture
def sql_drafts(sql_engine: AsyncEngine) -> SqlDraftRepository:
    return SqlDraftRepository(sql_engine)


@pytest.fixture
def sql_reports(sql_engine: AsyncEngine) -> SqlReportRepository:
    return SqlReportRepository(sql_engine)

"""SqlDraftRepository — relational implementation of DraftRepositoryProtocol.

Update and delete carry the owner in their WHERE clause and use RETURNING, so
"not found" and "not yours" are the same zero-row result.
"""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncEngine

from src.mn_common.database import build_session_factory
from src.mn_common.datetime_utils import utc_now
from src.mn_common.errors import DraftNotFoundError, InternalError
from src.mn_draft.domain.models import DRAFT_FIELDS, SoapDraft
from src.mn_draft.infrastructure.db_models import SoapDraftORM

logger = logging.getLogger("mn.draft")

_drafts = SoapDraftORM.__table__


def _row_to_draft(row: object) -> SoapDraft:
    return SoapDraft(
        id=row.id,  # type: ignore[attr-defined]
        account_id=row.account_id,  # type: ignore[attr-defined]
        title=row.title,  # type: ignore[attr-defined]
        patient_info=row.patient_info,  # type: ignore[attr-defined]
        subjective=row.subjective,  # type: ignore[attr-defined]
        objective=row.objective,  # type: ignore[attr-defined]
        assessment=row.assessment,  # type: ignore[attr-defined]
        plan=row.plan,  # type: ignore[attr-defined]
        completed_sections=list(row.completed_sections or []),  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _writable(values: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if k in DRAFT_FIELDS}


def _owned(account_id: str, draft_id: int):  # type: ignore[no-untyped-def]
    return (_drafts.c.id == draft_id) & (_drafts.c.account_id == account_id)


class SqlDraftRepository:
    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = build_session_factory(engine)

    async def create(self, account_id: str, fields: Mapping[str, Any]) -> SoapDraft:
        now = utc_now()
        values = {"completed_sections": [], **_writable(fields)}
        async with self._session_factory() as db:
            try:
                result = await db.execute(
                    insert(_drafts)
                    .values(account_id=account_id, created_at=now, updated_at=now, **values)
                    .returning(*_drafts.c)
                )
                row = result.fetchone()
                if row is None:
                    raise InternalError("Draft insert returned no rows — this should never happen")
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        draft = _row_to_draft(row)
        logger.info("draft created account=%s draft=%d", account_id, draft.id)
        return draft

    async def get(self, account_id: str, draft_id: int) -> SoapDraft | None:
        async with self._session_factory() as db:
            result = await db.execute(select(_drafts).where(_owned(account_id, draft_id)))
            row = result.fetchone()
            return _row_to_draft(row) if row else None

    async def list_for_account(self, account_id: str) -> list[SoapDraft]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(_drafts)
                .where(_drafts.c.account_id == account_id)
                .order_by(_drafts.c.updated_at.desc(), _drafts.c.id.desc())
            )
            return [_row_to_draft(row) for row in result.fetchall()]

    async def update(
        self, account_id: str, draft_id: int, changes: Mapping[str, Any]
    ) -> SoapDraft:
        async with self._session_factory() as db:
            try:
                result = await db.execute(
                    update(_drafts)
                    .where(_owned(account_id, draft_id))
                    .values(updated_at=utc_now(), **_writable(changes))
                    .returning(*_drafts.c)
                )
                row = result.fetchone()
                if row is None:
                    raise DraftNotFoundError(draft_id)
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        return _row_to_draft(row)

    async def delete(self, account_id: str, draft_id: int) -> None:
        async with self._session_factory() as db:
            try:
                result = await db.execute(
                    delete(_drafts).where(_owned(account_id, draft_id)).returning(_drafts.c.id)
                )
                if result.fetchone() is None:
                    raise DraftNotFoundError(draft_id)
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        logger.info("draft deleted account=%s draft=%d", account_id, draft_id)

    async def close(self) -> None:
        await self._engine.dispose()

"""InMemoryDraftRepository — process-local implementation of DraftRepositoryProtocol.

No call awaits between reading and writing the dict, so no lock is needed on
a single event loop. Drafts are copied on the way in and out.
"""

import copy
import dataclasses
import itertools
import logging
from collections.abc import Mapping
from typing import Any

from src.mn_common.datetime_utils import utc_now
from src.mn_common.errors import DraftNotFoundError
from src.mn_draft.domain.models import DRAFT_FIELDS, SoapDraft

logger = logging.getLogger("mn.draft")


def _writable(values: Mapping[str, Any]) -> dict[str, Any]:
    return {k: copy.deepcopy(v) for k, v in values.items() if k in DRAFT_FIELDS}


class InMemoryDraftRepository:
    def __init__(self) -> None:
        self._drafts: dict[int, SoapDraft] = {}
        self._ids = itertools.count(1)

    def _owned(self, account_id: str, draft_id: int) -> SoapDraft | None:
        draft = self._drafts.get(draft_id)
        if draft is None or draft.account_id != account_id:
            return None
        return draft

    async def create(self, account_id: str, fields: Mapping[str, Any]) -> SoapDraft:
        now = utc_now()
        draft = SoapDraft(
            id=next(self._ids),
            account_id=account_id,
            created_at=now,
            updated_at=now,
            **_writable(fields),
        )
        self._drafts[draft.id] = draft
        logger.info("draft created account=%s draft=%d", account_id, draft.id)
        return copy.deepcopy(draft)

    async def get(self, account_id: str, draft_id: int) -> SoapDraft | None:
        draft = self._owned(account_id, draft_id)
        return copy.deepcopy(draft) if draft else None

    async def list_for_account(self, account_id: str) -> list[SoapDraft]:
        drafts = [d for d in self._drafts.values() if d.account_id == account_id]
        drafts.sort(key=lambda d: (d.updated_at, d.id), reverse=True)
        return [copy.deepcopy(d) for d in drafts]

    async def update(
        self, account_id: str, draft_id: int, changes: Mapping[str, Any]
    ) -> SoapDraft:
        draft = self._owned(account_id, draft_id)
        if draft is None:
            raise DraftNotFoundError(draft_id)
        updated = dataclasses.replace(draft, updated_at=utc_now(), **_writable(changes))
        self._drafts[draft_id] = updated
        return copy.deepcopy(updated)

    async def delete(self, account_id: str, draft_id: int) -> None:
        if self._owned(account_id, draft_id) is None:
            raise DraftNotFoundError(draft_id)
        del self._drafts[draft_id]
        logger.info("draft deleted account=%s draft=%d", account_id, draft_id)

    async def close(self) -> None:
        return None

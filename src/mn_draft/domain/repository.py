"""Repository Protocol for SOAP drafts.

Every call is scoped to an account: a draft id owned by another account
behaves exactly like a missing one. update and delete raise DraftNotFoundError;
get returns None.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from src.mn_draft.domain.models import SoapDraft


class DraftRepositoryProtocol(Protocol):
    async def create(self, account_id: str, fields: Mapping[str, Any]) -> SoapDraft: ...

    async def get(self, account_id: str, draft_id: int) -> SoapDraft | None: ...

    async def list_for_account(self, account_id: str) -> list[SoapDraft]: ...

    async def update(
        self, account_id: str, draft_id: int, changes: Mapping[str, Any]
    ) -> SoapDraft: ...

    async def delete(self, account_id: str, draft_id: int) -> None: ...

    async def close(self) -> None: ...

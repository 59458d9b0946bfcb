"""DraftApplicationService — SOAP draft CRUD for one account. Drafts cost no credits."""

from src.mn_common.errors import DraftNotFoundError
from src.mn_draft.application.schemas import (
    DraftListResponse,
    DraftResponse,
    SaveDraftRequest,
    UpdateDraftRequest,
)
from src.mn_draft.domain.repository import DraftRepositoryProtocol


class DraftApplicationService:
    def __init__(self, repo: DraftRepositoryProtocol) -> None:
        self._repo = repo

    async def create(self, account_id: str, body: SaveDraftRequest) -> DraftResponse:
        draft = await self._repo.create(account_id, body.model_dump(mode="json"))
        return DraftResponse.from_domain(draft)

    async def get(self, account_id: str, draft_id: int) -> DraftResponse:
        draft = await self._repo.get(account_id, draft_id)
        if draft is None:
            raise DraftNotFoundError(draft_id)
        return DraftResponse.from_domain(draft)

    async def list_drafts(self, account_id: str) -> DraftListResponse:
        drafts = await self._repo.list_for_account(account_id)
        return DraftListResponse(items=[DraftResponse.from_domain(d) for d in drafts])

    async def update(
        self, account_id: str, draft_id: int, body: UpdateDraftRequest
    ) -> DraftResponse:
        changes = body.model_dump(mode="json", exclude_unset=True)
        draft = await self._repo.update(account_id, draft_id, changes)
        return DraftResponse.from_domain(draft)

    async def delete(self, account_id: str, draft_id: int) -> None:
        await self._repo.delete(account_id, draft_id)

"""mn_draft REST API — SOAP note drafts, scoped to the calling account."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.mn_common.response import ApiResponse, success_response
from src.mn_draft.application.schemas import SaveDraftRequest, UpdateDraftRequest
from src.mn_draft.application.service import DraftApplicationService
from src.mn_draft.domain.repository import DraftRepositoryProtocol
from src.mn_gateway.dependencies import get_account_id, get_draft_repository, get_request_id

router = APIRouter(prefix="/drafts", tags=["drafts"])


def _service(
    repo: Annotated[DraftRepositoryProtocol, Depends(get_draft_repository)],
) -> DraftApplicationService:
    return DraftApplicationService(repo)


@router.post("")
async def create_draft(
    body: SaveDraftRequest,
    account_id: Annotated[str, Depends(get_account_id)],
    service: Annotated[DraftApplicationService, Depends(_service)],
    request: Request,
) -> ApiResponse:
    data = await service.create(account_id, body)
    return success_response(data.model_dump(), get_request_id(request))


@router.get("")
async def list_drafts(
    account_id: Annotated[str, Depends(get_account_id)],
    service: Annotated[DraftApplicationService, Depends(_service)],
    request: Request,
) -> ApiResponse:
    data = await service.list_drafts(account_id)
    return success_response(data.model_dump(), get_request_id(request))


@router.get("/{draft_id}")
async def get_draft(
    draft_id: int,
    account_id: Annotated[str, Depends(get_account_id)],
    service: Annotated[DraftApplicationService, Depends(_service)],
    request: Request,
) -> ApiResponse:
    data = await service.get(account_id, draft_id)
    return success_response(data.model_dump(), get_request_id(request))


@router.put("/{draft_id}")
async def update_draft(
    draft_id: int,
    body: UpdateDraftRequest,
    account_id: Annotated[str, Depends(get_account_id)],
    service: Annotated[DraftApplicationService, Depends(_service)],
    request: Request,
) -> ApiResponse:
    data = await service.update(account_id, draft_id, body)
    return success_response(data.model_dump(), get_request_id(request))


@router.delete("/{draft_id}")
async def delete_draft(
    draft_id: int,
    account_id: Annotated[str, Depends(get_account_id)],
    service: Annotated[DraftApplicationService, Depends(_service)],
    request: Request,
) -> ApiResponse:
    await service.delete(account_id, draft_id)
    return success_response({"id": draft_id, "deleted": True}, get_request_id(request))

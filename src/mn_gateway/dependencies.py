"""FastAPI dependencies shared by every router.

Usage in any router:
    from src.mn_gateway.dependencies import get_account_id, get_ledger

    @router.get("/credits")
    async def balance(
        account_id: Annotated[str, Depends(get_account_id)],
        ledger: Annotated[CreditLedgerProtocol, Depends(get_ledger)],
    ): ...

There is no authentication layer: the account id arrives in the X-Account-Id
header from whatever session layer fronts the service, and falls back to the
configured default account.
"""

from typing import Annotated

from fastapi import Header, Request

from config.settings import settings
from src.mn_common.errors import GenerationUnavailableError, InternalError
from src.mn_credit.domain.ledger import CreditLedgerProtocol
from src.mn_draft.domain.repository import DraftRepositoryProtocol
from src.mn_generation.domain.provider import TextGenerationProvider
from src.mn_generation.domain.repository import ReportRepositoryProtocol


async def get_account_id(
    x_account_id: Annotated[str | None, Header(max_length=64)] = None,
) -> str:
    if x_account_id is None or not x_account_id.strip():
        return settings.DEFAULT_ACCOUNT_ID
    return x_account_id.strip()


async def get_ledger(request: Request) -> CreditLedgerProtocol:
    ledger: CreditLedgerProtocol | None = getattr(request.app.state, "ledger", None)
    if ledger is None:
        raise InternalError("Credit ledger is not initialised")
    return ledger


async def get_draft_repository(request: Request) -> DraftRepositoryProtocol:
    repo: DraftRepositoryProtocol | None = getattr(request.app.state, "draft_repository", None)
    if repo is None:
        raise InternalError("Draft store is not initialised")
    return repo


async def get_report_repository(request: Request) -> ReportRepositoryProtocol:
    repo: ReportRepositoryProtocol | None = getattr(
        request.app.state, "report_repository", None
    )
    if repo is None:
        raise InternalError("Report store is not initialised")
    return repo


async def get_generation_provider(request: Request) -> TextGenerationProvider:
    provider: TextGenerationProvider | None = getattr(
        request.app.state, "generation_provider", None
    )
    if provider is None:
        raise GenerationUnavailableError()
    return provider


def get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)

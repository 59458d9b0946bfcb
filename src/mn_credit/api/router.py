"""mn_credit REST API — balance, history, packages, simulated purchase."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.mn_common.response import ApiResponse, success_response
from src.mn_credit.application.schemas import PurchaseRequest
from src.mn_credit.application.service import CreditApplicationService
from src.mn_credit.domain.ledger import CreditLedgerProtocol
from src.mn_gateway.dependencies import get_account_id, get_ledger, get_request_id

router = APIRouter(prefix="/credits", tags=["credits"])


def _service(
    ledger: Annotated[CreditLedgerProtocol, Depends(get_ledger)],
) -> CreditApplicationService:
    return CreditApplicationService(ledger)


@router.get("")
async def get_balance(
    account_id: Annotated[str, Depends(get_account_id)],
    service: Annotated[CreditApplicationService, Depends(_service)],
    request: Request,
) -> ApiResponse:
    data = await service.get_balance(account_id)
    return success_response(data.model_dump(), get_request_id(request))


@router.get("/transactions")
async def list_transactions(
    account_id: Annotated[str, Depends(get_account_id)],
    service: Annotated[CreditApplicationService, Depends(_service)],
    request: Request,
) -> ApiResponse:
    data = await service.list_transactions(account_id)
    return success_response(data.model_dump(), get_request_id(request))


@router.get("/packages")
async def list_packages(
    service: Annotated[CreditApplicationService, Depends(_service)],
    request: Request,
) -> ApiResponse:
    return success_response(service.list_packages().model_dump(), get_request_id(request))


@router.post("/purchase")
async def purchase(
    body: PurchaseRequest,
    account_id: Annotated[str, Depends(get_account_id)],
    service: Annotated[CreditApplicationService, Depends(_service)],
    request: Request,
) -> ApiResponse:
    data = await service.purchase(account_id, body.package)
    return success_response(data.model_dump(), get_request_id(request))

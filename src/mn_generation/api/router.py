"""mn_generation REST API — each generation call costs one credit."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.mn_common.response import ApiResponse, success_response
from src.mn_credit.domain.ledger import CreditLedgerProtocol
from src.mn_gateway.dependencies import (
    get_account_id,
    get_generation_provider,
    get_ledger,
    get_report_repository,
    get_request_id,
)
from src.mn_generation.application.schemas import (
    GenerateReportRequest,
    GenerateSectionRequest,
    ReportItem,
    ReportListResponse,
    ReviewReportRequest,
)
from src.mn_generation.application.service import GenerationApplicationService
from src.mn_generation.domain.provider import TextGenerationProvider
from src.mn_generation.domain.repository import ReportRepositoryProtocol

router = APIRouter(tags=["generation"])


def _service(
    ledger: Annotated[CreditLedgerProtocol, Depends(get_ledger)],
    provider: Annotated[TextGenerationProvider, Depends(get_generation_provider)],
    reports: Annotated[ReportRepositoryProtocol, Depends(get_report_repository)],
) -> GenerationApplicationService:
    return GenerationApplicationService(ledger, provider, reports)


@router.post("/generate-section")
async def generate_section(
    body: GenerateSectionRequest,
    account_id: Annotated[str, Depends(get_account_id)],
    service: Annotated[GenerationApplicationService, Depends(_service)],
    request: Request,
) -> ApiResponse:
    data = await service.generate_section(
        account_id,
        body.section.value,
        body.content,
        body.patient_info,
        body.report_type.value,
    )
    return success_response(data.model_dump(), get_request_id(request))


@router.post("/review")
async def review_report(
    body: ReviewReportRequest,
    account_id: Annotated[str, Depends(get_account_id)],
    service: Annotated[GenerationApplicationService, Depends(_service)],
    request: Request,
) -> ApiResponse:
    data = await service.review_report(
        account_id, body.subjective, body.objective, body.assessment, body.plan
    )
    return success_response(data.model_dump(), get_request_id(request))


@router.post("/generate")
async def generate_report(
    body: GenerateReportRequest,
    account_id: Annotated[str, Depends(get_account_id)],
    service: Annotated[GenerationApplicationService, Depends(_service)],
    request: Request,
) -> ApiResponse:
    data = await service.generate_report(account_id, body.report_type.value, body.patient_notes)
    return success_response(data.model_dump(), get_request_id(request))


@router.get("/reports")
async def list_reports(
    account_id: Annotated[str, Depends(get_account_id)],
    reports: Annotated[ReportRepositoryProtocol, Depends(get_report_repository)],
    request: Request,
) -> ApiResponse:
    # Reading saved reports needs no provider and costs nothing
    items = await reports.list_for_account(account_id)
    data = ReportListResponse(items=[ReportItem.from_domain(r) for r in items])
    return success_response(data.model_dump(), get_request_id(request))

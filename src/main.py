"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
      or: python -m src.main   (uvloop event loop)
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from config.settings import settings
from src.mn_common.database import build_engine
from src.mn_common.errors import AppError, InternalError, RequestValidationFailedError
from src.mn_common.response import error_response
from src.mn_credit.api.router import router as credit_router
from src.mn_credit.domain.ledger import CreditLedgerProtocol
from src.mn_credit.infrastructure.memory import InMemoryCreditLedger
from src.mn_credit.infrastructure.persistence import SqlCreditLedger
from src.mn_draft.api.router import router as draft_router
from src.mn_draft.domain.repository import DraftRepositoryProtocol
from src.mn_draft.infrastructure.memory import InMemoryDraftRepository
from src.mn_draft.infrastructure.persistence import SqlDraftRepository
from src.mn_gateway.dependencies import get_request_id
from src.mn_gateway.middleware.request_log import RequestLogMiddleware
from src.mn_generation.api.router import router as generation_router
from src.mn_generation.domain.provider import TextGenerationProvider
from src.mn_generation.domain.repository import ReportRepositoryProtocol
from src.mn_generation.infrastructure.anthropic_provider import AnthropicTextProvider
from src.mn_generation.infrastructure.memory import InMemoryReportRepository
from src.mn_generation.infrastructure.persistence import SqlReportRepository

logger = logging.getLogger("mn.app")

VERSION = "0.1.0"

_STORES = ("ledger", "draft_repository", "report_repository")


async def _connect() -> AsyncEngine:
    engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return engine


def _build_ledger(engine: AsyncEngine | None) -> CreditLedgerProtocol:
    if engine is None:
        return InMemoryCreditLedger(settings.STARTING_CREDITS)
    return SqlCreditLedger(engine, settings.STARTING_CREDITS)


def _build_draft_repository(engine: AsyncEngine | None) -> DraftRepositoryProtocol:
    if engine is None:
        return InMemoryDraftRepository()
    return SqlDraftRepository(engine)


def _build_report_repository(engine: AsyncEngine | None) -> ReportRepositoryProtocol:
    if engine is None:
        return InMemoryReportRepository()
    return SqlReportRepository(engine)


def _build_provider() -> TextGenerationProvider | None:
    if not settings.ANTHROPIC_API_KEY:
        logger.warning("ANTHROPIC_API_KEY not set; AI endpoints will answer 503")
        return None
    return AnthropicTextProvider.from_api_key(
        settings.ANTHROPIC_API_KEY,
        settings.ANTHROPIC_MODEL,
        settings.GENERATION_MAX_TOKENS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: build whatever was not injected. Shutdown: close what we built."""
    logging.basicConfig(level=settings.LOG_LEVEL)
    owned: list[Any] = []

    engine: AsyncEngine | None = None
    if any(getattr(app.state, name) is None for name in _STORES):
        if settings.STORAGE_BACKEND == "memory":
            logger.warning("using in-memory storage; all data is lost on restart")
        else:
            engine = await _connect()

    # SQL stores share one engine; each close() disposes it, which is idempotent
    if app.state.ledger is None:
        app.state.ledger = _build_ledger(engine)
        owned.append(app.state.ledger)
    if app.state.draft_repository is None:
        app.state.draft_repository = _build_draft_repository(engine)
        owned.append(app.state.draft_repository)
    if app.state.report_repository is None:
        app.state.report_repository = _build_report_repository(engine)
        owned.append(app.state.report_repository)
    if app.state.generation_provider is None:
        app.state.generation_provider = _build_provider()
        if app.state.generation_provider is not None:
            owned.append(app.state.generation_provider)
    yield
    for resource in owned:
        await resource.close()


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, get_request_id(request))
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        where = ".".join(str(part) for part in first.get("loc", ()))
        detail = f"{where}: {first.get('msg', 'invalid value')}"
    else:
        detail = "malformed request"
    return await app_error_handler(request, RequestValidationFailedError(detail))


async def persistence_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("persistence failure on %s %s", request.method, request.url.path)
    return await app_error_handler(request, InternalError())


def create_app(
    ledger: CreditLedgerProtocol | None = None,
    provider: TextGenerationProvider | None = None,
    drafts: DraftRepositoryProtocol | None = None,
    reports: ReportRepositoryProtocol | None = None,
) -> FastAPI:
    """Build the application. Injected collaborators are used as-is and not closed."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.ledger = ledger
    app.state.generation_provider = provider
    app.state.draft_repository = drafts
    app.state.report_repository = reports

    app.add_middleware(RequestLogMiddleware)
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, persistence_error_handler)  # type: ignore[arg-type]

    app.include_router(credit_router, prefix="/api/v1")
    app.include_router(generation_router, prefix="/api/v1")
    app.include_router(draft_router, prefix="/api/v1")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": VERSION}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("src.main:app", host="0.0.0.0", port=8000, loop="uvloop")

"""FastAPI application for the conversation core."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Optional, Union

import uvicorn
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError as BodyValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from travel_advisor import __version__
from travel_advisor.api.schemas import (
    AssistantMessageResponse,
    AssistantRequest,
    ErrorResponse,
    HealthResponse,
    MapRecommendationRequest,
    RecommendationResponse,
)
from travel_advisor.application.context import make_app_context
from travel_advisor.application.contracts import TurnResult
from travel_advisor.application.conversation import ConversationOrchestrator
from travel_advisor.config.settings import AdvisorSettings, load_settings
from travel_advisor.domain.exceptions import RequestValidationError
from travel_advisor.security.key_manager import get_key_manager
from travel_advisor.shared.exceptions import AdvisorError

_api_logger = logging.getLogger("travel-advisor.api")

load_dotenv()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store"
        return response


def _safe_log_exception(context: str, exc: Exception) -> None:
    _api_logger.error("%s: %s", context, get_key_manager().scrub_text(f"{type(exc).__name__}: {exc}"))


def _error_response(error: AdvisorError) -> JSONResponse:
    return JSONResponse(status_code=error.http_status, content=error.to_payload())


def _turn_response(result: TurnResult) -> JSONResponse:
    return JSONResponse(status_code=result.http_status, content=result.to_payload())


_ERROR_RESPONSES: dict[Union[int, str], dict[str, Any]] = {
    code: {"model": ErrorResponse} for code in (400, 429, 500, 502, 503)
}


def get_orchestrator(request: Request) -> ConversationOrchestrator:
    return request.app.state.context.orchestrator


def create_app(settings: Optional[AdvisorSettings] = None) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.context = make_app_context(settings)
        try:
            yield
        finally:
            await app.state.context.aclose()

    app = FastAPI(
        title="travel-advisor",
        version=__version__,
        docs_url="/docs" if settings.enable_docs else None,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(BodyValidationError)
    async def body_validation_handler(request: Request, exc: BodyValidationError) -> JSONResponse:
        detail = exc.errors()[0] if exc.errors() else {}
        _api_logger.warning("rejected request body: %s", detail.get("msg", "invalid"))
        return _error_response(RequestValidationError(str(detail.get("msg", "invalid body"))))

    @app.exception_handler(AdvisorError)
    async def advisor_error_handler(request: Request, exc: AdvisorError) -> JSONResponse:
        _safe_log_exception(f"{request.url.path} failed", exc)
        return _error_response(exc)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        _safe_log_exception(f"{request.url.path} crashed", exc)
        return _error_response(AdvisorError())

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(status="ok")

    @app.post(
        "/api/assistant",
        response_model=Union[AssistantMessageResponse, RecommendationResponse],
        responses=_ERROR_RESPONSES,
    )
    async def assistant(
        req: AssistantRequest,
        orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
    ):
        """Next assistant turn: a question, or 2-3 travel plans once enough is known."""
        result = await orchestrator.handle_turn(req.model_dump())
        return _turn_response(result)

    @app.post(
        "/api/map-recommendations",
        response_model=RecommendationResponse,
        responses=_ERROR_RESPONSES,
    )
    async def map_recommendations(
        req: MapRecommendationRequest,
        orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
    ):
        """Travel plans centered on a location picked on the map."""
        result = await orchestrator.handle_geo_turn(req.model_dump(by_alias=True))
        return _turn_response(result)

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn (HOST / PORT from the environment)."""
    uvicorn.run(
        "travel_advisor.api.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )

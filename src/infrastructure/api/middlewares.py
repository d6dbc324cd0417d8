from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.cors import CORSMiddleware

from src.domain.errors import (
    AuthError,
    BackendError,
    MalformedRecordError,
    RecordNotFoundError,
    ValidationError,
)
from src.infrastructure.api.dependencies import LoginRequired

logger = logging.getLogger(__name__)


def add_default_middlewares(app: FastAPI) -> None:
    # CORS: the portfolio frontend runs on its own origin during development
    env = os.getenv("ENV", "development")

    if env in ("development", "staging"):
        allowed_origins = [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]
    else:
        allowed_origins = [
            origin.strip()
            for origin in os.getenv("ALLOWED_ORIGINS", "").split(",")
            if origin.strip()
        ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def add_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to responses scoped to the failing request."""

    @app.exception_handler(LoginRequired)
    async def login_required(request: Request, exc: LoginRequired):
        return RedirectResponse(url=exc.redirect_to, status_code=status.HTTP_303_SEE_OTHER)

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.exception_handler(RecordNotFoundError)
    async def not_found(request: Request, exc: RecordNotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

    @app.exception_handler(AuthError)
    async def auth_error(request: Request, exc: AuthError):
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": str(exc)})

    @app.exception_handler(BackendError)
    async def backend_error(request: Request, exc: BackendError):
        logger.error("Backend call failed on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})

    @app.exception_handler(MalformedRecordError)
    async def malformed_record(request: Request, exc: MalformedRecordError):
        logger.error("Malformed record on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": f"Malformed record: {exc}"}
        )

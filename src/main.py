from __future__ import annotations

import logging
import os
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from src.application.dtos.common_dto import HealthResponse, RootResponse
from src.infrastructure.api.middlewares import add_default_middlewares, add_exception_handlers
from src.infrastructure.api.routes.admin_routes import router as admin_router
from src.infrastructure.api.routes.auth_routes import router as auth_router
from src.infrastructure.api.routes.public_routes import router as public_router
from src.infrastructure.storage.supabase_storage import LOCAL_URL_PREFIX


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Portfolio Backend",
        version="0.1.0",
        description="""
        ## Portfolio Backend API

        FastAPI backend for a personal portfolio site, with Supabase for auth,
        database, and storage.

        ### Features
        - **Public pages**: home, about, projects (search + technology filter), contact form
        - **Admin area**: profile editor, project manager with image upload, contact inbox
        - **Session guard**: every admin page redirects to `/admin/login` without a session

        ### Authentication
        Sign in with `POST /admin/login`. Admin pages accept the session cookie it
        sets, or the returned token as a Bearer token:
        ```
        Authorization: Bearer your-access-token
        ```

        ### Error Responses
        - **400 Bad Request**: Form validation failed; `detail` is the message to show
        - **401 Unauthorized**: Sign-in rejected
        - **303 See Other**: Admin page requested without a session
        - **404 Not Found**: Record does not exist
        - **502 Bad Gateway**: The backing service rejected the call; `detail` carries its message
        """,
    )
    add_default_middlewares(app)
    add_exception_handlers(app)

    @app.get(
        "/",
        response_model=RootResponse,
        summary="API Root",
        description="Get basic information about the Portfolio API",
        response_description="API information including status and version",
    )
    def root():
        """Get API root information."""
        return RootResponse(status="ok", service="portfolio-backend", version=app.version)

    @app.get(
        "/health",
        response_model=HealthResponse,
        summary="Health Check",
        description="Check if the API service is running and healthy",
    )
    def health():
        """Check API health status."""
        return HealthResponse(status="healthy")

    app.include_router(public_router)
    app.include_router(auth_router)
    app.include_router(admin_router)

    # uploaded images are served from disk when Supabase Storage is not in use
    if os.getenv("SUPABASE_DISABLED", "0") == "1":
        local_dir = Path(os.getenv("SUPABASE_STORAGE_LOCAL_DIR", ".local_storage"))
        app.mount(
            LOCAL_URL_PREFIX,
            StaticFiles(directory=local_dir, check_dir=False),
            name="local-storage",
        )
    return app


app = create_app()

"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError

from modules.auth.routes import router as auth_router
from modules.earnings.routes import router as works_router
from modules.funds.routes import cash_outs_router, deposits_router
from modules.plans.routes import router as plans_router
from shared.config import get_settings
from shared.exceptions import AppError, ExternalServiceError

from .models.errors import ErrorResponse, status_for
from .routes import health, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render application errors as JSON with a matching status code."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def database_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Report unhandled PostgREST errors as a failed upstream call."""
    logger.error(
        "Supabase error on %s %s: %s (%s)",
        request.method, request.url.path, exc.message, exc.code,
    )
    error = ExternalServiceError("Database request failed", service="supabase", code="DATABASE_ERROR")
    return await app_error_handler(request, error)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Ad-click earning service with plan entitlements",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(APIError, database_error_handler)

    error_responses = {code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 409)}

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"], responses=error_responses)
    app.include_router(users.router, prefix="/api/user", tags=["user"], responses=error_responses)
    app.include_router(plans_router, prefix="/api/plan", tags=["plans"], responses=error_responses)
    app.include_router(works_router, prefix="/api/work", tags=["works"], responses=error_responses)
    app.include_router(deposits_router, prefix="/api/deposit", tags=["funds"], responses=error_responses)
    app.include_router(cash_outs_router, prefix="/api/cashOut", tags=["funds"], responses=error_responses)

    return app


# Application instance for uvicorn
app = create_app()

"""
FastAPI application entry point.

Configures middleware, routes, and exception handlers.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from internal_portal.core.config import settings
from internal_portal.core.dependencies import get_current_internal_user
from internal_portal.core.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Starting internal portal API in %s mode", settings.ENVIRONMENT)
    yield
    logger.info("Shutting down internal portal API")


app = FastAPI(
    title="Internal Portal API",
    description="Staff admin panel for organization API access and user accounts",
    version="1.0.0",
    docs_url="/api/docs" if settings.DEBUG else None,
    redoc_url="/api/redoc" if settings.DEBUG else None,
    openapi_url="/api/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    if settings.DEBUG:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": {
                    "code": "INTERNAL_SERVER_ERROR",
                    "message": str(exc),
                    "type": type(exc).__name__,
                }
            },
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred",
            }
        },
    )


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    return {
        "status": "ok",
        "environment": settings.ENVIRONMENT,
        "version": "1.0.0",
    }


from internal_portal.routers import (  # noqa: E402
    auth,
    organizations,
    registered_organizations,
    sign_up,
    users,
)

internal = settings.API_V1_PREFIX + "/internal"
staff_only = [Depends(get_current_internal_user)]

app.include_router(auth.router, prefix=f"{internal}/auth", tags=["Auth"])
app.include_router(
    organizations.router,
    prefix=f"{internal}/organizations",
    tags=["Organizations"],
    dependencies=staff_only,
)
app.include_router(
    registered_organizations.router,
    prefix=f"{internal}/organizations/{{organization_id}}/registered_organizations",
    tags=["Registered Organizations"],
    dependencies=staff_only,
)
app.include_router(users.router, prefix=f"{internal}/users", tags=["Users"], dependencies=staff_only)
app.include_router(sign_up.router, prefix=f"{settings.API_V1_PREFIX}/users", tags=["Sign-up"])

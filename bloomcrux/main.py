"""BloomCrux FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from bloomcrux.config import configure_logging, get_settings
from bloomcrux.database import dispose_engine, initialize_database
from bloomcrux.domain.common.exceptions import (
    AuthorizationError,
    DomainError,
    EntityNotFoundError,
)
from bloomcrux.exceptions import BloomCruxError
from bloomcrux.infrastructure.economy.routers import cosmetics, economy
from bloomcrux.infrastructure.identity.routers import users
from bloomcrux.infrastructure.learning.routers import mastery, quest
from bloomcrux.infrastructure.library.routers import cards, decks, folders

settings = get_settings()
configure_logging(settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the database engine on startup and dispose it on shutdown."""
    initialize_database(settings)
    logger.info("application_started", environment=settings.ENVIRONMENT)
    yield
    dispose_engine()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BloomCruxError)
async def bloomcrux_error_handler(_request: Request, exc: BloomCruxError) -> JSONResponse:
    """Render application errors with their own status code."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(_request: Request, exc: DomainError) -> JSONResponse:
    """Map domain errors onto HTTP status codes."""
    if isinstance(exc, EntityNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, AuthorizationError):
        status_code = status.HTTP_403_FORBIDDEN
    else:
        status_code = status.HTTP_400_BAD_REQUEST
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Report backend failures as 500, passing the database message through."""
    logger.error("database_error", error=str(exc), exc_info=exc)
    message = str(getattr(exc, "orig", None) or exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": message}
    )


for router in (
    users.router,
    folders.router,
    decks.router,
    cards.router,
    mastery.router,
    quest.router,
    economy.router,
    cosmetics.router,
):
    app.include_router(router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, Any]:
    return {"message": "Welcome to BloomCrux API"}


@app.get("/health")
def health() -> dict[str, Any]:
    return {"status": "healthy"}


@app.get(f"{settings.API_V1_PREFIX}/")
def api_root() -> dict[str, Any]:
    return {
        "message": "BloomCrux API v1",
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_PREFIX}/docs",
    }

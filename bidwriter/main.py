"""
BidWriter FastAPI Application
Main entry point for the grant proposal writing API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bidwriter.api import budgets, compliance, funders, health, literature, proposals, writing
from bidwriter.core.config import settings
from bidwriter.database import close_db, init_db
from bidwriter.services.literature_search import literature_search_service

# =============================================================================
# Logging Configuration
# =============================================================================

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handle application startup and shutdown events.

    Startup:
    - Create database tables if needed

    Shutdown:
    - Close the literature search HTTP client
    - Close database connections
    """
    # Startup
    logger.info(f"Starting {settings.app_name} API...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Version: {settings.app_version}")

    await init_db()
    logger.info("Database initialized successfully")

    if not settings.anthropic_api_key:
        logger.warning("ANTHROPIC_API_KEY not set - AI generation endpoints will return 503")

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name} API...")

    await literature_search_service.close()
    await close_db()
    logger.info("Database connections closed")


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title=f"{settings.app_name} API",
    description="""
    Grant Proposal Writing API

    ## Features

    - **Budget Calculator**: Itemised budgets with full economic costing
    - **Compliance Checker**: Checks proposals against funder scheme rules
    - **Proposals**: Save, version, import and export proposal drafts
    - **AI Writing**: Streamed drafting, polishing and literature reviews
    - **Literature Search**: Paper search via Semantic Scholar
    """,
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
    lifespan=lifespan,
)


# =============================================================================
# CORS Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code,
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")

    # Don't expose internal errors in production
    detail = str(exc) if settings.debug else "Internal server error"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "message": detail,
            "status_code": 500,
        },
    )


# =============================================================================
# API Routers
# =============================================================================

app.include_router(health.router)
app.include_router(budgets.router)
app.include_router(compliance.router)
app.include_router(funders.router)
app.include_router(proposals.router)
app.include_router(writing.router)
app.include_router(literature.router)

"""FastAPI application entry point.

Read API behind the woodshop gallery: filtered products, product detail and
the wood/item type lookups.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from woodshop import __version__
from woodshop.api.routes.gallery import router as gallery_router
from woodshop.api.routes.health import router as health_router
from woodshop.config import settings
from woodshop.infra.database import close_db_engine, verify_db_connection
from woodshop.infra.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from woodshop.infra.storage import get_image_resolver
from woodshop.schemas.common import ErrorResponse

# Setup logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Startup verifies the database and configures the image resolver;
    shutdown disposes of the engine.
    """
    logger.info(
        "Woodshop API starting",
        environment=settings.environment,
        version=__version__,
    )

    get_image_resolver()

    db_ok = await verify_db_connection()
    if not db_ok:
        logger.warning("Database connection failed - gallery will render empty until it recovers")

    yield

    logger.info("Woodshop API shutting down")
    await close_db_engine()
    logger.info("Cleanup complete")


app = FastAPI(
    title="Haymarket Woodshop API",
    description="Product gallery and catalog lookups for The Haymarket Woodshop",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment == "dev" else None,
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "dev" else settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Bind the request to the log context and log its status."""
    bind_request_context(request.method, request.url.path, request.url.query)
    try:
        response = await call_next(request)
        logger.info("Request handled", status_code=response.status_code)
        return response
    finally:
        clear_request_context()


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with a structured error body."""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        exc_info=True,
    )

    body = ErrorResponse(error="Internal server error", error_type=type(exc).__name__)
    return JSONResponse(status_code=500, content=body.model_dump())


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router, tags=["Health"])
app.include_router(gallery_router, tags=["Gallery"])


@app.get("/")
async def root() -> dict:
    """Root endpoint - basic service info."""
    return {
        "service": "Haymarket Woodshop API",
        "version": __version__,
        "environment": settings.environment,
    }

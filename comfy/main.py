"""Comfy API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, error rendering and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from comfy.api.brands import router as brands_router
from comfy.api.categories import router as categories_router
from comfy.api.health import router as health_router
from comfy.api.middleware import setup_middleware
from comfy.api.products import router as products_router
from comfy.domain.exceptions import DomainError
from comfy.infrastructure.config import settings
from comfy.infrastructure.database import engine
from comfy.infrastructure.logging import configure_logging

configure_logging(settings)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting Comfy API",
        version=settings.api_version,
        debug=settings.debug,
        upload_dir=settings.upload_dir,
    )

    yield

    logger.info("Shutting down Comfy API")
    await engine.dispose()


app = FastAPI(
    title="Comfy API",
    description="E-commerce catalog backend",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, admin key auth)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)
app.include_router(brands_router)
app.include_router(categories_router)


# ============================================================================
# Exception Handlers
# ============================================================================


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render domain errors with their declared status."""
    logger.info(
        "Domain error",
        path=request.url.path,
        method=request.method,
        status_code=exc.status_code,
        error=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"msg": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle HTTP exceptions, including unmatched routes."""
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = "not found"
    else:
        message = str(exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content={"msg": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as a single message."""
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(status_code=422, content={"msg": message})


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions, including store failures."""
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )

    return JSONResponse(status_code=500, content={"msg": str(exc)})

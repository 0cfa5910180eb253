"""FastAPI application entry point for the market data gateway."""

import logging
from contextlib import asynccontextmanager
from typing import Union

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cryptosim.config.settings import get_settings
from cryptosim.config.logging_config import setup_logging
from cryptosim.api.deps import reset_market_data_service
from cryptosim.api.routers import market_router
from cryptosim.core.exceptions import (
    AppError,
    RateLimitedError,
    UpstreamFailureError,
    InvalidUpstreamDataError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    setup_logging()
    yield
    reset_market_data_service()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Caching proxy for live cryptocurrency market data",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(market_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=400,
        content={"error": exc.code, "message": exc.message},
    )


@app.exception_handler(RateLimitedError)
async def rate_limited_handler(request: Request, exc: RateLimitedError) -> JSONResponse:
    """Upstream is throttling and there is no cached copy to fall back on."""
    return JSONResponse(
        status_code=429,
        content={"error": exc.message, "retryAfter": exc.retry_after},
        headers={"Retry-After": str(exc.retry_after)},
    )


@app.exception_handler(UpstreamFailureError)
@app.exception_handler(InvalidUpstreamDataError)
async def upstream_error_handler(
    request: Request,
    exc: Union[UpstreamFailureError, InvalidUpstreamDataError],
) -> JSONResponse:
    """Upstream failed or answered with unusable data."""
    content = {"error": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    return JSONResponse(status_code=500, content=content)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort so a single bad request still gets a JSON body."""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }

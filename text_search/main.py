"""Main FastAPI application for the Text Search Toolkit."""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import structlog

from .api import (
    search_router,
    text_router,
    health_router,
    metrics_router,
)
from .config import get_settings
from .core.dispatch import Algorithm
from .engine_instance import search_engine
from .logging_config import configure_logging
from .models.response import ErrorResponse

settings = get_settings()
configure_logging(settings)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info(
        "Starting Text Search service",
        version=settings.app_version,
        default_algorithm=search_engine.default_algorithm.value,
        cache_enabled=search_engine.enable_cache,
        cache_max_size=search_engine.cache_max_size,
    )

    yield

    # Shutdown
    logger.info("Shutting down Text Search service", stats=search_engine.get_stats())


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Exact-match text search with KMP, Z, Rabin-Karp, Boyer-Moore, Horspool and Aho-Corasick",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    """Log all HTTP requests."""
    start_time = time.time()

    logger.info(
        "Request started",
        method=request.method,
        url=str(request.url),
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent")
    )

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        "Request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code,
        process_time_ms=round(process_time * 1000, 2)
    )

    return response


# Invalid input that escaped a router
@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Turn invalid arguments into 400 responses."""
    logger.warning(
        "Invalid request",
        method=request.method,
        url=str(request.url),
        error=str(exc)
    )

    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error=type(exc).__name__,
            message=str(exc)
        ).model_dump(mode="json")
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle global exceptions."""
    logger.error(
        "Unhandled exception",
        method=request.method,
        url=str(request.url),
        error=str(exc),
        exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            message="An unexpected error occurred",
            details={"exception": str(exc)} if settings.debug else None
        ).model_dump(mode="json")
    )


# Include API routers
app.include_router(search_router)
app.include_router(text_router)
app.include_router(health_router)
app.include_router(metrics_router)


# Root endpoint
@app.get("/", summary="Root endpoint", description="Get basic information about the API")
async def root() -> dict:
    """Root endpoint with basic API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Exact-match text search service",
        "docs_url": "/docs",
        "health_url": "/api/v1/health",
        "status": "running"
    }


# API info endpoint
@app.get("/api", summary="API information", description="Get detailed API information")
async def api_info() -> dict:
    """Get detailed API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "endpoints": {
            "algorithms": "/api/v1/algorithms",
            "search": "/api/v1/search",
            "search_get": "/api/v1/search/{algorithm}?text=...&pattern=...",
            "multi_search": "/api/v1/search/multi",
            "compare": "/api/v1/search/compare",
            "regex": "/api/v1/regex/{find,replace,count}",
            "transform": "/api/v1/transform",
            "health": "/api/v1/health",
            "metrics": "/api/v1/metrics"
        },
        "algorithms": list(Algorithm.names()),
        "features": [
            "Five single-pattern exact matchers with identical results",
            "Overlapping occurrences reported",
            "Aho-Corasick multi-pattern search with automaton caching",
            "Plain text, hex and Base64 payloads",
            "Regex find/replace/count and basic string transforms"
        ],
        "limits": {
            "max_text_length": settings.max_text_length,
            "max_pattern_length": settings.max_pattern_length,
            "max_patterns": settings.max_patterns,
            "max_matches": settings.max_matches
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "text_search.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level=settings.log_level.lower()
    )

"""Metrics and monitoring API endpoints."""

import psutil
from datetime import datetime

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from ..models.response import MetricsResponse
from ..config import get_settings

router = APIRouter(prefix="/api/v1", tags=["metrics"])
settings = get_settings()

# Import the global search engine instance
from ..engine_instance import search_engine


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Get performance metrics",
    description="Get performance metrics for the search engine"
)
async def get_metrics() -> MetricsResponse:
    """
    Get performance metrics for the search engine.

    Rates are reported as percentages.
    """
    try:
        stats = search_engine.get_stats()

        # Get system memory usage
        memory_info = psutil.virtual_memory()
        memory_usage_mb = memory_info.used / (1024 * 1024)  # Convert to MB

        return MetricsResponse(
            total_queries=stats.get("total_queries", 0),
            total_matches=stats.get("total_matches", 0),
            average_response_time_ms=stats.get("average_execution_time_ms", 0.0),
            cache_hit_rate=stats.get("cache_hit_rate", 0.0) * 100,
            error_rate=stats.get("error_rate", 0.0) * 100,
            memory_usage_mb=memory_usage_mb
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get metrics: {str(e)}"
        )


@router.get(
    "/metrics/detailed",
    summary="Get detailed metrics",
    description="Get detailed metrics broken down by query type and algorithm"
)
async def get_detailed_metrics() -> JSONResponse:
    """
    Get detailed metrics broken down by query type and algorithm.

    Also reports process-level resource usage.
    """
    try:
        stats = search_engine.get_stats()

        memory_info = psutil.virtual_memory()
        process = psutil.Process()
        cpu_info = psutil.cpu_percent(interval=None)

        return JSONResponse(
            status_code=200,
            content={
                "query_metrics": {
                    "total_queries": stats.get("total_queries", 0),
                    "single_pattern_queries": stats.get("single_pattern_queries", 0),
                    "multi_pattern_queries": stats.get("multi_pattern_queries", 0),
                    "compare_queries": stats.get("compare_queries", 0),
                    "no_matches": stats.get("no_matches", 0),
                    "no_match_rate": stats.get("no_match_rate", 0.0),
                    "errors": stats.get("errors", 0),
                    "average_response_time_ms": stats.get("average_execution_time_ms", 0.0),
                    "total_execution_time_ms": stats.get("total_execution_time", 0.0)
                },
                "algorithm_usage": stats.get("algorithm_usage", {}),
                "cache_metrics": {
                    "enabled": settings.enable_cache,
                    "cached_automata": stats.get("cached_automata", 0),
                    "cache_hits": stats.get("cache_hits", 0),
                    "cache_misses": stats.get("cache_misses", 0),
                    "cache_hit_rate": stats.get("cache_hit_rate", 0.0)
                },
                "system_metrics": {
                    "memory_usage_mb": memory_info.used / (1024 * 1024),
                    "memory_usage_percent": memory_info.percent,
                    "process_rss_mb": process.memory_info().rss / (1024 * 1024),
                    "cpu_usage_percent": cpu_info,
                    "available_memory_mb": memory_info.available / (1024 * 1024)
                },
                "timestamp": datetime.utcnow().isoformat()
            }
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get detailed metrics: {str(e)}"
        )

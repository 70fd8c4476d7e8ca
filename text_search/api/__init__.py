"""API endpoints for the text search toolkit."""

from .search import router as search_router
from .text import router as text_router
from .health import router as health_router
from .metrics import router as metrics_router

__all__ = [
    "search_router",
    "text_router",
    "health_router",
    "metrics_router",
]

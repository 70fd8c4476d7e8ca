"""Data models for the text search toolkit."""

from .response import (
    MatchResult,
    SearchResponse,
    MultiSearchResponse,
    CompareResponse,
    RegexResponse,
    TransformResponse,
    ErrorResponse,
    HealthResponse,
    MetricsResponse,
)
from .request import (
    SearchRequest,
    MultiSearchRequest,
    CompareRequest,
    RegexRequest,
    ReplaceRequest,
    TransformRequest,
)

__all__ = [
    "MatchResult",
    "SearchResponse",
    "MultiSearchResponse",
    "CompareResponse",
    "RegexResponse",
    "TransformResponse",
    "ErrorResponse",
    "HealthResponse",
    "MetricsResponse",
    "SearchRequest",
    "MultiSearchRequest",
    "CompareRequest",
    "RegexRequest",
    "ReplaceRequest",
    "TransformRequest",
]

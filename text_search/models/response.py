"""Response models for API endpoints."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class MatchResult(BaseModel):
    """Individual match."""

    start: int = Field(..., ge=0, description="Start offset (inclusive)")
    end: int = Field(..., ge=0, description="End offset (exclusive)")
    pattern_id: Optional[int] = Field(None, description="Pattern id for multi-pattern searches")
    matched: Optional[str] = Field(None, description="Matched text (bytes decoded as lossy UTF-8)")


class SearchResponse(BaseModel):
    """Response for single-pattern searches."""

    algorithm: str = Field(..., description="Algorithm used")
    pattern_length: int = Field(..., description="Pattern length in symbols")
    text_length: int = Field(..., description="Text length in symbols")
    total_matches: int = Field(..., description="Total number of occurrences")
    truncated: bool = Field(False, description="Whether matches were cut at the configured limit")
    matches: List[MatchResult] = Field(..., description="Occurrences ordered by start")
    execution_time_ms: float = Field(..., description="Search execution time in milliseconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class MultiSearchResponse(BaseModel):
    """Response for Aho-Corasick multi-pattern searches."""

    total_patterns: int = Field(..., description="Number of patterns in the set")
    text_length: int = Field(..., description="Text length in symbols")
    total_matches: int = Field(..., description="Total number of occurrences")
    truncated: bool = Field(False, description="Whether matches were cut at the configured limit")
    matches: List[MatchResult] = Field(..., description="Occurrences ordered by start, then pattern id")
    counts: List[int] = Field(..., description="Occurrences per pattern id")
    automaton_states: int = Field(..., description="Number of automaton states")
    cache_hit: bool = Field(..., description="Whether the automaton was served from cache")
    execution_time_ms: float = Field(..., description="Search execution time in milliseconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class CompareResponse(BaseModel):
    """Response for running every single-pattern algorithm on the same input."""

    consensus: bool = Field(..., description="Whether all algorithms reported the same spans")
    starts: List[int] = Field(..., description="Start offsets agreed on (first algorithm's if no consensus)")
    counts: Dict[str, int] = Field(..., description="Occurrences per algorithm")
    timings_ms: Dict[str, float] = Field(..., description="Execution time per algorithm")
    disagreeing: List[str] = Field(default_factory=list, description="Algorithms that differ from the first")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class RegexResponse(BaseModel):
    """Response for regex find/replace/count."""

    operation: str = Field(..., description="find, replace or count")
    pattern: str = Field(..., description="Regular expression used")
    result: Any = Field(None, description="Captured group, replaced text or count")
    execution_time_ms: float = Field(..., description="Execution time in milliseconds")


class TransformResponse(BaseModel):
    """Response for string transforms."""

    operation: str = Field(..., description="Transform applied")
    result: Any = Field(..., description="Transformed value")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    uptime: float = Field(..., description="Service uptime in seconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    dependencies: Dict[str, str] = Field(..., description="Component status")


class MetricsResponse(BaseModel):
    """Performance metrics response."""

    total_queries: int = Field(..., description="Total queries processed")
    total_matches: int = Field(..., description="Total matches reported")
    average_response_time_ms: float = Field(..., description="Average response time")
    cache_hit_rate: float = Field(..., description="Automaton cache hit rate percentage")
    error_rate: float = Field(..., description="Error rate percentage")
    memory_usage_mb: float = Field(..., description="Memory usage in MB")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Metrics timestamp")

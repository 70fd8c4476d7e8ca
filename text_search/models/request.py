"""Request models for API endpoints."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.dispatch import Algorithm

PayloadEncoding = Literal["text", "hex", "base64"]


class SearchRequest(BaseModel):
    """Request model for single-pattern searches."""

    text: str = Field(..., description="Text to search")
    pattern: str = Field(..., description="Pattern to find")
    algorithm: Optional[str] = Field(None, description="Algorithm name (defaults to the configured one)")
    encoding: PayloadEncoding = Field(default="text", description="Encoding of text and pattern")
    include_text: bool = Field(default=True, description="Whether to include matched text in results")

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, v: Optional[str]) -> Optional[str]:
        """Validate algorithm name."""
        if v is None:
            return v
        v = v.strip().lower()
        if v not in Algorithm.names():
            raise ValueError(f"Algorithm must be one of: {', '.join(Algorithm.names())}")
        return v


class MultiSearchRequest(BaseModel):
    """Request model for Aho-Corasick searches."""

    text: str = Field(..., description="Text to search")
    patterns: List[str] = Field(..., min_length=1, description="Patterns; ids follow list order")
    encoding: PayloadEncoding = Field(default="text", description="Encoding of text and patterns")
    include_text: bool = Field(default=True, description="Whether to include matched text in results")


class CompareRequest(BaseModel):
    """Request model for cross-algorithm comparison."""

    text: str = Field(..., description="Text to search")
    pattern: str = Field(..., description="Pattern to find")
    encoding: PayloadEncoding = Field(default="text", description="Encoding of text and pattern")


class RegexRequest(BaseModel):
    """Request model for regex find and count."""

    text: str = Field(..., description="Text to search")
    pattern: str = Field(..., min_length=1, description="Regular expression")


class ReplaceRequest(RegexRequest):
    """Request model for regex replace."""

    replacement: str = Field(..., description="Replacement text")


class TransformRequest(BaseModel):
    """Request model for string transforms."""

    text: str = Field(..., description="Input text")
    operation: str = Field(..., description="Transform name")
    delimiter: Optional[str] = Field(None, description="Delimiter for split_text")
    parts: Optional[List[str]] = Field(None, description="Parts for join_text")

    @field_validator("operation")
    @classmethod
    def validate_operation(cls, v: str) -> str:
        """Normalize operation name."""
        v = v.strip().lower()
        if not v:
            raise ValueError("Operation cannot be empty")
        return v

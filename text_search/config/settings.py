"""Application settings and configuration management."""

from functools import lru_cache
from typing import List

from pydantic import Field, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    app_name: str = Field(default="Text Search Toolkit")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    workers: int = Field(default=1)

    # Search Configuration
    default_algorithm: str = Field(default="kmp")
    rabin_karp_base: int = Field(default=256, ge=2)
    rabin_karp_modulus: int = Field(default=(1 << 61) - 1, ge=2)  # Mersenne prime 2^61 - 1
    max_text_length: int = Field(default=1_000_000)
    max_pattern_length: int = Field(default=10_000)
    max_patterns: int = Field(default=1_000)
    max_matches: int = Field(default=10_000)  # Responses are truncated past this

    # Automaton cache
    enable_cache: bool = Field(default=True)
    cache_max_size: int = Field(default=128)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")  # "json" or "console"

    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080", "http://localhost:8000"]
    )

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()

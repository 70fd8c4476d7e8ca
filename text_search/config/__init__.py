"""Configuration management for the text search toolkit."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]

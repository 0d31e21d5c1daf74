# Path: config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes settings for the search endpoint, pagination, debouncing, and logging.

from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class FetcherSettings(BaseModel):
    """Settings describing the image search endpoint and how to call it."""

    endpoint: str = Field(default="https://pixabay.com/api/", description="Paginated image search endpoint.")
    api_key: str = Field(default="", description="Pixabay API key; supplied via PIXABAY_API_KEY, never hardcoded.")
    image_type: str = Field(default="photo", description="Value sent as the image_type filter.")
    per_page: int = Field(default=20, ge=3, le=200, description="Number of results requested per page.")
    timeout: float = Field(default=10.0, gt=0, description="Seconds allowed for a single fetch.")


class GallerySettings(BaseModel):
    """Settings controlling query handling and incremental loading."""

    default_query: str = Field(default="nature", description="Query used when the search field is empty.")
    debounce_delay: float = Field(default=0.5, ge=0, description="Quiet period in seconds before a query is applied.")
    scroll_threshold: int = Field(default=100, ge=0, description="Distance in pixels from the bottom treated as the end.")

    @field_validator("default_query")
    @classmethod
    def _default_query_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("default_query must not be blank")
        return value


class AppSettings(BaseModel):
    """Top-level application settings shared across services and interfaces."""

    fetcher: FetcherSettings = Field(default_factory=FetcherSettings)
    gallery: GallerySettings = Field(default_factory=GallerySettings)
    window_title: str = Field(default="Image Gallery", description="Title of the main window.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppSettings":
        """Instantiate settings, applying overrides from environment variables.

        Overrides go through model validation, so an invalid value raises
        ``pydantic.ValidationError`` instead of reaching the fetcher.
        """

        env = os.environ if environ is None else environ
        fetcher: Dict[str, Any] = {}
        gallery: Dict[str, Any] = {}
        payload: Dict[str, Any] = {}
        if env.get("PIXABAY_API_KEY"):
            fetcher["api_key"] = env["PIXABAY_API_KEY"]
        if env.get("PIXGALLERY_TIMEOUT"):
            fetcher["timeout"] = env["PIXGALLERY_TIMEOUT"]
        if env.get("PIXGALLERY_DEFAULT_QUERY"):
            gallery["default_query"] = env["PIXGALLERY_DEFAULT_QUERY"]
        if env.get("PIXGALLERY_LOG_LEVEL"):
            payload["log_level"] = env["PIXGALLERY_LOG_LEVEL"]
        if fetcher:
            payload["fetcher"] = fetcher
        if gallery:
            payload["gallery"] = gallery
        return cls.model_validate(payload)


__all__ = ["AppSettings", "FetcherSettings", "GallerySettings"]

# Path: core/search/fetcher.py
# Purpose: Fetch one page of image search results from the Pixabay API.
# Layer: core/search.
# Details: Validates the payload at the service boundary and maps failures to NetworkError/ServiceError.

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from config import FetcherSettings
from core.errors import NetworkError, ServiceError
from core.models.domain import ImageResult

LOGGER = logging.getLogger(__name__)


class PixabayHit(BaseModel):
    """Wire representation of a single entry in the ``hits`` array."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    webformat_url: str = Field(alias="webformatURL")
    large_image_url: str = Field(alias="largeImageURL")
    likes: int = 0
    views: int = 0
    tags: str = ""
    user: Optional[str] = None
    page_url: Optional[str] = Field(default=None, alias="pageURL")

    def to_result(self) -> ImageResult:
        tags = tuple(tag.strip() for tag in self.tags.split(",") if tag.strip())
        return ImageResult(
            id=self.id,
            thumbnail_url=self.webformat_url,
            full_image_url=self.large_image_url,
            likes=self.likes,
            views=self.views,
            tags=tags,
            user=self.user,
            page_url=self.page_url,
        )


def parse_hits(payload: Any) -> List[ImageResult]:
    """Convert a decoded response body into image results.

    Any malformed hit rejects the whole page so callers never append a
    partial page.
    """

    if not isinstance(payload, dict) or not isinstance(payload.get("hits"), list):
        raise ServiceError("Response payload does not contain a 'hits' list.")
    try:
        return [PixabayHit.model_validate(hit).to_result() for hit in payload["hits"]]
    except ValidationError as exc:
        raise ServiceError(f"Malformed image record in response: {exc.error_count()} error(s).") from exc


class SearchFetcher:
    """Perform one search request per call; no caching and no retries."""

    def __init__(
        self,
        settings: Optional[FetcherSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.settings = settings or FetcherSettings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self.settings.timeout)
        self._logger = logger or LOGGER

    def build_params(self, query: str, page: int) -> dict:
        return {
            "key": self.settings.api_key,
            "q": query,
            "image_type": self.settings.image_type,
            "page": page,
            "per_page": self.settings.per_page,
        }

    async def fetch(self, query: str, page: int, timeout: Optional[float] = None) -> List[ImageResult]:
        """Return the results for ``query`` on ``page``.

        Raises:
            NetworkError: transport failure or timeout.
            ServiceError: non-200 status or unparsable payload.
        """

        if not query:
            raise ValueError("Search query must not be empty.")
        if page < 1:
            raise ValueError("Page numbers start at 1.")

        limit = self.settings.timeout if timeout is None else timeout
        params = self.build_params(query, page)
        self._logger.debug("Requesting %r page %d from %s", query, page, self.settings.endpoint)
        try:
            response = await asyncio.wait_for(self._client.get(self.settings.endpoint, params=params), limit)
        except asyncio.TimeoutError as exc:
            self._logger.error("Timed out after %.1fs fetching %r page %d", limit, query, page)
            raise NetworkError(f"Request timed out after {limit} seconds.") from exc
        except httpx.RequestError as exc:
            self._logger.error("Request error fetching %r page %d: %s", query, page, exc)
            raise NetworkError(f"Request failed: {exc}") from exc

        if response.status_code != 200:
            self._logger.error("Failed to load images: HTTP %d for %r page %d", response.status_code, query, page)
            raise ServiceError(f"Image service returned HTTP {response.status_code}.", status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            self._logger.error("Response for %r page %d is not valid JSON", query, page)
            raise ServiceError("Image service returned a non-JSON body.", status_code=response.status_code) from exc

        try:
            results = parse_hits(payload)
        except ServiceError as exc:
            self._logger.error("Rejected page %d for %r: %s", page, query, exc)
            raise
        self._logger.info("Fetched %d images for %r page %d", len(results), query, page)
        return results

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

# Path: core/models/domain.py
# Purpose: Define domain models shared across fetching, pagination, and rendering.
# Layer: core/models.
# Details: Lightweight dataclasses keep the core independent from the GUI toolkit.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from core.errors import GalleryError


@dataclass(frozen=True)
class ImageResult:
    """Single search hit with the fields the gallery renders."""

    id: int
    thumbnail_url: str
    full_image_url: str
    likes: int = 0
    views: int = 0
    tags: Tuple[str, ...] = ()
    user: Optional[str] = None
    page_url: Optional[str] = None


class GalleryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    EXHAUSTED = "exhausted"
    ERROR = "error"


@dataclass
class GallerySession:
    """Mutable state of one continuous search context.

    Owned exclusively by the pagination controller. A new instance replaces
    the old one whenever the query changes; in-flight fetches compare their
    captured session against the current one to detect stale responses.
    """

    query: str
    generation: int = 0
    page: int = 1
    results: List[ImageResult] = field(default_factory=list)
    is_loading: bool = False
    has_more: bool = True
    last_error: Optional[GalleryError] = None

    def snapshot(self) -> "GalleryState":
        return GalleryState(
            query=self.query,
            page=self.page,
            results=tuple(self.results),
            is_loading=self.is_loading,
            has_more=self.has_more,
            last_error=self.last_error,
        )


@dataclass(frozen=True)
class GalleryState:
    """Read-only view of a session handed to observers."""

    query: str
    page: int
    results: Tuple[ImageResult, ...]
    is_loading: bool
    has_more: bool
    last_error: Optional[GalleryError] = None

    @property
    def status(self) -> GalleryStatus:
        if self.is_loading:
            return GalleryStatus.LOADING
        if self.last_error is not None:
            return GalleryStatus.ERROR
        if not self.has_more:
            return GalleryStatus.EXHAUSTED
        return GalleryStatus.IDLE

    @property
    def is_empty(self) -> bool:
        return not self.results and not self.is_loading


def effective_query(text: Optional[str], default: str) -> str:
    """Map raw user input to the query actually sent to the service."""

    cleaned = (text or "").strip()
    return cleaned if cleaned else default

# Path: core/search/__init__.py
# Purpose: Package initializer for search fetching and pagination.
# Layer: core/search.
# Details: Exposes the fetcher and the incremental pagination controller.

from .fetcher import PixabayHit, SearchFetcher, parse_hits
from .pagination import PageFetcher, PaginationController

__all__ = [
    "PageFetcher",
    "PaginationController",
    "PixabayHit",
    "SearchFetcher",
    "parse_hits",
]

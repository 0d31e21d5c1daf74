# Path: core/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: core/models.
# Details: Exposes dataclasses shared by the fetcher, the pagination controller, and the GUI.

from .domain import GallerySession, GalleryState, GalleryStatus, ImageResult, effective_query

__all__ = ["GallerySession", "GalleryState", "GalleryStatus", "ImageResult", "effective_query"]

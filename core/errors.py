# Path: core/errors.py
# Purpose: Define the error taxonomy surfaced by the search core.
# Layer: core.
# Details: Both errors are recoverable; the pagination controller keeps the session retryable.

from __future__ import annotations

from typing import Optional


class GalleryError(Exception):
    """Base class for failures reported by the search core."""


class NetworkError(GalleryError):
    """Transport failure or timeout while talking to the image service."""


class ServiceError(GalleryError):
    """Non-success status code or a payload that could not be parsed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = ["GalleryError", "NetworkError", "ServiceError"]

# Path: core/utils/__init__.py
# Purpose: Package initializer for small event-loop utilities.
# Layer: core/utils.
# Details: Exposes the Debouncer used to coalesce search input.

from .debounce import Debouncer

__all__ = ["Debouncer"]

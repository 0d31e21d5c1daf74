# Path: gui/__init__.py
# Purpose: Package initializer for GUI layer.
# Layer: gui.
# Details: Provide lightweight exports without importing MainWindow to avoid side effects.

from .image_loader import ImageLoader
from .view_models import GalleryViewModel, columns_for_width

__all__ = ["GalleryViewModel", "ImageLoader", "columns_for_width"]

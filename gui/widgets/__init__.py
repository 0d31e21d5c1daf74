# Path: gui/widgets/__init__.py
# Purpose: Package initializer for reusable gallery widgets.
# Layer: gui/widgets.
# Details: Exposes the grid, the result card, and the full-size details dialog.

from .image_details import ImageDetailsDialog
from .image_grid import ImageGrid
from .image_tile import ImageTile

__all__ = ["ImageDetailsDialog", "ImageGrid", "ImageTile"]

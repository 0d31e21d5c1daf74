# Path: gui/widgets/image_grid.py
# Purpose: Provide a scroll-friendly grid of ImageTile cards with adjustable columns.
# Layer: gui/widgets.
# Details: Reflows tiles on resize and column changes; thumbnails arrive asynchronously.

from __future__ import annotations

import asyncio
from typing import Dict, Iterable, List, Optional, Set

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QGridLayout, QSizePolicy, QWidget

from core.models.domain import ImageResult
from gui.image_loader import ImageLoader
from .image_tile import ImageTile


class _LoaderSignals(QObject):
    imageLoaded = Signal(str, object)


class ImageGrid(QWidget):
    """Grid container that arranges ImageTile cards."""

    imageSelected = Signal(object)

    def __init__(self, loader: ImageLoader, parent: Optional[QWidget] = None, columns: int = 2) -> None:
        super().__init__(parent)
        self._columns = max(1, columns)
        self._grid = QGridLayout(self)
        self._grid.setSpacing(8)
        self._grid.setContentsMargins(8, 8, 8, 8)
        self._tiles: List[ImageTile] = []
        self._tile_size = 140
        self._available_width: Optional[int] = None
        self._url_to_tiles: Dict[str, List[ImageTile]] = {}
        self._load_tasks: Set["asyncio.Task[None]"] = set()
        self._loader = loader
        self._loader_signals = _LoaderSignals()
        self._loader_signals.imageLoaded.connect(self._on_image_loaded)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

    @property
    def count(self) -> int:
        return len(self._tiles)

    def set_columns(self, columns: int) -> None:
        columns = max(1, columns)
        if columns == self._columns:
            return
        self._columns = columns
        self._relayout()

    def set_available_width(self, width: int) -> None:
        """Provide viewport width to avoid horizontal scrollbars."""

        self._available_width = max(0, width)
        self._relayout()

    def set_results(self, results: Iterable[ImageResult]) -> None:
        self._destroy_tiles()
        self.append_results(results)

    def append_results(self, results: Iterable[ImageResult]) -> None:
        new_results = list(results)
        if not new_results:
            return
        start_index = len(self._tiles)
        self._compute_tile_size()
        for result in new_results:
            tile = ImageTile(result)
            tile.setFixedSize(self._tile_size, self._tile_size)
            tile.clicked.connect(self.imageSelected.emit)
            self._tiles.append(tile)
            self._url_to_tiles.setdefault(result.thumbnail_url, []).append(tile)
            self._queue_load(result.thumbnail_url)
        for idx in range(start_index, len(self._tiles)):
            row = idx // self._columns
            col = idx % self._columns
            self._grid.addWidget(self._tiles[idx], row, col)

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._relayout()

    def _compute_tile_size(self) -> None:
        margins = self._grid.contentsMargins()
        spacing = self._grid.spacing()
        available_width = self._available_width or self.width()
        available = available_width - margins.left() - margins.right()
        width = (available - spacing * (self._columns - 1)) / float(self._columns)
        self._tile_size = max(64, int(width))

    def _relayout(self) -> None:
        if not self._tiles:
            return
        self._compute_tile_size()
        self._clear_grid_positions()
        for idx, tile in enumerate(self._tiles):
            tile.setFixedSize(self._tile_size, self._tile_size)
            row = idx // self._columns
            col = idx % self._columns
            self._grid.addWidget(tile, row, col)

    def _destroy_tiles(self) -> None:
        while self._grid.count():
            item = self._grid.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.setParent(None)
                widget.deleteLater()
        self._tiles = []
        self._url_to_tiles.clear()
        for task in list(self._load_tasks):
            task.cancel()
        self._load_tasks.clear()

    def _clear_grid_positions(self) -> None:
        while self._grid.count():
            item = self._grid.takeAt(0)
            widget = item.widget()
            if widget is not None:
                self._grid.removeWidget(widget)

    def _queue_load(self, url: str) -> None:
        task = self._loader.load(url, self._loader_signals.imageLoaded.emit)
        self._load_tasks.add(task)
        task.add_done_callback(self._load_tasks.discard)

    def _on_image_loaded(self, url: str, data: Optional[bytes]) -> None:
        # Tiles may have been destroyed by a query change while downloading.
        for tile in self._url_to_tiles.get(url, []):
            tile.set_image(data=data)

# Path: gui/widgets/image_details.py
# Purpose: Show the full-size version of a selected search result.
# Layer: gui/widgets.
# Details: Downloads the large image on open and closes on click or Escape.

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QDialog, QLabel, QVBoxLayout, QWidget

from core.models.domain import ImageResult
from gui.image_loader import ImageLoader


class ImageDetailsDialog(QDialog):
    """Frameless viewer for one image; any click dismisses it."""

    def __init__(self, result: ImageResult, loader: ImageLoader, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.result = result
        self._pixmap: Optional[QPixmap] = None
        self.setWindowTitle(", ".join(result.tags) or f"Image {result.id}")
        self.setStyleSheet("background-color: black; color: white;")
        self.resize(1024, 768)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.image_label = QLabel("loading...")
        self.image_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.image_label)

        self._task = loader.load(result.full_image_url, self._on_loaded)

    def _on_loaded(self, url: str, data: Optional[bytes]) -> None:
        pixmap = QPixmap()
        if data is None or not pixmap.loadFromData(data):
            self.image_label.setText("image unavailable")
            return
        self._pixmap = pixmap
        self._apply_pixmap()

    def _apply_pixmap(self) -> None:
        if self._pixmap is None:
            return
        self.image_label.setPixmap(
            self._pixmap.scaled(self.image_label.size(), Qt.KeepAspectRatio, Qt.SmoothTransformation)
        )

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._apply_pixmap()

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        self.accept()

    def done(self, result: int) -> None:  # type: ignore[override]
        self._task.cancel()
        super().done(result)

# Path: gui/widgets/image_tile.py
# Purpose: Provide a card widget showing one search result thumbnail with its counters.
# Layer: gui/widgets.
# Details: Wraps a scaling QLabel plus a likes/views row and emits clicked with the result.

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QFrame, QLabel, QSizePolicy, QVBoxLayout

from core.models.domain import ImageResult


class ImageTile(QFrame):
    """Clickable card displaying a thumbnail, like count, and view count."""

    clicked = Signal(object)

    def __init__(self, result: ImageResult, parent=None, placeholder_text: str = "loading...") -> None:
        super().__init__(parent)
        self.result = result
        self.placeholder_text = placeholder_text
        self._pixmap: Optional[QPixmap] = None
        self.setFrameShape(QFrame.StyledPanel)
        self.setCursor(Qt.PointingHandCursor)
        self.setStyleSheet("ImageTile { border: 1px solid #d0d0d0; border-radius: 6px; }")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        self.image_label = QLabel(placeholder_text)
        self.image_label.setAlignment(Qt.AlignCenter)
        self.image_label.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        layout.addWidget(self.image_label, 1)

        self.stats_label = QLabel(f"\U0001F44D {result.likes}    \U0001F441 {result.views}")
        self.stats_label.setAlignment(Qt.AlignCenter)
        self.stats_label.setStyleSheet("color: grey;")
        layout.addWidget(self.stats_label)

    def set_image(self, data: Optional[bytes] = None, pixmap: Optional[QPixmap] = None) -> None:
        if pixmap is None and data is not None:
            pixmap = QPixmap()
            if not pixmap.loadFromData(data):
                pixmap = None
        self._pixmap = pixmap
        if self._pixmap:
            self.image_label.setText("")
        else:
            self.image_label.setText("image unavailable")
        self._apply_pixmap()

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() == Qt.LeftButton:
            self.clicked.emit(self.result)
        super().mousePressEvent(event)

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._apply_pixmap()

    def _apply_pixmap(self) -> None:
        if not self._pixmap or self._pixmap.isNull():
            self.image_label.setPixmap(QPixmap())
            return
        scaled = self._pixmap.scaled(
            self.image_label.size(), Qt.KeepAspectRatio, Qt.SmoothTransformation
        )
        self.image_label.setPixmap(scaled)

# Path: gui/main_window.py
# Purpose: Define the main desktop window: search field, result grid, and status notifications.
# Layer: gui.
# Details: Renders GalleryState snapshots and forwards text input and scroll events to the view model.

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QLabel,
    QLineEdit,
    QMainWindow,
    QScrollArea,
    QStackedWidget,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from config import AppSettings
from core.models.domain import GalleryState, ImageResult
from .image_loader import ImageLoader
from .view_models import GalleryViewModel, columns_for_width
from .widgets.image_details import ImageDetailsDialog
from .widgets.image_grid import ImageGrid

ERROR_DISPLAY_MS = 4000


class MainWindow(QMainWindow):
    """Main application window hosting the search field and the result grid."""

    def __init__(
        self,
        view_model: GalleryViewModel,
        loader: ImageLoader,
        settings: Optional[AppSettings] = None,
    ) -> None:
        super().__init__()
        self.settings = settings or AppSettings()
        self.view_model = view_model
        self.loader = loader
        self._rendered_query: Optional[str] = None
        self._rendered_count = 0
        self.viewer_scroll: Optional[QScrollArea] = None
        self.setWindowTitle(self.settings.window_title)
        self.resize(1000, 760)

        self._build_toolbar()
        self.setCentralWidget(self._build_body())
        self._configure_shortcuts()

        self.view_model.stateChanged.connect(self.render)
        self.view_model.errorRaised.connect(self._show_error)
        self.render(self.view_model.state)

    def _build_toolbar(self) -> None:
        toolbar = QToolBar()
        toolbar.setMovable(False)
        self.search_field = QLineEdit()
        self.search_field.setPlaceholderText("Search images...")
        self.search_field.setClearButtonEnabled(True)
        self.search_field.textChanged.connect(self.view_model.on_query_changed)
        toolbar.addWidget(self.search_field)
        self.addToolBar(toolbar)

    def _build_body(self) -> QWidget:
        self.stack = QStackedWidget()

        self.empty_label = QLabel("No images found.")
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.stack.addWidget(self.empty_label)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.grid = ImageGrid(self.loader, columns=columns_for_width(self.width()))
        self.grid.imageSelected.connect(self.open_image_details)
        scroll_area = QScrollArea()
        scroll_area.setWidgetResizable(True)
        scroll_area.setWidget(self.grid)
        scroll_area.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        scroll_area.verticalScrollBar().valueChanged.connect(self._on_viewer_scroll)
        scroll_area.viewport().installEventFilter(self)
        self.viewer_scroll = scroll_area
        layout.addWidget(scroll_area)

        self.loading_label = QLabel("Loading...")
        self.loading_label.setAlignment(Qt.AlignCenter)
        self.loading_label.setVisible(False)
        layout.addWidget(self.loading_label)

        self.stack.addWidget(container)
        return self.stack

    def _configure_shortcuts(self) -> None:
        focus_action = QAction(self)
        focus_action.setShortcut(QKeySequence.Find)
        focus_action.triggered.connect(self.search_field.setFocus)
        self.addAction(focus_action)

    def render(self, state: GalleryState) -> None:
        """Bring the widgets in line with ``state``."""

        if state.query != self._rendered_query or len(state.results) < self._rendered_count:
            self.grid.set_results(state.results)
            self._rendered_query = state.query
        elif len(state.results) > self._rendered_count:
            self.grid.append_results(state.results[self._rendered_count:])
        self._rendered_count = len(state.results)

        self.loading_label.setVisible(state.is_loading)
        self.stack.setCurrentIndex(0 if state.is_empty else 1)

    def open_image_details(self, result: ImageResult) -> None:
        dialog = ImageDetailsDialog(result, self.loader, parent=self)
        dialog.open()

    def _show_error(self, message: str) -> None:
        self.statusBar().showMessage(message, ERROR_DISPLAY_MS)
        self.view_model.dismiss_error()

    def _on_viewer_scroll(self, value: int) -> None:
        if not self.viewer_scroll:
            return
        scrollbar = self.viewer_scroll.verticalScrollBar()
        if value >= scrollbar.maximum() - self.settings.gallery.scroll_threshold:
            self.view_model.on_scroll_reached_end()

    def eventFilter(self, watched, event):  # type: ignore[override]
        if (
            self.viewer_scroll
            and watched is self.viewer_scroll.viewport()
            and event.type() == QEvent.Resize
        ):
            width = event.size().width()
            self.grid.set_columns(columns_for_width(width))
            self.grid.set_available_width(width)
        return super().eventFilter(watched, event)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.view_model.close()
        self.loader.cancel_all()
        super().closeEvent(event)

# Path: gui/view_models.py
# Purpose: Provide view models mediating between GUI interactions and the pagination controller.
# Layer: gui.
# Details: Re-emits controller snapshots and errors as Qt signals for the widgets.

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, Signal

from core.errors import GalleryError
from core.models.domain import GalleryState
from core.search.pagination import PaginationController

ERROR_MESSAGE = "Error loading images. Please try again later."


def columns_for_width(width: int) -> int:
    """Number of grid columns for the available width."""

    if width >= 1200:
        return 4
    if width >= 800:
        return 3
    return 2


class GalleryViewModel(QObject):
    """View model exposing gallery state to widgets."""

    stateChanged = Signal(object)
    errorRaised = Signal(str)

    def __init__(self, controller: PaginationController, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.controller = controller
        controller.add_listener(self._on_state)
        controller.add_error_listener(self._on_error)

    @property
    def state(self) -> GalleryState:
        return self.controller.state

    def start(self) -> None:
        self.controller.start()

    def on_query_changed(self, text: str) -> None:
        self.controller.on_query_changed(text)

    def on_scroll_reached_end(self) -> None:
        self.controller.on_scroll_reached_end()

    def dismiss_error(self) -> None:
        self.controller.dismiss_error()

    def close(self) -> None:
        self.controller.close()

    def _on_state(self, state: GalleryState) -> None:
        self.stateChanged.emit(state)

    def _on_error(self, error: GalleryError) -> None:
        self.errorRaised.emit(ERROR_MESSAGE)

# Path: gui/main.py
# Purpose: Desktop entry point wiring settings, the search core, and the main window.
# Layer: gui.
# Details: Runs the Qt event loop through qasync so the core's asyncio tasks share it.

from __future__ import annotations

import asyncio
import logging
import sys
from typing import List, Optional

import qasync
from PySide6.QtWidgets import QApplication

from config import AppSettings, configure_logging
from core.search.fetcher import SearchFetcher
from core.search.pagination import PaginationController
from .image_loader import ImageLoader
from .main_window import MainWindow
from .view_models import GalleryViewModel

LOGGER = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Start the gallery application and block until the window closes."""

    settings = AppSettings.from_env()
    configure_logging(settings.log_level)
    if not settings.fetcher.api_key:
        LOGGER.warning("PIXABAY_API_KEY is not set; searches will be rejected by the service.")

    app = QApplication(argv if argv is not None else sys.argv)
    loop = qasync.QEventLoop(app)
    asyncio.set_event_loop(loop)

    fetcher = SearchFetcher(settings.fetcher)
    loader = ImageLoader(timeout=settings.fetcher.timeout)
    controller = PaginationController(fetcher, settings.gallery, loop=loop)
    view_model = GalleryViewModel(controller)
    window = MainWindow(view_model, loader, settings)
    window.show()

    quit_event = asyncio.Event()
    app.aboutToQuit.connect(quit_event.set)
    with loop:
        view_model.start()
        loop.run_until_complete(quit_event.wait())
        controller.close()
        loop.run_until_complete(loader.aclose())
        loop.run_until_complete(fetcher.aclose())
    LOGGER.info("Application closed")
    return 0


if __name__ == "__main__":
    sys.exit(main())

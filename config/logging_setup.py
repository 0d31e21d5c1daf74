# Path: config/logging_setup.py
# Purpose: Configure standard-library logging for the application entry points.
# Layer: config.
# Details: Components log through module loggers or an injected logging.Logger.

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger at ``level``."""

    root = logging.getLogger()
    root.setLevel(level.upper())
    if not any(getattr(handler, "_pixgallery", False) for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._pixgallery = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)

# Path: gui/image_loader.py
# Purpose: Download thumbnail and full-size image bytes for display.
# Layer: gui.
# Details: Runs downloads as asyncio tasks on the qasync loop; failures leave the placeholder in place.

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Set

import httpx

LOGGER = logging.getLogger(__name__)

ImageCallback = Callable[[str, Optional[bytes]], None]


class ImageLoader:
    """Fetch image bytes by URL and hand them to a callback."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._tasks: Set["asyncio.Task[None]"] = set()
        self._logger = logger or LOGGER

    def load(self, url: str, callback: ImageCallback) -> "asyncio.Task[None]":
        task = asyncio.ensure_future(self._load(url, callback))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _load(self, url: str, callback: ImageCallback) -> None:
        callback(url, await self.download(url))

    async def download(self, url: str) -> Optional[bytes]:
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            self._logger.warning("Could not download image %s: %s", url, exc)
            return None
        return response.content

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()

    async def aclose(self) -> None:
        self.cancel_all()
        if self._owns_client:
            await self._client.aclose()

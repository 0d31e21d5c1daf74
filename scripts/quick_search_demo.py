# Path: scripts/quick_search_demo.py
# Purpose: Simple CLI to page through search results without the GUI.
# Layer: scripts.
# Details: Drives the pagination controller headlessly and prints each fetched result.

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import AppSettings, configure_logging
from core.search.fetcher import SearchFetcher
from core.search.pagination import PaginationController


async def run(query: str, pages: int, settings: AppSettings) -> int:
    """Fetch up to ``pages`` pages for ``query`` and print them."""

    fetcher = SearchFetcher(settings.fetcher)
    controller = PaginationController(fetcher, settings.gallery)
    printed = 0
    try:
        task = controller.set_query(query) or controller.start()
        for _ in range(pages):
            if task is None:
                break
            await task
            state = controller.state
            if state.last_error is not None:
                print(f"error: {state.last_error}", file=sys.stderr)
                return 1
            for result in state.results[printed:]:
                print(f"id={result.id} likes={result.likes} views={result.views} url={result.full_image_url}")
            printed = len(state.results)
            task = controller.on_scroll_reached_end()
    finally:
        controller.close()
        await fetcher.aclose()
    print(f"{printed} images for {controller.state.query!r}")
    return 0


def main() -> None:
    """Execute a quick search from the command line."""

    parser = argparse.ArgumentParser(description="Page through image search results")
    parser.add_argument("--query", type=str, default="", help="Search term; empty uses the default query")
    parser.add_argument("--pages", type=int, default=1, help="Number of pages to fetch")
    parser.add_argument("--api-key", type=str, default=None, help="Pixabay API key (overrides PIXABAY_API_KEY)")
    args = parser.parse_args()

    settings = AppSettings.from_env()
    if args.api_key:
        settings.fetcher.api_key = args.api_key
    configure_logging(settings.log_level)
    sys.exit(asyncio.run(run(args.query, args.pages, settings)))


if __name__ == "__main__":
    main()

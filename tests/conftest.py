from __future__ import annotations

import asyncio
from typing import List, Tuple

import pytest

from core.models.domain import ImageResult


def make_results(count: int, start: int = 0) -> List[ImageResult]:
    return [
        ImageResult(
            id=start + index,
            thumbnail_url=f"https://cdn.example/{start + index}_640.jpg",
            full_image_url=f"https://cdn.example/{start + index}_1280.jpg",
            likes=index,
            views=index * 10,
        )
        for index in range(count)
    ]


class FakeFetcher:
    """Fetcher whose responses are released manually by the test."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, int]] = []
        self.futures: List[asyncio.Future] = []

    async def fetch(self, query: str, page: int) -> List[ImageResult]:
        future = asyncio.get_running_loop().create_future()
        self.calls.append((query, page))
        self.futures.append(future)
        return await future

    def resolve(self, results: List[ImageResult], index: int = -1) -> None:
        self.futures[index].set_result(results)

    def fail(self, error: BaseException, index: int = -1) -> None:
        self.futures[index].set_exception(error)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def results_factory():
    return make_results

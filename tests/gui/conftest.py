import os

import pytest
from PySide6.QtWidgets import QApplication


class FakeLoadTask:
    def __init__(self, url: str) -> None:
        self.url = url
        self.cancelled = False
        self.callbacks = []

    def cancel(self) -> bool:
        self.cancelled = True
        return True

    def add_done_callback(self, callback) -> None:
        self.callbacks.append(callback)


class FakeImageLoader:
    """Records requested URLs instead of downloading them."""

    def __init__(self) -> None:
        self.tasks = []

    def load(self, url, callback):
        task = FakeLoadTask(url)
        self.tasks.append(task)
        return task

    def cancel_all(self) -> None:
        for task in self.tasks:
            task.cancel()


@pytest.fixture(scope="module")
def qapp() -> QApplication:
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def image_loader() -> FakeImageLoader:
    return FakeImageLoader()

"""Shared fixtures for formstate tests."""

import pytest


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class RecordingReporter:
    """Collects reported submission errors instead of logging them."""

    def __init__(self) -> None:
        self.errors: list[BaseException] = []

    def report(self, error: BaseException) -> None:
        self.errors.append(error)


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()

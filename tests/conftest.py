"""pooppdf test configuration — shared fixtures for unit and integration tests."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

FAKE_PDF = b"%PDF-1.4\n% fake pdf body\n%%EOF\n"


# ---------------------------------------------------------------------------
# Async
# ---------------------------------------------------------------------------


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


# ---------------------------------------------------------------------------
# Settings / logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Clear the settings LRU cache between tests."""
    from pooppdf.settings.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _reset_pooppdf_logger():
    """Detach any file handlers a test attached to the ``pooppdf`` logger."""
    yield
    from pooppdf.logging_config import LOGGER_NAME, flush_logging

    root = logging.getLogger(LOGGER_NAME)
    flush_logging(root)
    root.propagate = True
    root.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Mock browser
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_page() -> MagicMock:
    """A ``MagicMock`` standing in for a Playwright async ``Page``.

    Default behaviour: navigation commits with HTTP 200, the network goes
    idle immediately, selectors match immediately and ``pdf()`` returns a
    small fake document.
    """
    page = MagicMock(name="page")
    page.url = "https://example.com/"
    response = MagicMock(name="response")
    response.status = 200
    page.goto = AsyncMock(return_value=response)
    page.wait_for_load_state = AsyncMock(return_value=None)
    page.evaluate = AsyncMock(return_value=True)
    page.emulate_media = AsyncMock(return_value=None)
    page.pdf = AsyncMock(return_value=FAKE_PDF)
    return page


class FakeSession:
    """In-memory ``BrowserSession`` double that records open/close calls."""

    def __init__(self, page: MagicMock, open_error: Exception | None = None) -> None:
        self.page = page
        self.open_error = open_error
        self.open_calls = 0
        self.close_calls = 0
        self.settings = None

    def __call__(self, settings):
        self.settings = settings
        return self

    async def open(self):
        self.open_calls += 1
        if self.open_error is not None:
            raise self.open_error
        return self.page

    async def close(self) -> None:
        self.close_calls += 1


@pytest.fixture()
def fake_session(fake_page: MagicMock) -> FakeSession:
    """A ``FakeSession`` usable as a pipeline ``session_factory``."""
    return FakeSession(fake_page)


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests that drive a real Chromium")
    config.addinivalue_line("markers", "slow: marks tests that take more than a few seconds")

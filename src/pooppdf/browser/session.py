"""Scoped ownership of one Chromium process and one page.

``BrowserSession`` is an async context manager: entering it launches the
browser, leaving it (normally or through an exception) closes everything
it opened, exactly once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from pooppdf.exceptions import LaunchError
from pooppdf.settings.config import BrowserSettings

logger = logging.getLogger(__name__)


@dataclass
class LaunchProfile:
    """Playwright launch + context arguments for a single session."""

    # Arguments for pw.chromium.launch()
    launch_args: dict[str, Any] = field(default_factory=dict)

    # Arguments for browser.new_context()
    context_args: dict[str, Any] = field(default_factory=dict)


def build_launch_profile(settings: BrowserSettings) -> LaunchProfile:
    """Translate browser settings into Playwright launch/context arguments."""
    profile = LaunchProfile()
    profile.launch_args["headless"] = settings.headless
    if not settings.sandbox:
        profile.launch_args["args"] = ["--no-sandbox", "--disable-setuid-sandbox"]
    if settings.executable_path:
        profile.launch_args["executable_path"] = settings.executable_path

    profile.context_args["viewport"] = {
        "width": settings.viewport_width,
        "height": settings.viewport_height,
    }
    return profile


class BrowserSession:
    """One browser process and one page, released exactly once."""

    def __init__(self, settings: BrowserSettings) -> None:
        self._settings = settings
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None
        self._closed = False

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("BrowserSession is not open")
        return self._page

    @property
    def closed(self) -> bool:
        return self._closed

    async def open(self) -> Page:
        """Start Playwright, launch Chromium and open a fresh page.

        Raises:
            LaunchError: If any launch step fails. Anything already started
                is closed before the error propagates, cancellation included.
        """
        if self._page is not None or self._closed:
            raise RuntimeError("BrowserSession cannot be reused")

        profile = build_launch_profile(self._settings)
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(**profile.launch_args)
            self._context = await self._browser.new_context(**profile.context_args)
            self._context.set_default_timeout(self._settings.timeout_ms)
            self._page = await self._context.new_page()
        except Exception as exc:
            await self.close()
            raise LaunchError(f"Browser failed to start: {exc}") from exc
        except BaseException:
            await self.close()
            raise
        logger.debug("Chromium launched (headless=%s)", self._settings.headless)
        return self._page

    async def close(self) -> None:
        """Release the page, browser and driver. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        for name, closer in (
            ("context", self._context.close if self._context else None),
            ("browser", self._browser.close if self._browser else None),
            ("playwright", self._playwright.stop if self._playwright else None),
        ):
            if closer is None:
                continue
            try:
                await closer()
            except Exception as exc:
                logger.warning("Failed to close %s: %s", name, exc)
        self._page = self._context = self._browser = self._playwright = None

    async def __aenter__(self) -> "BrowserSession":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

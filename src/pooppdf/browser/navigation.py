"""Single-attempt page navigation with Playwright error translation.

Navigation is considered complete once the main-frame response is
committed; waiting for the page to settle is the readiness gate's job.
Failed navigations are never retried.
"""

from __future__ import annotations

import logging

from playwright.async_api import Error as PlaywrightError, Page, Response, TimeoutError as PlaywrightTimeout

from pooppdf.exceptions import NavigationError

logger = logging.getLogger(__name__)

# Chromium net error codes mapped to readable reasons.
_NET_ERRORS: tuple[str, ...] = (
    "ERR_NAME_NOT_RESOLVED",
    "ERR_CONNECTION_REFUSED",
    "ERR_CONNECTION_RESET",
    "ERR_CONNECTION_CLOSED",
    "ERR_CONNECTION_TIMED_OUT",
    "ERR_INTERNET_DISCONNECTED",
    "ERR_SSL_PROTOCOL_ERROR",
    "ERR_CERT_AUTHORITY_INVALID",
    "ERR_CERT_COMMON_NAME_INVALID",
    "ERR_ADDRESS_UNREACHABLE",
    "ERR_ABORTED",
)


def _reason_for(exc: PlaywrightError) -> str:
    message = str(exc)
    for pattern in _NET_ERRORS:
        if pattern in message:
            return pattern.replace("ERR_", "").replace("_", " ").lower()
    return message.splitlines()[0] if message else exc.__class__.__name__


async def navigate(page: Page, url: str, *, timeout_ms: int = 30_000) -> Response | None:
    """Navigate *page* to *url* and wait for the response to commit.

    Args:
        page: Playwright page instance.
        url: Absolute URL to load.
        timeout_ms: Navigation timeout in milliseconds.

    Returns:
        The main-frame ``Response``, or ``None`` for responseless loads
        (``about:blank``, same-document navigations).

    Raises:
        NavigationError: On timeout, network errors, or any other
            Playwright navigation failure.
    """
    logger.debug("goto %s (wait_until=commit, timeout=%dms)", url, timeout_ms)
    try:
        response = await page.goto(url, wait_until="commit", timeout=timeout_ms)
    except PlaywrightTimeout as exc:
        raise NavigationError(url, f"timed out after {timeout_ms}ms") from exc
    except PlaywrightError as exc:
        reason = _reason_for(exc)
        logger.debug("Navigation to %s failed: %s", url, exc)
        raise NavigationError(url, reason) from exc

    if response is not None and response.status >= 400:
        logger.warning("Navigation to %s returned HTTP %d; capturing anyway", url, response.status)
    return response

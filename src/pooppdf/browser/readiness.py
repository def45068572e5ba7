"""Readiness gate: decide when a loaded page may be captured.

Two conditions, checked in order under one shared deadline:

1. Network idle: no network connections for at least 500 ms
   (Playwright's ``networkidle`` load state).
2. Optional selector: ``document.querySelector(selector)`` is non-null.
   This is re-evaluated by a ``MutationObserver`` inside the page, so the
   gate wakes on DOM changes instead of polling on an interval.

Exceeding the deadline raises ``ReadinessTimeoutError``. A navigation
during the selector wait re-arms the observer in the new document; the gate
never modifies the page.
"""

from __future__ import annotations

import asyncio
import logging

from playwright.async_api import Error as PlaywrightError, Page, TimeoutError as PlaywrightTimeout

from pooppdf.exceptions import ReadinessError, ReadinessTimeoutError

logger = logging.getLogger(__name__)

NETWORK_IDLE = "network idle"

# Resolves once the selector matches. An invalid selector throws inside the
# executor, which rejects the promise immediately.
SELECTOR_PRESENT_JS = """(selector) => new Promise((resolve) => {
    if (document.querySelector(selector) !== null) {
        resolve(true);
        return;
    }
    const observer = new MutationObserver(() => {
        if (document.querySelector(selector) !== null) {
            observer.disconnect();
            resolve(true);
        }
    });
    observer.observe(document, { childList: true, subtree: true, attributes: true });
})"""

# Playwright messages for an evaluation cut short by a navigation.
_DOCUMENT_REPLACED = (
    "Execution context was destroyed",
    "Cannot find context with specified id",
)


def _remaining_ms(deadline: float) -> float:
    return (deadline - asyncio.get_running_loop().time()) * 1000


def _document_replaced(exc: PlaywrightError) -> bool:
    message = str(exc)
    return any(marker in message for marker in _DOCUMENT_REPLACED)


async def wait_for_network_idle(page: Page, *, timeout_ms: float) -> None:
    """Block until the page's network has been idle for 500 ms."""
    try:
        await page.wait_for_load_state("networkidle", timeout=timeout_ms)
    except PlaywrightTimeout as exc:
        raise ReadinessTimeoutError(NETWORK_IDLE, int(timeout_ms)) from exc
    except PlaywrightError as exc:
        raise ReadinessError(f"Could not wait for network idle: {exc}") from exc


async def wait_for_selector_present(page: Page, selector: str, *, timeout_ms: float) -> None:
    """Block until *selector* matches an element in the DOM.

    If the page navigates while waiting, the observer is installed again in
    the new document and the wait continues against the same deadline.
    """
    condition = f"selector {selector!r}"
    timeout_ms = max(timeout_ms, 0)
    deadline = asyncio.get_running_loop().time() + timeout_ms / 1000
    while True:
        remaining = _remaining_ms(deadline)
        if remaining <= 0:
            raise ReadinessTimeoutError(condition, int(timeout_ms), selector)
        try:
            await asyncio.wait_for(page.evaluate(SELECTOR_PRESENT_JS, selector), timeout=remaining / 1000)
            return
        except asyncio.TimeoutError as exc:
            raise ReadinessTimeoutError(condition, int(timeout_ms), selector) from exc
        except PlaywrightError as exc:
            if not _document_replaced(exc):
                raise ReadinessError(f"Could not wait for selector {selector!r}: {exc}") from exc
            logger.debug("Page navigated while waiting for %r on %s", selector, page.url)

        remaining = _remaining_ms(deadline)
        if remaining <= 0:
            continue
        try:
            await page.wait_for_load_state("domcontentloaded", timeout=remaining)
        except PlaywrightTimeout as exc:
            raise ReadinessTimeoutError(condition, int(timeout_ms), selector) from exc
        except PlaywrightError as exc:
            raise ReadinessError(f"Could not wait for selector {selector!r}: {exc}") from exc


async def await_readiness(page: Page, selector: str | None = None, *, timeout_ms: int = 30_000) -> None:
    """Wait until *page* is ready to capture.

    Args:
        page: A page whose navigation has already committed.
        selector: Optional CSS selector that must match before capture.
        timeout_ms: Upper bound for both conditions together.

    Raises:
        ReadinessTimeoutError: If a condition is still pending at the deadline.
        ReadinessError: If the selector cannot be evaluated (e.g. invalid syntax).
    """
    deadline = asyncio.get_running_loop().time() + timeout_ms / 1000

    await wait_for_network_idle(page, timeout_ms=timeout_ms)
    logger.debug("Network idle reached for %s", page.url)

    if selector:
        remaining = _remaining_ms(deadline)
        try:
            await wait_for_selector_present(page, selector, timeout_ms=remaining)
        except ReadinessTimeoutError as exc:
            # Report the overall bound, not the leftover slice
            raise ReadinessTimeoutError(exc.condition, timeout_ms, selector) from exc.__cause__
        logger.debug("Selector %r present on %s", selector, page.url)

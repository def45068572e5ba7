"""Capture pipeline: one URL in, one PDF out.

Runs the state machine::

    IDLE -> LAUNCHING -> NAVIGATING -> AWAITING_READINESS -> RENDERING
         -> CLOSING -> DONE | FAILED

Launch and every later step happen inside the browser session's scope, so
the session is closed on every exit path. Errors are caught at the pipeline
boundary, logged once at error level, and turned into a failed
``CaptureResult``. There are no retries.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable

from playwright.async_api import Error as PlaywrightError, Page

from pooppdf.browser.navigation import navigate
from pooppdf.browser.readiness import await_readiness
from pooppdf.browser.session import BrowserSession
from pooppdf.capture.output import write_atomic
from pooppdf.exceptions import PoopPDFError, RenderError
from pooppdf.logging_config import null_logger
from pooppdf.models.request import CaptureRequest
from pooppdf.models.results import CaptureResult, CaptureStatus, PrintOptions
from pooppdf.models.states import SESSION_STATES, CaptureState, can_transition
from pooppdf.render.options import build_print_options
from pooppdf.settings.config import BrowserSettings, Settings, get_settings

logger = logging.getLogger(__name__)

SessionFactory = Callable[[BrowserSettings], BrowserSession]


async def render_pdf(page: Page, options: PrintOptions) -> int:
    """Render *page* with *options* and write the PDF to ``options.output_path``.

    Screen media is emulated first: most pages hide content under print
    stylesheets.

    Returns:
        Number of bytes written.

    Raises:
        RenderError: If the renderer or the file write fails. Nothing is
            written to ``options.output_path`` in that case.
    """
    try:
        await page.emulate_media(media="screen")
        pdf_bytes = await page.pdf(**options.to_pdf_kwargs())
    except PlaywrightError as exc:
        raise RenderError(f"PDF generation failed: {exc}") from exc

    try:
        return write_atomic(options.output_path, pdf_bytes)
    except OSError as exc:
        raise RenderError(f"Could not write {options.output_path}: {exc}") from exc


class CapturePipeline:
    """Single-shot page capture. Create one per request."""

    def __init__(self, settings: Settings | None = None, session_factory: SessionFactory | None = None) -> None:
        self.settings = settings or get_settings()
        self._session_factory = session_factory or BrowserSession
        self.state = CaptureState.IDLE
        self.history: list[CaptureState] = [CaptureState.IDLE]

    def _transition(self, target: CaptureState) -> None:
        if not can_transition(self.state, target):
            raise RuntimeError(f"Illegal capture transition {self.state.value} -> {target.value}")
        logger.debug("Capture state %s -> %s", self.state.value, target.value)
        self.state = target
        self.history.append(target)

    def _finish(self, result: CaptureResult, error: BaseException | None, log: logging.Logger) -> CaptureResult:
        result.completed_at = datetime.now(timezone.utc)
        if error is None:
            self._transition(CaptureState.DONE)
            result.status = CaptureStatus.SUCCEEDED
        else:
            self._transition(CaptureState.FAILED)
            result.status = CaptureStatus.FAILED
            result.error_type = type(error).__name__
            result.error_message = str(error) or type(error).__name__
            if isinstance(error, PoopPDFError):
                log.error("%s", result.error_message)
            else:
                log.error("Unexpected error: %s", result.error_message, exc_info=error)
        return result

    async def run(self, request: CaptureRequest, log: logging.Logger | None = None) -> CaptureResult:
        """Capture ``request.url`` to ``request.output_path``.

        Args:
            request: The validated capture request.
            log: Logging sink; ``None`` drops all events.

        Returns:
            The terminal ``CaptureResult``. Failures are reported here,
            never raised.
        """
        if self.state is not CaptureState.IDLE:
            raise RuntimeError("CapturePipeline instances are single-shot")
        log = log or null_logger()
        timeout_ms = self.settings.browser.timeout_ms
        result = CaptureResult(url=request.url, output_path=request.output_path, states=self.history)

        log.info("Generating PDF for URL : %s", request.url)

        session = self._session_factory(self.settings.browser)
        self._transition(CaptureState.LAUNCHING)
        try:
            page = await session.open()
        except Exception as exc:
            await session.close()
            return self._finish(result, exc, log)
        except BaseException:
            await session.close()
            raise

        error: BaseException | None = None
        try:
            self._transition(CaptureState.NAVIGATING)
            await navigate(page, request.url, timeout_ms=timeout_ms)

            self._transition(CaptureState.AWAITING_READINESS)
            await await_readiness(page, request.selector, timeout_ms=timeout_ms)

            self._transition(CaptureState.RENDERING)
            options = build_print_options(request)
            result.bytes_written = await render_pdf(page, options)
            log.info("PDF generated successfully!")
        except Exception as exc:
            error = exc
        finally:
            if self.state in SESSION_STATES:
                self._transition(CaptureState.CLOSING)
            await session.close()

        return self._finish(result, error, log)


def capture(
    request: CaptureRequest,
    log: logging.Logger | None = None,
    settings: Settings | None = None,
) -> CaptureResult:
    """Run a ``CapturePipeline`` to completion on a fresh event loop."""
    return asyncio.run(CapturePipeline(settings).run(request, log))

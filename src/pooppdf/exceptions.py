"""pooppdf exception hierarchy.

Each failure mode of a capture run maps to one exception type. The capture
pipeline catches :class:`PoopPDFError` at its boundary and turns it into a
failed ``CaptureResult``.
"""

from __future__ import annotations


class PoopPDFError(Exception):
    """Base exception for all pooppdf errors."""


class ConfigurationError(PoopPDFError):
    """Raised when the capture request is missing or invalid (e.g. no URL)."""


class LaunchError(PoopPDFError):
    """Raised when the browser engine fails to start."""


class NavigationError(PoopPDFError):
    """Raised when the target URL is unreachable or navigation fails.

    Attributes:
        url: The URL that failed to load.
        reason: Short human-readable reason.
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Navigation to {url} failed: {reason}")


class ReadinessError(PoopPDFError):
    """Raised when the page cannot be judged ready for capture."""


class ReadinessTimeoutError(ReadinessError):
    """Raised when the network never settled or the selector never appeared.

    Attributes:
        condition: The condition still pending at the deadline.
        timeout_ms: The readiness bound that was exceeded.
        selector: The CSS selector being waited on, if any.
    """

    def __init__(self, condition: str, timeout_ms: int, selector: str | None = None) -> None:
        self.condition = condition
        self.timeout_ms = timeout_ms
        self.selector = selector
        super().__init__(f"Timed out after {timeout_ms}ms waiting for {condition}")


class RenderError(PoopPDFError):
    """Raised when PDF generation or writing the output file fails."""

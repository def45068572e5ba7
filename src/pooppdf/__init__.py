"""pooppdf — render a live web page to a paginated PDF with headless Chromium."""

from __future__ import annotations

try:
    from importlib.metadata import version

    __version__ = version("pooppdf")
except Exception:
    __version__ = "0.0.0"

"""Result and option models for a capture run.

``PrintOptions`` is the immutable layout handed to the renderer;
``CaptureResult`` is the terminal outcome that drives the exit code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from pooppdf.models.states import CaptureState


@dataclass(frozen=True)
class PrintOptions:
    """Print layout for one render, derived from a ``CaptureRequest``."""

    output_path: Path
    display_header_footer: bool = True
    margin_top: str = "80px"
    margin_bottom: str = "80px"
    scale: float = 0.8
    width: int = 1080
    header_template: str | None = None
    footer_template: str | None = None

    def to_pdf_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for Playwright's ``page.pdf()``.

        ``path`` is deliberately absent: the pipeline writes the returned
        bytes itself so a failed run never leaves a partial file behind.
        """
        kwargs: dict[str, Any] = {
            "display_header_footer": self.display_header_footer,
            "margin": {"top": self.margin_top, "bottom": self.margin_bottom},
            "scale": self.scale,
            "width": f"{self.width}px",
        }
        if self.header_template is not None:
            kwargs["header_template"] = self.header_template
        if self.footer_template is not None:
            kwargs["footer_template"] = self.footer_template
        return kwargs


class CaptureStatus(str, Enum):
    """Outcome status for a capture run."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class CaptureResult:
    """Complete outcome of one capture run."""

    url: str = ""
    output_path: Path | None = None
    status: CaptureStatus = CaptureStatus.FAILED
    error_type: str = ""
    error_message: str = ""
    bytes_written: int = 0
    states: list[CaptureState] = field(default_factory=list)

    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: datetime | None = None

    @property
    def success(self) -> bool:
        return self.status == CaptureStatus.SUCCEEDED

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict suitable for JSON output."""
        return {
            "url": self.url,
            "output_path": str(self.output_path) if self.output_path else None,
            "status": self.status.value,
            "error_type": self.error_type,
            "error_message": self.error_message,
            "bytes_written": self.bytes_written,
            "states": [s.value for s in self.states],
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

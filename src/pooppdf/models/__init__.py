"""Data models for a single page capture run."""

from pooppdf.models.request import CaptureRequest
from pooppdf.models.results import CaptureResult, CaptureStatus, PrintOptions
from pooppdf.models.states import CaptureState

__all__ = ["CaptureRequest", "CaptureResult", "CaptureState", "CaptureStatus", "PrintOptions"]

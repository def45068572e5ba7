"""Page-to-PDF capture pipeline."""

from pooppdf.capture.pipeline import CapturePipeline, capture

__all__ = ["CapturePipeline", "capture"]

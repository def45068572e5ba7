"""The validated request handed to the capture pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pooppdf.exceptions import ConfigurationError

DEFAULT_OUTPUT_PATH = "output.pdf"

_HOST_SCHEMES = {"http", "https", "ftp", "ws", "wss"}

# Schemes that are absolute without a network location.
_OPAQUE_SCHEMES = {"about", "data", "file"}


class CaptureRequest(BaseModel):
    """One page-to-PDF job, produced once per process invocation.

    ``output_path`` is resolved against the current working directory at
    construction time, so later ``chdir`` calls do not move the artifact.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    output_path: Path = Field(default=Path(DEFAULT_OUTPUT_PATH), validate_default=True)
    selector: str | None = None
    title: str | None = None
    show_page_numbers: bool = False

    @field_validator("url")
    @classmethod
    def _require_absolute_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("url must not be empty")
        parsed = urlparse(value)
        scheme = parsed.scheme.lower()
        if not scheme:
            raise ValueError(f"url must be absolute (missing scheme): {value!r}")
        if scheme in _OPAQUE_SCHEMES or parsed.netloc:
            return value
        if scheme in _HOST_SCHEMES:
            raise ValueError(f"url must include a host: {value!r}")
        raise ValueError(f"url must be absolute (expected scheme://host): {value!r}")

    @field_validator("output_path")
    @classmethod
    def _resolve_output_path(cls, value: Path) -> Path:
        return value.expanduser().resolve()

    @field_validator("selector", "title")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value

    @classmethod
    def build(cls, url: str | None, **kwargs: Any) -> "CaptureRequest":
        """Construct a request, translating validation failures.

        Raises:
            ConfigurationError: If the URL is missing or any field is invalid.
        """
        if url is None:
            raise ConfigurationError("No url given!")
        if kwargs.get("output_path") is None:
            kwargs.pop("output_path", None)
        try:
            return cls(url=url, **kwargs)
        except ValidationError as exc:
            messages = "; ".join(err["msg"] for err in exc.errors())
            raise ConfigurationError(messages) from exc

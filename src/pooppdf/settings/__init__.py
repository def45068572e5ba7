"""Layered configuration for pooppdf."""

from pooppdf.settings.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]

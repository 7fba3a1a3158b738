"""
Custom exception classes for SiteBinder.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class SiteBinderError(Exception):
    """Base exception for all SiteBinder errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(SiteBinderError):
    """Missing or invalid configuration (bad URL, unreadable config file)."""


class FetchError(SiteBinderError):
    """A single URL could not be fetched. Recovered by the crawler."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(reason, {"url": url})
        self.url = url
        self.reason = reason


class NoPagesError(SiteBinderError):
    """The crawl finished without a single extracted page."""


class RenderError(SiteBinderError):
    """The output document could not be written."""


__all__ = [
    "SiteBinderError",
    "ConfigurationError",
    "FetchError",
    "NoPagesError",
    "RenderError",
]

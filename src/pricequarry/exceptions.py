"""
Exception hierarchy for PriceQuarry.
"""

from __future__ import annotations


class PriceQuarryError(Exception):
    """Base class for all PriceQuarry errors."""


class InvalidURLError(PriceQuarryError, ValueError):
    """Raised when a scrape is requested for a missing or unparsable URL."""


class FetchError(PriceQuarryError):
    """Raised by the HTTP client when a page cannot be retrieved."""

    def __init__(self, message: str, *, url: str, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class RenderError(PriceQuarryError):
    """Raised when the headless browser cannot launch or navigate."""

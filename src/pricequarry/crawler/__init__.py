"""
PriceQuarry Crawler Module - page retrieval strategies

- Static: one HTTP GET with a browser User-Agent, bounded timeout and redirects
- Headless: disposable Chromium per request, heavy subresources blocked
"""

from .headless import HeadlessRenderStrategy, launch_browser
from .http_client import FetchResponse, HttpClient
from .static import StaticFetchStrategy

__all__ = [
    "FetchResponse",
    "HeadlessRenderStrategy",
    "HttpClient",
    "StaticFetchStrategy",
    "launch_browser",
]

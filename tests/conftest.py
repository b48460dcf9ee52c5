"""
Shared fixtures for the PriceQuarry test suite.

Provides test configuration, sample product pages and an in-memory stand-in
for the Playwright browser so the headless strategy can be exercised without
launching Chromium.
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import pytest
import structlog

from pricequarry.config import Config


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by CLI tests."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def config() -> Config:
    """Configuration with short timeouts for testing."""
    cfg = Config()
    cfg.fetch.timeout = 5.0
    cfg.render.navigation_timeout = 5.0
    cfg.render.price_wait_timeout = 0.5
    return cfg


# ============================================================================
# Sample pages
# ============================================================================


def json_ld_script(payload: Any) -> str:
    return f'<script type="application/ld+json">{json.dumps(payload)}</script>'


@pytest.fixture
def ld_script():
    """Render a payload as a JSON-LD script tag."""
    return json_ld_script


@pytest.fixture
def page_html():
    """Build a minimal HTML document from head and body fragments."""

    def _build(head: str = "", body: str = "") -> str:
        return f"<!DOCTYPE html><html><head>{head}</head><body>{body}</body></html>"

    return _build


@pytest.fixture
def json_ld_product_page(page_html) -> str:
    """A page whose only product signal is a JSON-LD Product node."""
    return page_html(
        head=json_ld_script(
            {
                "@context": "https://schema.org",
                "@type": "Product",
                "name": "Trail Running Shoe",
                "brand": {"@type": "Brand", "name": "Stride"},
                "image": ["https://cdn.example.com/shoe.jpg"],
                "offers": {"@type": "Offer", "price": "49.99", "priceCurrency": "USD"},
            }
        )
    )


@pytest.fixture
def empty_page(page_html) -> str:
    """A page with no product signal at all."""
    return page_html(body="<div>Loading...</div>")


# ============================================================================
# Fake Playwright browser
# ============================================================================


class FakeRequest:
    def __init__(self, resource_type: str) -> None:
        self.resource_type = resource_type


class FakeRoute:
    def __init__(self, resource_type: str) -> None:
        self.request = FakeRequest(resource_type)
        self.aborted = False
        self.continued = False

    async def abort(self) -> None:
        self.aborted = True

    async def continue_(self) -> None:
        self.continued = True


class FakePage:
    def __init__(
        self,
        html: str = "",
        title: str = "",
        goto_error: Optional[Exception] = None,
        wait_error: Optional[Exception] = None,
        content_error: Optional[Exception] = None,
    ) -> None:
        self.html = html
        self.title_text = title
        self.goto_error = goto_error
        self.wait_error = wait_error
        self.content_error = content_error
        self.routes: List[Any] = []
        self.goto_calls: List[Dict[str, Any]] = []
        self.wait_calls: List[Dict[str, Any]] = []

    async def route(self, pattern: str, handler: Any) -> None:
        self.routes.append((pattern, handler))

    async def goto(self, url: str, **kwargs: Any) -> None:
        self.goto_calls.append({"url": url, **kwargs})
        if self.goto_error:
            raise self.goto_error

    async def wait_for_selector(self, selector: str, **kwargs: Any) -> None:
        self.wait_calls.append({"selector": selector, **kwargs})
        if self.wait_error:
            raise self.wait_error

    async def content(self) -> str:
        if self.content_error:
            raise self.content_error
        return self.html

    async def title(self) -> str:
        return self.title_text


class FakeContext:
    def __init__(self, page: FakePage) -> None:
        self.page = page

    async def new_page(self) -> FakePage:
        return self.page


class FakeBrowser:
    def __init__(self, page: FakePage) -> None:
        self.page = page
        self.context_kwargs: Dict[str, Any] = {}
        self.closed = False

    async def new_context(self, **kwargs: Any) -> FakeContext:
        self.context_kwargs = kwargs
        return FakeContext(self.page)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_page():
    """Factory for FakePage instances."""
    return FakePage


@pytest.fixture
def fake_route():
    """Factory for FakeRoute instances."""
    return FakeRoute


@pytest.fixture
def fake_launcher():
    """Build a browser launcher that hands out a FakeBrowser around ``page``.

    Returns ``(launcher, browser)``; ``browser.closed`` tells whether teardown ran.
    """

    def _make(page: FakePage, launch_error: Optional[Exception] = None):
        browser = FakeBrowser(page)
        launches: List[Any] = []

        @asynccontextmanager
        async def launcher(render_config):
            launches.append(render_config)
            if launch_error is not None:
                raise launch_error
            try:
                yield browser
            finally:
                await browser.close()

        launcher.launches = launches  # type: ignore[attr-defined]
        return launcher, browser

    return _make

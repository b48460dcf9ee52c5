"""
Headless render strategy: load the page in Chromium and extract from the rendered DOM.

One browser process is launched per invocation and always closed before
``run`` returns, whether extraction succeeded, found nothing or failed.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

import structlog
from playwright.async_api import Browser, Route, async_playwright
from playwright.async_api import Error as PlaywrightError

from ..classifier import classify_host, find_profile
from ..config.config import RenderConfig
from ..exceptions import RenderError
from ..extractor.chain import extract_rendered
from ..models import ErrorCode, ProductData, StrategyOutcome
from .static import parse_html

logger = structlog.get_logger(__name__)

BrowserLauncher = Callable[[RenderConfig], AsyncContextManager[Browser]]


@asynccontextmanager
async def launch_browser(config: RenderConfig) -> AsyncIterator[Browser]:
    """Launch a disposable Chromium process, closing it on exit."""
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=config.headless, args=list(config.launch_args))
        try:
            yield browser
        finally:
            await browser.close()


class HeadlessRenderStrategy:
    """Renders the page in a browser and runs the extractor chain on the result."""

    name = "headless"

    def __init__(self, config: RenderConfig, user_agent: str, launcher: Optional[BrowserLauncher] = None) -> None:
        self.config = config
        self.user_agent = user_agent
        self._launch = launcher or launch_browser
        self._blocked = frozenset(config.blocked_resource_types)
        self.logger = logger.bind(component="HeadlessRenderStrategy")

    async def _route_request(self, route: Route) -> None:
        if route.request.resource_type in self._blocked:
            await route.abort()
        else:
            await route.continue_()

    async def _render(self, browser: Browser, url: str) -> ProductData:
        context = await browser.new_context(
            user_agent=self.user_agent,
            viewport={"width": self.config.viewport_width, "height": self.config.viewport_height},
            ignore_https_errors=True,
        )
        page = await context.new_page()
        await page.route("**/*", self._route_request)

        try:
            await page.goto(url, wait_until="domcontentloaded", timeout=self.config.navigation_timeout * 1000)
        except PlaywrightError as e:
            raise RenderError(f"Navigation failed: {e}") from e

        try:
            await page.wait_for_selector(
                self.config.price_selector,
                state="attached",
                timeout=self.config.price_wait_timeout * 1000,
            )
        except PlaywrightError as e:
            self.logger.debug("No price-bearing content before timeout", url=url, error=str(e))

        html = await page.content()
        data = extract_rendered(parse_html(html), url, find_profile(url))
        if data is not None and data.is_sufficient:
            return data

        title = (await page.title() or "").strip()
        if title:
            return ProductData(title=title)
        return data or ProductData()

    async def run(self, url: str) -> StrategyOutcome:
        start = time.time()
        try:
            async with self._launch(self.config) as browser:
                data = await self._render(browser, url)
        except RenderError as e:
            self.logger.info("Headless navigation failed", url=url, error=str(e))
            return StrategyOutcome(
                strategy=self.name,
                error=ErrorCode.RENDER_FAILURE,
                detail=str(e),
                elapsed=time.time() - start,
            )
        except Exception as e:
            self.logger.warning("Headless render failed", url=url, error=str(e), error_type=type(e).__name__)
            return StrategyOutcome(
                strategy=self.name,
                error=ErrorCode.RENDER_FAILURE,
                detail=str(e),
                elapsed=time.time() - start,
            )

        self.logger.debug("Headless extraction completed", url=url, sufficient=data.is_sufficient)
        return StrategyOutcome(
            strategy=self.name,
            data=data.with_source(classify_host(url)),
            elapsed=time.time() - start,
        )

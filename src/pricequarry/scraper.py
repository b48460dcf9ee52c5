"""
Strategy orchestration: static fetch first, headless render when needed.

A scrape moves through START -> STATIC_ATTEMPTED -> (DONE | HEADLESS_ATTEMPTED)
-> DONE. The two strategies run strictly one after the other.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Protocol
from uuid import uuid4

import structlog

from .classifier import classify_host, requires_headless
from .config.config import Config
from .crawler.headless import HeadlessRenderStrategy
from .crawler.static import StaticFetchStrategy
from .exceptions import InvalidURLError
from .models import ErrorCode, ExtractionResult, ProductData, StrategyOutcome
from .observability import increment, observe

logger = structlog.get_logger(__name__)


class ScrapeState(Enum):
    START = "start"
    STATIC_ATTEMPTED = "static_attempted"
    HEADLESS_ATTEMPTED = "headless_attempted"
    DONE = "done"


class Strategy(Protocol):
    """A way of turning a URL into product data."""

    name: str

    async def run(self, url: str) -> StrategyOutcome:
        ...


def select_result(
    static: Optional[StrategyOutcome],
    headless: Optional[StrategyOutcome],
) -> Optional[ProductData]:
    """Pick the answer among the strategy outcomes.

    A sufficient headless result wins over static. A sufficient static result
    is the fallback when headless ran and came back insufficient. None means
    nothing usable was found.
    """
    if headless is not None and headless.is_sufficient:
        return headless.data
    if static is not None and static.is_sufficient:
        return static.data
    return None


def _partial(*outcomes: Optional[StrategyOutcome]) -> Optional[ProductData]:
    for outcome in outcomes:
        if outcome is not None and outcome.data is not None:
            return outcome.data
    return None


class ProductScraper:
    """Extracts product data from a single product-page URL."""

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        static_strategy: Optional[Strategy] = None,
        headless_strategy: Optional[Strategy] = None,
    ) -> None:
        self.config = config or Config()
        self.static_strategy = static_strategy or StaticFetchStrategy(self.config.fetch)
        self.headless_strategy = headless_strategy or HeadlessRenderStrategy(
            self.config.render, user_agent=self.config.fetch.user_agent
        )
        self.logger = logger.bind(component="ProductScraper")

    def _record(self, name: str, labels: dict[str, Any], value: Optional[float] = None) -> None:
        if not self.config.monitoring.metrics_enabled:
            return
        if value is None:
            increment(name, labels=labels)
        else:
            observe(name, value, labels=labels)

    async def _attempt(self, strategy: Strategy, url: str) -> StrategyOutcome:
        outcome = await strategy.run(url)

        if outcome.error is not None:
            result = outcome.error.value
        else:
            result = "sufficient" if outcome.is_sufficient else "insufficient"
        self._record("strategy_attempts_total", {"strategy": strategy.name, "result": result})
        self._record("strategy_duration_seconds", {"strategy": strategy.name}, outcome.elapsed)

        self.logger.info(
            "Strategy finished",
            strategy=strategy.name,
            result=result,
            elapsed=round(outcome.elapsed, 3),
            detail=outcome.detail,
        )
        return outcome

    def _transition(self, state: ScrapeState) -> ScrapeState:
        self.logger.debug("Scrape state", state=state.value)
        return state

    def _finish(self, result: ExtractionResult) -> ExtractionResult:
        self._transition(ScrapeState.DONE)
        self._record("scrapes_total", {"outcome": "ok" if result.ok else (result.error or "unknown")})
        self.logger.info(
            "Scrape finished",
            ok=result.ok,
            error=result.error,
            has_title=result.title is not None,
            price=result.price,
            currency=result.currency,
        )
        return result

    async def scrape(self, url: str) -> ExtractionResult:
        """
        Scrape product data from ``url``.

        Args:
            url: Normalized absolute URL

        Returns:
            ExtractionResult; ``ok`` is False with error ``parse_error`` when
            no strategy recovered a title or a price

        Raises:
            InvalidURLError: if ``url`` is missing or not a string
        """
        if not url or not isinstance(url, str):
            raise InvalidURLError("Invalid URL")

        source = classify_host(url)
        headless_only = requires_headless(url)

        with structlog.contextvars.bound_contextvars(request_id=uuid4().hex[:12], url=url, source=source):
            self._transition(ScrapeState.START)

            static: Optional[StrategyOutcome] = None
            if headless_only:
                self.logger.info("Host requires headless rendering, skipping static fetch")
            else:
                static = await self._attempt(self.static_strategy, url)
            self._transition(ScrapeState.STATIC_ATTEMPTED)

            if static is not None and static.is_sufficient:
                return self._finish(ExtractionResult.success(static.data.with_source(source)))

            headless: Optional[StrategyOutcome] = None
            if self.config.render.enabled:
                headless = await self._attempt(self.headless_strategy, url)
                self._transition(ScrapeState.HEADLESS_ATTEMPTED)

            chosen = select_result(static, headless)
            if chosen is not None:
                return self._finish(ExtractionResult.success(chosen.with_source(source)))

            return self._finish(ExtractionResult.failure(ErrorCode.PARSE_ERROR, source, _partial(static, headless)))


async def scrape_product(url: str, config: Optional[Config] = None) -> ExtractionResult:
    """Scrape ``url`` with a fresh ProductScraper."""
    return await ProductScraper(config).scrape(url)

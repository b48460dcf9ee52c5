"""
Static fetch strategy: plain HTTP GET plus the extractor chain.
"""

from __future__ import annotations

import time
from typing import Optional

import structlog
from bs4 import BeautifulSoup

from ..classifier import classify_host, find_profile
from ..config.config import FetchConfig
from ..exceptions import FetchError
from ..extractor.chain import extract_by_host
from ..models import ErrorCode, ProductData, StrategyOutcome
from .http_client import HttpClient

logger = structlog.get_logger(__name__)


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def extract_static(html: str, url: str) -> Optional[ProductData]:
    """Run the static extractor chain over ``html``; source is set to the classified host."""
    data = extract_by_host(parse_html(html), url, find_profile(url))
    return data.with_source(classify_host(url)) if data is not None else None


class StaticFetchStrategy:
    """Fetches raw HTML and extracts from it. Never raises past ``run``."""

    name = "static"

    def __init__(self, config: FetchConfig) -> None:
        self.config = config
        self.logger = logger.bind(component="StaticFetchStrategy")

    async def run(self, url: str) -> StrategyOutcome:
        start = time.time()
        try:
            async with HttpClient(self.config) as client:
                response = await client.fetch(url)
            data = extract_static(response.text, url)
        except FetchError as e:
            self.logger.info("Static fetch failed", url=url, status=e.status, error=str(e))
            return StrategyOutcome(
                strategy=self.name,
                error=ErrorCode.FETCH_FAILURE,
                detail=str(e),
                elapsed=time.time() - start,
            )
        except Exception as e:
            self.logger.warning("Static extraction failed", url=url, error=str(e), error_type=type(e).__name__)
            return StrategyOutcome(
                strategy=self.name,
                error=ErrorCode.FETCH_FAILURE,
                detail=str(e),
                elapsed=time.time() - start,
            )

        self.logger.debug("Static extraction completed", url=url, found=data is not None)
        return StrategyOutcome(strategy=self.name, data=data, elapsed=time.time() - start)

"""
Single-shot HTTP client for product pages.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Dict, Optional

import aiohttp
import structlog

from ..config.config import FetchConfig
from ..exceptions import FetchError

logger = structlog.get_logger(__name__)


@dataclass
class FetchResponse:
    """Response of a page fetch with timing information."""

    status: int
    headers: Dict[str, str]
    text: str
    start_ts: float
    end_ts: float
    url: str
    final_url: str


def is_acceptable_status(status: int) -> bool:
    return 200 <= status < 400


class HttpClient:
    """HTTP client issuing one browser-like GET per fetch, with no retries."""

    def __init__(self, config: FetchConfig):
        self.config = config
        self.session: Optional[aiohttp.ClientSession] = None

    async def initialize(self) -> None:
        """Open the underlying session."""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent, "Accept": self.config.accept},
            )

    async def close(self) -> None:
        if self.session:
            await self.session.close()
            self.session = None

    async def __aenter__(self) -> "HttpClient":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def fetch(self, url: str) -> FetchResponse:
        """
        Fetch ``url`` following at most ``max_redirects`` redirects.

        Args:
            url: Absolute URL to fetch

        Returns:
            FetchResponse with the decoded body

        Raises:
            FetchError: on timeout, transport errors, too many redirects or a
                final status outside 2xx/3xx
        """
        if self.session is None:
            raise RuntimeError("HTTP client not initialized. Call initialize() first.")

        start_time = time.time()
        try:
            async with self.session.get(
                url,
                allow_redirects=True,
                max_redirects=self.config.max_redirects,
            ) as response:
                if not is_acceptable_status(response.status):
                    raise FetchError(f"Unexpected status {response.status}", url=url, status=response.status)
                text = await response.text(errors="replace")
                result = FetchResponse(
                    status=response.status,
                    headers=dict(response.headers),
                    text=text,
                    start_ts=start_time,
                    end_ts=time.time(),
                    url=url,
                    final_url=str(response.url),
                )
        except asyncio.TimeoutError as e:
            raise FetchError(f"Request timed out after {self.config.timeout}s", url=url) from e
        except aiohttp.TooManyRedirects as e:
            raise FetchError(f"More than {self.config.max_redirects} redirects", url=url) from e
        except aiohttp.ClientError as e:
            raise FetchError(f"Request failed: {e}", url=url) from e

        logger.debug(
            "Fetched page",
            url=url,
            final_url=result.final_url,
            status=result.status,
            bytes=len(result.text),
            elapsed=result.end_ts - result.start_ts,
        )
        return result

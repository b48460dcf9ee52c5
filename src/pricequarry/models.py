"""
Data models shared by the extractors, the fetch strategies and the scraper.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Error codes surfaced on failed results and strategy outcomes."""

    INVALID_URL = "invalid_url"
    FETCH_FAILURE = "fetch_failure"
    RENDER_FAILURE = "render_failure"
    PARSE_ERROR = "parse_error"


def _check_price(price: Optional[float]) -> None:
    if price is None:
        return
    if not math.isfinite(price) or price < 0:
        raise ValueError(f"price must be a finite non-negative number, got {price!r}")


@dataclass(slots=True, frozen=True)
class ParsedPrice:
    """Output of the price/currency normalizer."""

    price: Optional[float]
    raw: Optional[str]
    currency: Optional[str]


@dataclass(slots=True, frozen=True)
class ProductData:
    """Product fields recovered by a single extractor."""

    title: Optional[str] = None
    brand: Optional[str] = None
    image: Optional[str] = None
    price: Optional[float] = None
    currency: Optional[str] = None
    raw_price_text: Optional[str] = None
    source: str = ""

    def __post_init__(self) -> None:
        _check_price(self.price)

    @property
    def is_sufficient(self) -> bool:
        """A title or a price is enough to call the extraction usable."""
        return self.title is not None or self.price is not None

    def with_source(self, source: str) -> ProductData:
        return replace(self, source=source)


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    """Final result of scraping one product URL."""

    title: Optional[str]
    brand: Optional[str]
    image: Optional[str]
    price: Optional[float]
    currency: Optional[str]
    raw_price_text: Optional[str]
    source: str
    ok: bool
    error: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the result."""
        _check_price(self.price)
        if self.ok:
            if self.title is None and self.price is None:
                raise ValueError("ok result must carry a title or a price")
            if self.error is not None:
                raise ValueError("ok result must not carry an error")
        elif self.error is None:
            raise ValueError("failed result must carry an error code")

    @classmethod
    def success(cls, data: ProductData) -> ExtractionResult:
        return cls(
            title=data.title,
            brand=data.brand,
            image=data.image,
            price=data.price,
            currency=data.currency,
            raw_price_text=data.raw_price_text,
            source=data.source,
            ok=True,
        )

    @classmethod
    def failure(cls, error: ErrorCode, source: str, partial: Optional[ProductData] = None) -> ExtractionResult:
        partial = partial or ProductData()
        return cls(
            title=partial.title,
            brand=partial.brand,
            image=partial.image,
            price=partial.price,
            currency=partial.currency,
            raw_price_text=partial.raw_price_text,
            source=source,
            ok=False,
            error=error.value,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Render with the wire field names used by API consumers."""
        payload: Dict[str, Any] = {
            "ok": self.ok,
            "title": self.title,
            "brand": self.brand,
            "image": self.image,
            "price": self.price,
            "currency": self.currency,
            "rawPriceText": self.raw_price_text,
            "source": self.source,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


@dataclass(slots=True, frozen=True)
class StrategyOutcome:
    """What a fetch strategy produced: product data, or the reason it has none."""

    strategy: str
    data: Optional[ProductData] = None
    error: Optional[ErrorCode] = None
    detail: Optional[str] = None
    elapsed: float = 0.0

    @property
    def is_sufficient(self) -> bool:
        return self.data is not None and self.data.is_sufficient

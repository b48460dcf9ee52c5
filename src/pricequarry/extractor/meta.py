"""
Last-resort extraction from Open-Graph/meta tags and price-like elements.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from ..models import ProductData
from .price import normalize_currency, parse_price
from .selectors import Selector, absolute_url, first_value, meta

TITLE_CHAIN = (
    meta('meta[property="og:title"]'),
    Selector("title"),
)

IMAGE_CHAIN = (meta('meta[property="og:image"]'),)

PRICE_CHAIN = (
    meta("meta[itemprop=price]"),
    meta('meta[property="product:price:amount"]'),
    meta("meta[name=price]"),
    meta('meta[name="product:price:amount"]'),
    Selector('[class*="price"], [id*="price"]'),
)

CURRENCY_CHAIN = (
    meta('meta[property="product:price:currency"]'),
    meta("meta[itemprop=priceCurrency]"),
)


def extract_from_meta(soup: BeautifulSoup, url: str) -> ProductData:
    """Permissive extraction that always returns whatever the page metadata offers."""
    price_txt = first_value(soup, PRICE_CHAIN)
    parsed = parse_price(price_txt)

    return ProductData(
        title=first_value(soup, TITLE_CHAIN),
        brand=None,
        image=absolute_url(url, first_value(soup, IMAGE_CHAIN)),
        price=parsed.price,
        currency=parsed.currency or normalize_currency(first_value(soup, CURRENCY_CHAIN)),
        raw_price_text=parsed.raw or price_txt,
    )

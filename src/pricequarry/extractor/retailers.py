"""
Retailer profiles: per-host selector chains and headless policy.

Every supported retailer is a row in ``RETAILER_PROFILES``. Adding a retailer
means adding a profile; nothing else dispatches on host names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from bs4 import BeautifulSoup

from ..models import ProductData
from .json_ld import extract_from_json_ld
from .price import parse_price
from .selectors import Selector, absolute_url, first_value, meta

Chain = Tuple[Selector, ...]

_VISIT_THE = re.compile(r"^Visit the ", re.IGNORECASE)
_STORE_SUFFIX = re.compile(r" Store$", re.IGNORECASE)


def clean_amazon_byline(text: str) -> str:
    """'Visit the Acme Store' -> 'Acme'."""
    return _STORE_SUFFIX.sub("", _VISIT_THE.sub("", text.strip()))


@dataclass(frozen=True)
class RetailerProfile:
    """Registry entry binding a domain marker to extraction rules."""

    name: str
    marker: str
    title: Chain = ()
    price: Chain = ()
    image: Chain = ()
    brand: Chain = ()
    structured_data_first: bool = False
    default_currency: Optional[str] = None
    # Static markup never carries product data for these retailers.
    headless_mandatory: bool = False
    headless_host_prefixes: Tuple[str, ...] = ()

    def matches(self, domain: str) -> bool:
        return self.marker in domain

    def requires_headless(self, domain: str) -> bool:
        return self.headless_mandatory or domain.startswith(self.headless_host_prefixes)

    def extract(self, soup: BeautifulSoup, url: str) -> Optional[ProductData]:
        """Run this retailer's chains against ``soup``; None for headless-mandatory retailers."""
        if self.headless_mandatory:
            return None

        if self.structured_data_first:
            structured = extract_from_json_ld(soup, url)
            if structured is not None and structured.is_sufficient:
                return structured

        price_txt = first_value(soup, self.price)
        parsed = parse_price(price_txt)

        return ProductData(
            title=first_value(soup, self.title),
            brand=first_value(soup, self.brand),
            image=absolute_url(url, first_value(soup, self.image)),
            price=parsed.price,
            currency=parsed.currency or self.default_currency,
            raw_price_text=parsed.raw or price_txt,
        )


OG_TITLE = meta('meta[property="og:title"]')
OG_IMAGE = meta('meta[property="og:image"]')
PAGE_TITLE = Selector("title")
ITEMPROP_PRICE = meta("meta[itemprop=price]")
ANY_PRICE_TEXT = Selector("[class*=price]")


AMAZON = RetailerProfile(
    name="amazon",
    marker="amazon.",
    title=(
        Selector("#productTitle"),
        meta('meta[name="title"]'),
        PAGE_TITLE,
    ),
    price=(
        Selector("#corePriceDisplay_desktop_feature_div .a-offscreen"),
        Selector("#apex_desktop .a-price .a-offscreen"),
        Selector("#priceblock_ourprice"),
        Selector("#priceblock_dealprice"),
        Selector("span.a-price-whole"),
        ITEMPROP_PRICE,
        Selector("[data-asin-price]", attr="data-asin-price"),
    ),
    image=(
        Selector("#landingImage", attr="data-old-hires"),
        Selector("#landingImage", attr="src"),
        Selector("img#imgBlkFront", attr="src"),
        OG_IMAGE,
    ),
    brand=(
        Selector("#bylineInfo", clean=clean_amazon_byline),
        Selector("tr.po-brand td.a-span9 .a-size-base"),
    ),
)

NOON = RetailerProfile(
    name="noon",
    marker="noon.",
    title=(Selector("h1 strong"), OG_TITLE, PAGE_TITLE),
    price=(ITEMPROP_PRICE, Selector('[data-qa="price"]'), ANY_PRICE_TEXT),
    image=(OG_IMAGE, Selector("img[itemprop=image]", attr="src")),
    structured_data_first=True,
    default_currency="AED",
)

SHEIN = RetailerProfile(
    name="shein",
    marker="shein.",
    title=(Selector("h1.product-intro__head-name"), OG_TITLE, PAGE_TITLE),
    price=(
        Selector("span[shepname=originalPrice]"),
        Selector("span[itemprop=price]", attr="content"),
        meta('meta[property="product:price:amount"]'),
        ANY_PRICE_TEXT,
    ),
    image=(OG_IMAGE, Selector("img.product-intro__cover-image", attr="src")),
    structured_data_first=True,
    # Mobile pages hydrate product data client-side.
    headless_host_prefixes=("m.shein.",),
)

TEMU = RetailerProfile(
    name="temu",
    marker="temu.",
    headless_mandatory=True,
)

TRENDYOL = RetailerProfile(
    name="trendyol",
    marker="trendyol.",
    title=(Selector("h1.pr-new-br span", pick="last"), OG_TITLE, PAGE_TITLE),
    price=(
        Selector("span.prc-dsc"),
        Selector("span.prc-org"),
        ITEMPROP_PRICE,
        ANY_PRICE_TEXT,
    ),
    image=(OG_IMAGE, Selector("img[itemprop=image]", attr="src")),
    structured_data_first=True,
)

# Priority order: the first matching marker wins.
RETAILER_PROFILES: Tuple[RetailerProfile, ...] = (AMAZON, SHEIN, NOON, TEMU, TRENDYOL)

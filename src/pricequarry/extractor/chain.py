"""
Extractor chains run by the fetch strategies.
"""

from __future__ import annotations

from typing import Optional

from bs4 import BeautifulSoup

from ..models import ProductData
from .json_ld import extract_from_json_ld
from .meta import extract_from_meta
from .retailers import RetailerProfile


def extract_by_host(soup: BeautifulSoup, url: str, profile: Optional[RetailerProfile]) -> Optional[ProductData]:
    """Retailer chain when a profile matched, else JSON-LD then meta tags."""
    if profile is not None:
        return profile.extract(soup, url)

    structured = extract_from_json_ld(soup, url)
    if structured is not None and structured.is_sufficient:
        return structured
    return extract_from_meta(soup, url)


def extract_rendered(soup: BeautifulSoup, url: str, profile: Optional[RetailerProfile]) -> Optional[ProductData]:
    """Retailer chain, then JSON-LD, then meta tags, against a rendered DOM.

    Returns the first sufficient result, else the best partial one.
    """
    by_host = extract_by_host(soup, url, profile)
    if by_host is not None and by_host.is_sufficient:
        return by_host

    structured = extract_from_json_ld(soup, url)
    if structured is not None and structured.is_sufficient:
        return structured

    fallback = extract_from_meta(soup, url)
    if fallback.is_sufficient:
        return fallback
    return by_host or structured or fallback

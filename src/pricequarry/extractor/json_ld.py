"""
Schema.org Product extraction from JSON-LD script blocks.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterator, List, Optional

import structlog
from bs4 import BeautifulSoup

from ..models import ProductData
from .price import normalize_currency, parse_price
from .selectors import absolute_url

logger = structlog.get_logger(__name__)


def _iter_nodes(data: Any) -> Iterator[Dict[str, Any]]:
    nodes = data if isinstance(data, list) else [data]
    for node in nodes:
        if not isinstance(node, dict):
            continue
        yield node
        graph = node.get("@graph")
        if isinstance(graph, list):
            yield from (member for member in graph if isinstance(member, dict))


def _is_product(node: Dict[str, Any]) -> bool:
    declared = node.get("@type")
    if isinstance(declared, list):
        declared = declared[0] if declared else None
    if not declared:
        return False
    return str(declared).lower() == "product"


def _first_truthy(*values: Any) -> Any:
    for value in values:
        if value:
            return value
    return None


def _as_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value).strip() or None


def _brand(node: Dict[str, Any]) -> Optional[str]:
    brand = node.get("brand")
    if isinstance(brand, list):
        brand = brand[0] if brand else None
    if isinstance(brand, dict):
        return _as_text(brand.get("name"))
    return _as_text(brand)


def _image(node: Dict[str, Any]) -> Optional[str]:
    image = node.get("image")
    if isinstance(image, list):
        image = image[0] if image else None
    if isinstance(image, dict):
        # ImageObject
        image = image.get("url") or image.get("contentUrl")
    return _as_text(image)


def _offer_price(node: Dict[str, Any]) -> tuple[Any, Any]:
    offers = node.get("offers")
    if not offers:
        return None, None

    offer_list: List[Any] = offers if isinstance(offers, list) else [offers]
    price_txt: Any = None
    currency: Any = None
    for offer in offer_list:
        if not isinstance(offer, dict):
            continue
        price_spec = offer.get("priceSpecification")
        if isinstance(price_spec, list):
            price_spec = price_spec[0] if price_spec else None
        price_spec = price_spec if isinstance(price_spec, dict) else {}

        price_txt = _first_truthy(offer.get("price"), price_spec.get("price"))
        currency = _first_truthy(offer.get("priceCurrency"), price_spec.get("priceCurrency"))
        if price_txt:
            break
    return price_txt, currency


def _product_from_node(node: Dict[str, Any], url: str) -> ProductData:
    price_txt, declared_currency = _offer_price(node)
    price_str = str(price_txt) if price_txt else ""
    parsed = parse_price(price_str)

    return ProductData(
        title=_as_text(_first_truthy(node.get("name"), node.get("title"))),
        brand=_brand(node),
        image=absolute_url(url, _image(node)),
        price=parsed.price,
        currency=parsed.currency or normalize_currency(str(declared_currency or "")),
        raw_price_text=parsed.raw or price_str or None,
    )


def load_json_ld_blocks(soup: BeautifulSoup) -> Iterator[Any]:
    """Decoded JSON-LD blocks of the page; blocks that fail to decode are skipped."""
    for index, script in enumerate(soup.find_all("script", type="application/ld+json")):
        content = script.string if script.string is not None else script.get_text()
        if not content or not content.strip():
            continue
        try:
            yield json.loads(content)
        except (ValueError, RecursionError) as e:
            logger.debug("Skipping malformed JSON-LD block", block=index, error=str(e))


def extract_from_json_ld(soup: BeautifulSoup, url: str) -> Optional[ProductData]:
    """Product fields from the first Product-typed JSON-LD node.

    Args:
        soup: Parsed page
        url: Page URL, used to resolve relative image URLs

    Returns:
        ProductData, or None when the page declares no Product node
    """
    for data in load_json_ld_blocks(soup):
        for node in _iter_nodes(data):
            if _is_product(node):
                return _product_from_node(node, url)
    return None

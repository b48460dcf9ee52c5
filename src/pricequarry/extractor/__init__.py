"""
PriceQuarry Extraction Module - product fields from product-page markup

Extractors, most specific first:
1. Retailer profiles: per-host ordered selector chains
2. JSON-LD: schema.org Product nodes
3. Meta tags: Open-Graph and price meta, last resort

All extractors take a parsed page and return ProductData, or None when they
have nothing to say about the page.
"""

from .chain import extract_by_host, extract_rendered
from .json_ld import extract_from_json_ld
from .meta import extract_from_meta
from .price import normalize_currency, parse_price
from .retailers import RETAILER_PROFILES, RetailerProfile
from .selectors import Selector

__all__ = [
    "extract_by_host",
    "extract_rendered",
    "extract_from_json_ld",
    "extract_from_meta",
    "normalize_currency",
    "parse_price",
    "RETAILER_PROFILES",
    "RetailerProfile",
    "Selector",
]

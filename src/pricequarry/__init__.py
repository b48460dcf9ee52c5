"""
PriceQuarry - product data extraction from e-commerce product pages.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .models import ErrorCode, ExtractionResult
from .scraper import ProductScraper, scrape_product

__all__ = ["__version__", "Config", "ErrorCode", "ExtractionResult", "ProductScraper", "scrape_product"]

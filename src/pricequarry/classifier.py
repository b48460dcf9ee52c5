"""
URL normalization and retailer classification.
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlparse, urlunparse

import structlog

from .extractor.retailers import RETAILER_PROFILES, RetailerProfile

logger = structlog.get_logger(__name__)

ALLOWED_SCHEMES = frozenset({"http", "https"})


def normalize_url(url: Any) -> Optional[str]:
    """Return ``url`` without its fragment, or None if it is not a usable absolute URL.

    The URL is parsed strictly: it must be a string with an http(s) scheme, a
    host, and a numeric port when one is given.
    """
    if not url or not isinstance(url, str):
        return None

    try:
        parsed = urlparse(url.strip())
        if parsed.scheme.lower() not in ALLOWED_SCHEMES or not parsed.hostname:
            raise ValueError("Missing scheme or host")
        # Accessing .port validates it
        parsed.port
    except (ValueError, AttributeError, TypeError) as e:
        logger.debug("Rejected URL", url=url, error=str(e))
        return None

    return urlunparse(parsed._replace(scheme=parsed.scheme.lower(), fragment=""))


def host_of(url: str) -> str:
    """Lowercased host (with port) of ``url``; empty string when unparsable."""
    try:
        return urlparse(url).netloc.lower().rpartition("@")[2]
    except (ValueError, AttributeError, TypeError):
        return ""


def bare_domain(url: str) -> str:
    host = host_of(url)
    return host[4:] if host.startswith("www.") else host


def find_profile(url: str) -> Optional[RetailerProfile]:
    """First retailer profile whose domain marker appears in the URL's host."""
    domain = bare_domain(url)
    if not domain:
        return None
    for profile in RETAILER_PROFILES:
        if profile.matches(domain):
            return profile
    return None


def classify_host(url: str) -> str:
    """Retailer identifier for ``url``, or its bare domain when no retailer matches."""
    profile = find_profile(url)
    if profile is not None:
        return profile.name
    return bare_domain(url)


def requires_headless(url: str) -> bool:
    """Whether policy forbids trusting static markup for ``url``."""
    profile = find_profile(url)
    return profile is not None and profile.requires_headless(bare_domain(url))

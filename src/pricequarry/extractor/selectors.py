"""
Table-driven CSS selector chains evaluated against a parsed page.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Optional, Sequence
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag


@dataclass(frozen=True)
class Selector:
    """One step of a fallback chain.

    Reads the text of the matched element, or ``attr`` when given. ``pick``
    chooses between the first and the last match, and ``clean`` post-processes
    the value before the emptiness check.
    """

    css: str
    attr: Optional[str] = None
    pick: Literal["first", "last"] = "first"
    clean: Optional[Callable[[str], str]] = None

    def read(self, soup: BeautifulSoup) -> Optional[str]:
        if self.pick == "first":
            element = soup.select_one(self.css)
        else:
            matches = soup.select(self.css)
            element = matches[-1] if matches else None
        if element is None:
            return None

        value = element_value(element, self.attr)
        if value and self.clean is not None:
            value = self.clean(value).strip()
        return value or None


def element_value(element: Tag, attr: Optional[str] = None) -> Optional[str]:
    """Whitespace-collapsed text of ``element``, or the string value of ``attr``."""
    if attr is None:
        return " ".join(element.get_text().split()) or None
    value = element.get(attr)
    if isinstance(value, list):
        value = " ".join(value)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def first_value(soup: BeautifulSoup, chain: Sequence[Selector]) -> Optional[str]:
    """Value of the first selector in ``chain`` that yields non-empty text."""
    for selector in chain:
        value = selector.read(soup)
        if value:
            return value
    return None


def absolute_url(base: str, value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return urljoin(base, value)


def meta(css: str) -> Selector:
    """Selector reading the ``content`` attribute of a meta tag."""
    return Selector(css, attr="content")

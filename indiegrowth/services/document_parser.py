"""Parse stage: raw HTML into a read-only, selector-queryable page."""

import re
from functools import cached_property
from typing import List
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup, Tag
from bs4.element import CData, NavigableString, Script, Stylesheet, TemplateString

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# Script, style and template contents count as body text
BODY_STRING_TYPES = (NavigableString, CData, Script, Stylesheet, TemplateString)

# Document-metadata elements never contribute to body text
HEAD_ONLY_TAGS = frozenset(("head", "title", "meta", "link", "base"))


def resolve_url(href: str, base_url: str) -> str:
    """Resolve a possibly relative URL against the page URL.

    Args:
        href: Raw ``src``/``href`` attribute value
        base_url: Absolute URL of the fetched page

    Returns:
        Absolute URL

    Raises:
        ValueError: If the result is not an absolute http(s)-style URL
            (malformed host, bad port, no scheme or host)
    """
    resolved = urljoin(base_url, href.strip())
    parts = urlsplit(resolved)
    # Accessing .port validates it
    parts.port
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"Cannot resolve {href!r} to an absolute URL")
    return resolved


def parse_int_prefix(value: str | None) -> int | None:
    """Parse the leading integer of a string (``"120px"`` -> 120).

    Returns None when there is no leading integer or it is zero.
    """
    if not value:
        return None
    match = _LEADING_INT.match(value)
    if not match:
        return None
    return int(match.group(1)) or None


class ParsedPage:
    """A parsed HTML document together with its raw markup and base URL.

    Extractors only read from a ParsedPage; nothing mutates the tree after
    parsing.
    """

    def __init__(self, soup: BeautifulSoup, html: str, url: str):
        self.soup = soup
        self.html = html
        self.url = url

    def select(self, selector: str) -> List[Tag]:
        """All elements matching a CSS selector, in document order."""
        return self.soup.select(selector)

    def select_one(self, selector: str) -> Tag | None:
        """First element matching a CSS selector."""
        return self.soup.select_one(selector)

    def texts(self, selector: str) -> List[str]:
        """Trimmed text of every element matching a selector."""
        return [element_text(el) for el in self.select(selector)]

    def meta_content(self, selector: str) -> str:
        """``content`` attribute of the first matching <meta>, or empty string."""
        element = self.select_one(selector)
        if element is None:
            return ""
        return element.get("content") or ""

    @cached_property
    def body_text(self) -> str:
        """Full text of <body>, inline script and style contents included.

        Without a <body> element, every string outside head, title, meta,
        link and base elements is used.
        """
        body = self.soup.body
        if body is not None:
            return body.get_text(types=BODY_STRING_TYPES)

        return "".join(
            text
            for text in self.soup.descendants
            if type(text) in BODY_STRING_TYPES
            and not any(parent.name in HEAD_ONLY_TAGS for parent in text.parents)
        )


def element_text(element: Tag) -> str:
    """Trimmed text content of an element."""
    return element.get_text().strip()


class DocumentParser:
    """Build a ParsedPage from raw HTML.

    A fresh BeautifulSoup tree is built per call, so concurrent scrapes
    never share parser state. ``html.parser`` tolerates unclosed tags and
    missing head/body without raising.
    """

    def __init__(self, features: str = "html.parser"):
        self._features = features

    def parse(self, html: str, url: str) -> ParsedPage:
        """Parse HTML fetched from ``url``.

        Args:
            html: Raw HTML content
            url: The URL the HTML was fetched from (base for relative links)

        Returns:
            ParsedPage wrapping the tree, the raw HTML and the base URL
        """
        soup = BeautifulSoup(html or "", self._features)
        return ParsedPage(soup=soup, html=html or "", url=url)

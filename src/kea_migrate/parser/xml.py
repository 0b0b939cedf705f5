"""Base XML parsing utilities shared across all parsers."""

from __future__ import annotations

import re
from collections.abc import Iterable

from bs4 import BeautifulSoup, FeatureNotFound, Tag

from kea_migrate.errors import ConfigParseError


def parse_xml(xml: str, parser: str = "xml") -> BeautifulSoup:
    """Parse an XML string and return a BeautifulSoup document.

    Args:
        xml: Raw OPNsense ``config.xml`` content.
        parser: Parser feature to use (default: ``xml``, backed by lxml).

    Returns:
        Parsed BeautifulSoup document.

    Raises:
        ConfigParseError: If *parser* is unavailable or rejects the content.
    """
    try:
        return BeautifulSoup(xml, parser)
    except (FeatureNotFound, ValueError) as exc:
        raise ConfigParseError(f"Failed to parse XML: {exc}") from exc


def normalize_text(s: str) -> str:
    """Strip surrounding whitespace and collapse internal runs.

    Args:
        s: Raw text extracted from an XML element.

    Returns:
        Cleaned string with single spaces between words.
    """
    return re.sub(r"\s+", " ", s).strip()


def find_child(parent: Tag | BeautifulSoup | None, names: str | Iterable[str]) -> Tag | None:
    """Return the first direct child of *parent* named by *names*.

    When *names* is a sequence of spellings, each is tried in turn and the
    first one present wins.

    Args:
        parent: Element to search; ``None`` yields ``None``.
        names: A tag name or ordered alternative spellings.

    Returns:
        Matching child tag, or ``None`` if not found.
    """
    if parent is None:
        return None
    for name in (names,) if isinstance(names, str) else names:
        child = parent.find(name, recursive=False)
        if isinstance(child, Tag):
            return child
    return None


def find_children(parent: Tag | None, name: str) -> list[Tag]:
    """Return all direct children of *parent* with tag *name*, in document order."""
    if parent is None:
        return []
    return [c for c in parent.find_all(name, recursive=False) if isinstance(c, Tag)]


def child_text(parent: Tag, names: str | Iterable[str]) -> str | None:
    """Return the normalized text of the first matching child with content.

    Empty elements are treated as absent so that the next spelling in
    *names* is tried.
    """
    for name in (names,) if isinstance(names, str) else names:
        child = find_child(parent, name)
        if child is not None:
            text = normalize_text(child.get_text())
            if text:
                return text
    return None

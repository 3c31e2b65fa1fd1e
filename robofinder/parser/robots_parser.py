# File: robofinder/parser/robots_parser.py
"""robofinder.parser.robots_parser: extract Allow/Disallow paths and sitemap URLs from robots.txt text.

Directives are not interpreted: every line is searched with two patterns
and whatever follows the colon is collected.

The path pattern is not anchored, so ``allow`` also matches inside
``Disallow:``. Both directive kinds therefore end up in the path output,
which is what users of the tool rely on.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List

__all__ = ["PATH_RE", "SITEMAP_RE", "Extraction", "SeenRegister", "canonical_path", "extract"]

PATH_RE = re.compile(r"allow\s?:\s?(.*)", re.IGNORECASE)
SITEMAP_RE = re.compile(r"(sitemap|site-map)\s?:\s?(.*)", re.IGNORECASE)


class SeenRegister:
    """Insertion-ordered set of canonical strings already reported during a run."""

    def __init__(self) -> None:
        self._items: Dict[str, None] = {}

    def add(self, item: str) -> bool:
        """Register ``item``; return True only the first time it is seen."""
        if item in self._items:
            return False
        self._items[item] = None
        return True

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)


@dataclass
class Extraction:
    """Entries first seen in one snapshot."""

    new_paths: List[str] = field(default_factory=list)
    new_sitemaps: List[str] = field(default_factory=list)


def canonical_path(fragment: str, base_domain: str) -> str:
    """Join a captured path onto the base domain, adding the leading slash if missing."""
    if fragment and not fragment.startswith("/"):
        fragment = "/" + fragment
    return base_domain + fragment


def _captured(match: re.Match[str], group: int) -> str:
    # CRLF files leave a carriage return at the end of the capture
    return match.group(group).rstrip("\r")


def extract(
    body: str,
    base_domain: str,
    paths: SeenRegister,
    sitemaps: SeenRegister,
) -> Extraction:
    """Scan ``body`` line by line and register every path and sitemap found.

    Args:
        body: raw robots.txt snapshot.
        base_domain: scheme://domain.tld without trailing slash.
        paths: register of canonical path URLs, updated in place.
        sitemaps: register of sitemap URLs, updated in place.

    Returns:
        Extraction holding only the entries not registered before.
    """
    found = Extraction()
    for line in body.split("\n"):
        path_match = PATH_RE.search(line)
        sitemap_match = SITEMAP_RE.search(line)

        if path_match:
            url = canonical_path(_captured(path_match, 1), base_domain)
            if paths.add(url):
                found.new_paths.append(url)

        if sitemap_match:
            sitemap = _captured(sitemap_match, 2)
            if sitemaps.add(sitemap):
                found.new_sitemaps.append(sitemap)

    return found

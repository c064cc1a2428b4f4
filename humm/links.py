"""Internal/external link partitioning, deduplication and page typing."""

from __future__ import annotations

import re
from typing import Iterable, List, Tuple

from humm.urls import AbsoluteURL

# ---------------------------------------------------------------------------
# Page types, first full-path match wins
# ---------------------------------------------------------------------------
_PAGE_TYPES: List[Tuple[re.Pattern[str], str]] = [
    (re.compile(r"/"), "index"),
    (re.compile(r"/technology/[a-z0-9-]+/?"), "technology"),
    (re.compile(r"/projects/[a-z0-9-]+/?"), "project"),
    (re.compile(r"/[a-z0-9-]+/?"), "static"),
]

UNKNOWN_PAGE = "unknown"


def is_internal(link: AbsoluteURL, base: AbsoluteURL) -> bool:
    """Return ``True`` if *link* lives on the same host as *base*.

    The comparison is exact: no case folding, trailing-dot or default-port
    normalization.
    """
    return link.host == base.host


def is_external(link: AbsoluteURL, base: AbsoluteURL) -> bool:
    return link.host != base.host


def dedupe(links: Iterable[AbsoluteURL]) -> List[AbsoluteURL]:
    """Drop structurally equal duplicates, keeping the first occurrence."""
    seen: set[AbsoluteURL] = set()
    unique: List[AbsoluteURL] = []
    for link in links:
        if link not in seen:
            seen.add(link)
            unique.append(link)
    return unique


def classify(
    links: Iterable[AbsoluteURL], base: AbsoluteURL
) -> Tuple[List[AbsoluteURL], List[AbsoluteURL]]:
    """Split *links* into ``(internal, external)``, each deduplicated.

    Both lists keep first-seen order.  A link lands in exactly one of them.
    """
    internal: List[AbsoluteURL] = []
    external: List[AbsoluteURL] = []
    for link in links:
        if is_internal(link, base):
            internal.append(link)
        else:
            external.append(link)
    return dedupe(internal), dedupe(external)


def classify_page(url: AbsoluteURL | str) -> str:
    """Return a coarse page-type tag derived from the shape of the URL path.

    Accepts an :class:`AbsoluteURL` or a bare path such as ``"/about"``.
    """
    path = url.path if isinstance(url, AbsoluteURL) else url
    for pattern, kind in _PAGE_TYPES:
        if pattern.fullmatch(path):
            return kind
    return UNKNOWN_PAGE

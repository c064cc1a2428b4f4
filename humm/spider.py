"""End-to-end link pipeline for one starting page.

``gather_links`` turns raw href strings into deduplicated internal and
external link lists; ``run_spider`` probes the internal ones according to a
:class:`~humm.config.Config`.  Deduplication always happens before
credentials are attached, so credentials never affect link identity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

import httpx

from humm.auth import attach_credentials, should_attach
from humm.config import Config
from humm.crawler import ProgressCallback, crawl
from humm.links import classify
from humm.models import Summary
from humm.urls import AbsoluteURL, make_absolute, parse_url

logger = logging.getLogger(__name__)

# Relative references have no scheme; anything else must be fetchable.
_WEB_SCHEMES = {"", "http", "https"}


@dataclass
class LinkSet:
    """All absolute links found on a page, plus the deduplicated split."""

    all: List[AbsoluteURL] = field(default_factory=list)
    internal: List[AbsoluteURL] = field(default_factory=list)
    external: List[AbsoluteURL] = field(default_factory=list)


def gather_links(hrefs: Iterable[str], base: AbsoluteURL) -> LinkSet:
    """Parse, absolutize and classify *hrefs* against *base*.

    ``mailto:``, ``tel:``, ``javascript:`` and other non-web references are
    skipped.  The base's credentials are never copied onto the links.

    Raises:
        LinkParseError: If any href cannot be parsed.
    """
    base = base.without_credentials()
    links: List[AbsoluteURL] = []
    for href in hrefs:
        parsed = parse_url(href)
        if parsed.scheme not in _WEB_SCHEMES:
            logger.debug("skipping non-web link %r", href)
            continue
        links.append(make_absolute(parsed, base))

    internal, external = classify(links, base)
    return LinkSet(all=links, internal=internal, external=external)


def probe_targets(
    internal: Sequence[AbsoluteURL], base: AbsoluteURL, links_limit: int = 0
) -> List[AbsoluteURL]:
    """Apply the link limit, then attach credentials where allowed.

    Every target is a new value; *internal* is left untouched.
    """
    targets = list(internal)
    if links_limit and len(targets) > links_limit:
        targets = targets[:links_limit]
    return [
        attach_credentials(link, base) if should_attach(link, base) else link
        for link in targets
    ]


def run_spider(
    link_set: LinkSet,
    base: AbsoluteURL,
    config: Config,
    on_progress: ProgressCallback | None = None,
    client: httpx.Client | None = None,
) -> Summary:
    """Probe the internal links of *link_set* and return the summary.

    Args:
        link_set: Output of :func:`gather_links`.
        base: The starting URL, carrying credentials when basic auth was
            authorized for it.
        config: Timeout, thread count, link limit and fail-fast policy.
        on_progress: Forwarded to :func:`~humm.crawler.crawl`.
        client: Forwarded to :func:`~humm.crawler.crawl`.

    Raises:
        CrawlAborted: When ``config.fail_fast`` is set and a probe fails.
    """
    targets = probe_targets(link_set.internal, base, config.links_limit)
    return crawl(
        targets,
        timeout=config.timeout,
        max_threads=config.max_threads,
        fail_fast=config.fail_fast,
        on_progress=on_progress,
        client=client,
    )

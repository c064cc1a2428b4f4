"""Bounded-concurrency probing of a set of links.

:func:`crawl` submits one probe per link to a ``ThreadPoolExecutor`` sized to
the configured thread count, so no more than that many requests are ever in
flight.  Results are collected with ``as_completed`` on the calling thread,
which is the only writer of the :class:`~humm.models.Summary`.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Callable, Sequence

import httpx

from humm.errors import CrawlAborted
from humm.models import LinkRecord, ProgressEvent, Summary
from humm.prober import build_client, probe
from humm.urls import AbsoluteURL

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]


def _probe_unless_stopped(
    link: AbsoluteURL,
    timeout: float,
    client: httpx.Client,
    stop: threading.Event,
) -> LinkRecord | None:
    if stop.is_set():
        return None
    return probe(link, timeout, client)


def crawl(
    links: Sequence[AbsoluteURL],
    timeout: float,
    max_threads: int,
    *,
    fail_fast: bool = False,
    on_progress: ProgressCallback | None = None,
    client: httpx.Client | None = None,
) -> Summary:
    """Probe every link in *links* and group the records by status code.

    Args:
        links: Probe targets, credentials already attached where wanted.
        timeout: Per-probe timeout in seconds.
        max_threads: Upper bound on simultaneously running probes.
        fail_fast: Stop at the first failed probe instead of recording it.
        on_progress: Called on this thread once per collected record.
        client: Shared ``httpx.Client``; one sized to the pool is created and
            closed when omitted.

    Returns:
        A :class:`Summary` with one record per link, in arrival order.

    Raises:
        CrawlAborted: With ``fail_fast`` set, on the first failed probe.  The
            exception carries the failed record and the partial summary.
    """
    summary = Summary()
    total = len(links)
    if total == 0:
        return summary

    owned = client is None
    if client is None:
        client = build_client(timeout, max_connections=max_threads)

    stop = threading.Event()
    count = 0
    logger.debug("crawling %d link(s) with %d thread(s)", total, max_threads)
    try:
        with ThreadPoolExecutor(max_workers=max_threads, thread_name_prefix="humm-probe") as pool:
            futures: list[Future[LinkRecord | None]] = [
                pool.submit(_probe_unless_stopped, link, timeout, client, stop)
                for link in links
            ]
            for future in as_completed(futures):
                record = future.result()
                if record is None:
                    continue
                summary.add(record)
                count += 1
                if on_progress is not None:
                    on_progress(ProgressEvent(count=count, total=total, record=record))

                if record.failed:
                    logger.info(
                        "could not get status code for %s: %s",
                        record.display_url,
                        record.error,
                    )
                    if fail_fast:
                        stop.set()
                        pool.shutdown(wait=False, cancel_futures=True)
                        raise CrawlAborted(record, summary)
    finally:
        if owned:
            client.close()

    return summary

"""Tests for the bounded-concurrency crawler.

``humm.crawler.probe`` is replaced by in-process fakes so the tests control
timing and outcome of every probe without touching the network.
"""

from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from unittest.mock import patch

import httpx
import pytest
import respx

from humm.crawler import crawl
from humm.errors import CrawlAborted
from humm.models import FAILED_STATUS, LinkRecord
from humm.urls import AbsoluteURL, parse_url


def _links(n: int) -> list[AbsoluteURL]:
    return [parse_url(f"https://example.com/page-{i}") for i in range(n)]


def _record(url: AbsoluteURL, status_code: int = 200, error: str | None = None) -> LinkRecord:
    now = datetime.now(timezone.utc)
    return LinkRecord(
        url=url, status_code=status_code, request_time=now, response_time=now, error=error
    )


class _CountingProbe:
    """Fake probe tracking how many calls run at the same time."""

    def __init__(self, delay: float = 0.01) -> None:
        self.delay = delay
        self.lock = threading.Lock()
        self.active = 0
        self.peak = 0
        self.calls: list[str] = []

    def __call__(self, url, timeout, client=None) -> LinkRecord:
        with self.lock:
            self.active += 1
            self.peak = max(self.peak, self.active)
            self.calls.append(url.path)
        time.sleep(self.delay)
        with self.lock:
            self.active -= 1
        return _record(url, 404 if url.path.endswith("7") else 200)


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------

class TestConcurrencyCap:
    def test_never_exceeds_max_threads(self) -> None:
        fake = _CountingProbe()
        with patch("humm.crawler.probe", side_effect=fake):
            summary = crawl(_links(100), timeout=5, max_threads=5)

        assert fake.peak <= 5
        assert fake.peak > 1
        assert summary.total == 100
        assert len(fake.calls) == 100

    def test_single_thread_is_sequential(self) -> None:
        fake = _CountingProbe(delay=0.001)
        with patch("humm.crawler.probe", side_effect=fake):
            crawl(_links(10), timeout=5, max_threads=1)

        assert fake.peak == 1


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

class TestCollection:
    def test_groups_by_status_code(self) -> None:
        fake = _CountingProbe(delay=0)
        with patch("humm.crawler.probe", side_effect=fake):
            summary = crawl(_links(20), timeout=5, max_threads=4)

        assert summary.status_codes() == [200, 404]
        assert len(summary.results[404]) == 2  # page-7, page-17
        assert len(summary.results[200]) == 18

    def test_empty_links(self) -> None:
        with patch("humm.crawler.probe") as mock_probe:
            summary = crawl([], timeout=5, max_threads=4)

        mock_probe.assert_not_called()
        assert summary.total == 0

    def test_progress_events(self) -> None:
        events = []
        fake = _CountingProbe(delay=0)
        with patch("humm.crawler.probe", side_effect=fake):
            crawl(_links(6), timeout=5, max_threads=3, on_progress=events.append)

        assert [e.count for e in events] == [1, 2, 3, 4, 5, 6]
        assert {e.total for e in events} == {6}
        assert {e.record.url.path for e in events} == {f"/page-{i}" for i in range(6)}

    def test_failures_are_recorded_by_default(self) -> None:
        def flaky(url, timeout, client=None):
            if url.path == "/page-1":
                return _record(url, FAILED_STATUS, error="ConnectError: refused")
            return _record(url)

        with patch("humm.crawler.probe", side_effect=flaky):
            summary = crawl(_links(3), timeout=5, max_threads=2)

        assert summary.total == 3
        assert [r.url.path for r in summary.failures()] == ["/page-1"]
        assert summary.status_codes() == [FAILED_STATUS, 200]

    def test_real_probe_with_mocked_transport(self) -> None:
        links = [parse_url("https://example.com/a"), parse_url("https://example.com/b")]
        with respx.mock:
            respx.get("https://example.com/a").mock(return_value=httpx.Response(200))
            respx.get("https://example.com/b").mock(return_value=httpx.Response(500))
            summary = crawl(links, timeout=5, max_threads=2)

        assert summary.status_codes() == [200, 500]


# ---------------------------------------------------------------------------
# Fail-fast
# ---------------------------------------------------------------------------

class TestFailFast:
    def test_aborts_on_first_failure(self) -> None:
        probed: list[str] = []

        def probe_in_order(url, timeout, client=None):
            probed.append(url.path)
            if url.path == "/page-1":
                return _record(url, FAILED_STATUS, error="ConnectTimeout: timed out")
            time.sleep(0.05)
            return _record(url)

        with patch("humm.crawler.probe", side_effect=probe_in_order):
            with pytest.raises(CrawlAborted) as info:
                crawl(_links(4), timeout=5, max_threads=1, fail_fast=True)

        assert info.value.record.url.path == "/page-1"
        assert info.value.summary.total == 2
        assert "/page-3" not in probed
        assert "could not get status code for https://example.com/page-1" in str(info.value)

    def test_no_abort_without_failure(self) -> None:
        fake = _CountingProbe(delay=0)
        with patch("humm.crawler.probe", side_effect=fake):
            summary = crawl(_links(5), timeout=5, max_threads=2, fail_fast=True)

        assert summary.total == 5

"""Single-URL status probe."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx

from humm.auth import scrub
from humm.models import FAILED_STATUS, LinkRecord
from humm.urls import AbsoluteURL

logger = logging.getLogger(__name__)

USER_AGENT = "humm/0.1 (+link status checker)"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def build_client(timeout: float, max_connections: int = 10) -> httpx.Client:
    """Return an ``httpx.Client`` suitable for sharing across probe threads."""
    return httpx.Client(
        headers={"User-Agent": USER_AGENT},
        timeout=timeout,
        follow_redirects=True,
        limits=httpx.Limits(max_connections=max_connections),
    )


def probe(
    url: AbsoluteURL, timeout: float, client: httpx.Client | None = None
) -> LinkRecord:
    """GET *url* once and record its status code and latency.

    The response time is taken as soon as the status line and headers are in;
    the body is never read.  Transport, timeout and redirect failures are
    returned as a record with ``status_code == 0`` and an ``error`` message,
    never raised.  No retries.

    Args:
        url: Target, possibly carrying basic-auth credentials.
        timeout: Seconds allowed for each phase of the request.
        client: Shared client; a short-lived one is created when omitted.
    """
    owned = client is None
    if client is None:
        client = build_client(timeout, max_connections=1)

    request_time = _now()
    try:
        with client.stream("GET", str(url), timeout=timeout) as response:
            response_time = _now()
            status_code = response.status_code
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        response_time = _now()
        error = scrub(f"{type(exc).__name__}: {exc}", url)
        logger.debug("probe failed for %s: %s", url.without_credentials(), error)
        return LinkRecord(
            url=url,
            status_code=FAILED_STATUS,
            request_time=request_time,
            response_time=response_time,
            error=error,
        )
    finally:
        if owned:
            client.close()

    logger.debug("probe %s -> %d", url.without_credentials(), status_code)
    return LinkRecord(
        url=url,
        status_code=status_code,
        request_time=request_time,
        response_time=response_time,
    )

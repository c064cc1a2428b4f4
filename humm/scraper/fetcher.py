"""HTTP fetcher for the starting page."""

from __future__ import annotations

import httpx

from humm.auth import scrub
from humm.errors import RootFetchError
from humm.prober import USER_AGENT
from humm.scraper.models import RawPage
from humm.urls import AbsoluteURL

_DEFAULT_HEADERS = {"User-Agent": USER_AGENT}


def fetch_page(url: AbsoluteURL, timeout: float) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    Credentials on *url* are sent as basic auth.  Redirects are followed, but
    the final answer must be exactly 200.

    Raises:
        RootFetchError: On any transport failure or a non-200 status.  The
            message never contains credentials.
    """
    display = str(url.without_credentials())
    try:
        with httpx.Client(
            headers=_DEFAULT_HEADERS,
            timeout=timeout,
            follow_redirects=True,
        ) as client:
            response = client.get(str(url))
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise RootFetchError(display, scrub(f"error {exc}", url)) from None

    if response.status_code != 200:
        raise RootFetchError(
            display,
            f"received status code {response.status_code}",
            status_code=response.status_code,
        )

    return RawPage(url=url, html=response.text, status_code=response.status_code)

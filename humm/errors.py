"""Exception hierarchy for humm.

Everything raised on purpose by the core derives from :class:`HummError` so
the CLI can report it and exit without a traceback.  Network failures of
individual probes are *not* exceptions: they are recorded on the
:class:`~humm.models.LinkRecord` instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from humm.models import LinkRecord, Summary


class HummError(Exception):
    """Base class for all humm errors."""


class ConfigError(HummError, ValueError):
    """A configuration value is missing or out of range."""


class LinkParseError(HummError):
    """An href could not be parsed as a URL."""

    def __init__(self, raw: str, reason: str = "") -> None:
        self.raw = raw
        message = f"error parsing {raw!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class HostNotAllowed(HummError):
    """Basic-auth credentials were requested for a host outside the allow-list."""

    def __init__(self, host: str, allowed: Iterable[str]) -> None:
        self.host = host
        self.allowed = sorted(allowed)
        super().__init__(
            f"cannot add basic auth to {host!r} outside of {self.allowed}"
        )


class RootFetchError(HummError):
    """The starting page could not be fetched or did not answer 200."""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(f"{url}: {reason}")


class CrawlAborted(HummError):
    """A fail-fast crawl stopped on its first failed probe."""

    def __init__(self, record: LinkRecord, summary: Summary) -> None:
        self.record = record
        self.summary = summary
        super().__init__(f"could not get status code for {record.display_url}: {record.error}")

"""Data models for probe results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List

from humm.urls import AbsoluteURL

# Status code recorded for probes that never got a response.
FAILED_STATUS = 0


@dataclass(frozen=True)
class LinkRecord:
    """The outcome of a single probe."""

    url: AbsoluteURL
    status_code: int
    request_time: datetime
    response_time: datetime
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def elapsed_ms(self) -> int:
        """Milliseconds between issuing the request and getting the response."""
        return (self.response_time - self.request_time) // timedelta(milliseconds=1)

    @property
    def display_url(self) -> str:
        """The URL rendered without credentials."""
        return str(self.url.without_credentials())


@dataclass
class Summary:
    """Probe results grouped by status code, in arrival order.

    Only the coordinating thread calls :meth:`add`.
    """

    results: Dict[int, List[LinkRecord]] = field(default_factory=dict)

    def add(self, record: LinkRecord) -> None:
        self.results.setdefault(record.status_code, []).append(record)

    def status_codes(self) -> List[int]:
        return sorted(self.results)

    def failures(self) -> List[LinkRecord]:
        return [r for records in self.results.values() for r in records if r.failed]

    @property
    def total(self) -> int:
        return sum(len(records) for records in self.results.values())


@dataclass(frozen=True)
class ProgressEvent:
    """Emitted by the crawler each time a probe result is collected."""

    count: int
    total: int
    record: LinkRecord

"""Data models for the scraper."""

from __future__ import annotations

from dataclasses import dataclass

from humm.urls import AbsoluteURL


@dataclass
class RawPage:
    """The raw HTTP response for the starting page."""

    url: AbsoluteURL
    html: str
    status_code: int

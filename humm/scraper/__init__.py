"""Scraper package — starting-page fetch & href extraction."""

from humm.scraper.extractor import extract_hrefs, extract_title
from humm.scraper.fetcher import fetch_page
from humm.scraper.models import RawPage

__all__ = ["fetch_page", "extract_hrefs", "extract_title", "RawPage"]

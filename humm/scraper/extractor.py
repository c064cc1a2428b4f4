"""Link and title extraction from the starting page's HTML."""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup


def extract_hrefs(html: str) -> List[str]:
    """Return the raw ``href`` value of every ``<a>`` element, in document order.

    Values are returned untouched: duplicates, fragments and relative
    references are left for the link pipeline to resolve.
    """
    soup = BeautifulSoup(html, "html.parser")
    return [str(a["href"]) for a in soup.find_all("a", href=True)]


def extract_title(html: str) -> str:
    """Return the text content of the first ``<title>`` tag, or empty string."""
    soup = BeautifulSoup(html, "html.parser")
    if soup.title is None:
        return ""
    return soup.title.get_text(strip=True)

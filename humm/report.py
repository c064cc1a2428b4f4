"""Sorting and rendering of crawl summaries."""

from __future__ import annotations

from typing import Dict, List

from humm.config import SortField
from humm.links import classify_page
from humm.models import FAILED_STATUS, LinkRecord, Summary


def sort_summary(
    summary: Summary, sort_field: SortField = SortField.URL
) -> Dict[int, List[LinkRecord]]:
    """Return the groups of *summary* ordered for display.

    Groups come in ascending status-code order.  With ``SortField.URL`` the
    records of a group are ordered by their credential-free URL string,
    otherwise arrival order is kept.  *summary* itself is not modified.
    """
    ordered: Dict[int, List[LinkRecord]] = {}
    for status_code in summary.status_codes():
        records = list(summary.results[status_code])
        if sort_field == SortField.URL:
            records.sort(key=lambda r: r.display_url)
        ordered[status_code] = records
    return ordered


def _status_label(status_code: int) -> str:
    return "error" if status_code == FAILED_STATUS else str(status_code)


def render_record(record: LinkRecord, show_time: bool = False) -> str:
    url = record.url.without_credentials()
    line = f"{url} [{classify_page(url)}]"
    if show_time:
        line = f"[{record.elapsed_ms}ms] {line}"
    if record.failed:
        line += f" ({record.error})"
    return f" - {line}"


def render_report(
    summary: Summary,
    sort_field: SortField = SortField.URL,
    show_200: bool = False,
    show_time: bool = False,
) -> List[str]:
    """Render *summary* as report lines.

    Every group gets a ``"<code>: <count>"`` header (``"error: <count>"`` for
    failed probes).  Entries of the 200 group are listed only with
    *show_200*.  No line ever contains credentials.
    """
    lines: List[str] = []
    for status_code, records in sort_summary(summary, sort_field).items():
        lines.append(f"{_status_label(status_code)}: {len(records)}")
        if status_code == 200 and not show_200:
            continue
        lines.extend(render_record(r, show_time) for r in records)
    return lines

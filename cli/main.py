"""humm CLI — check a page and the status codes of the links it contains.

Usage:
    humm [flags] <url>
    python cli/main.py --help

Without ``-c`` only the starting page is checked (it must answer 200).
With ``-c`` every internal link on the page is probed and a report grouped
by status code is printed.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from humm.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from typing import Optional

import typer

from humm.auth import authorize_base
from humm.config import Config, SortField, load_config
from humm.errors import CrawlAborted, HummError, HostNotAllowed
from humm.report import render_report
from humm.scraper import extract_hrefs, extract_title, fetch_page
from humm.spider import gather_links, run_spider
from humm.urls import AbsoluteURL, parse_url

from cli.rendering import Console, ProgressPrinter

app = typer.Typer(
    name="humm",
    help="Check a web page and the status codes of its internal links.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _parse_base(raw: str, console: Console) -> AbsoluteURL:
    # Credentials embedded in the argument are dropped; use -u/-p, which are
    # checked against the allow-list.
    try:
        base = parse_url(raw).without_credentials()
    except HummError:
        console.error("error parsing arguments: invalid url")
        raise typer.Exit(1)
    if base.scheme not in ("http", "https") or not base.host:
        console.error(f"error parsing arguments: {base} is not an absolute http(s) url")
        raise typer.Exit(1)
    return base


def _crawl(base: AbsoluteURL, html: str, config: Config, console: Console) -> None:
    link_set = gather_links(extract_hrefs(html), base)

    if config.verbose:
        console.echo(f"links_total: {len(link_set.all)}")
        console.echo(f"links_internal_uniq: {len(link_set.internal)}")
        console.echo(f"links_external_uniq: {len(link_set.external)}")

    progress = ProgressPrinter(console)
    progress.start()
    try:
        summary = run_spider(link_set, base, config, on_progress=progress)
    except CrawlAborted as exc:
        progress.finish()
        console.error(str(exc))
        raise typer.Exit(1)
    progress.finish()

    for line in render_report(
        summary,
        sort_field=config.sort_field,
        show_200=config.show_200,
        show_time=config.show_time,
    ):
        console.echo(line)


@app.command()
def main(
    url: str = typer.Argument(..., help="Starting page URL."),
    user: Optional[str] = typer.Option(None, "-u", "--user", help="Username for basic auth."),
    password: Optional[str] = typer.Option(None, "-p", "--password", help="Password for basic auth."),
    crawl: bool = typer.Option(
        False, "-c", "--crawl", help="Crawl all links and report urls with non-200 status codes."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output of link counts."),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Timeout in seconds for each http request [default: 20]."
    ),
    limit: Optional[int] = typer.Option(
        None, "-l", "--limit", help="Limit internal links to crawl, 0 for all [default: 0]."
    ),
    max_threads: Optional[int] = typer.Option(
        None, "-m", "--max-threads", help="Concurrent crawl threads [default: 10]."
    ),
    show_200: bool = typer.Option(
        False, "--200", help="Include urls with status code 200 in the crawl report."
    ),
    sort: Optional[SortField] = typer.Option(
        None, "-s", "--sort", case_sensitive=False, help="Sort report entries by url or time [default: url]."
    ),
    show_time: bool = typer.Option(
        False, "-t", "--time", help="Print time elapsed between request and response."
    ),
    silent: bool = typer.Option(False, "--silent", help="Silence all stdout, preserves stderr."),
    fail_fast: bool = typer.Option(
        False, "--fail-fast", help="Abort the crawl on the first link that cannot be reached."
    ),
    debug: bool = typer.Option(False, "--debug", help="Log debug output to stderr."),
) -> None:
    """Check URL answers 200 and, with -c, report the status of its internal links."""
    _configure_logging(debug)
    console = Console(silent=silent)

    try:
        config = load_config(
            username=user,
            password=password,
            timeout=timeout,
            links_limit=limit,
            max_threads=max_threads,
            sort_field=sort,
            crawl=crawl,
            verbose=verbose,
            show_200=show_200,
            show_time=show_time,
            silent=silent,
            fail_fast=fail_fast or None,
        )
    except HummError as exc:
        console.error(f"error parsing arguments: {exc}")
        raise typer.Exit(1)

    base = _parse_base(url, console)
    console.echo(f"url: {base.without_credentials()}")

    if config.has_credentials:
        try:
            base = authorize_base(base, config.username, config.password)
        except HostNotAllowed as exc:
            console.error(str(exc))
            raise typer.Exit(1)

    try:
        page = fetch_page(base, config.timeout)
        if config.verbose:
            console.echo(f"title: {extract_title(page.html) or '(none)'}")
        if not config.crawl:
            return
        _crawl(base, page.html, config, console)
    except HummError as exc:
        console.error(str(exc))
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()

"""Tests for CLI output helpers."""

from __future__ import annotations

import io
from datetime import datetime, timezone

from cli.rendering import Console, ProgressPrinter
from humm.models import LinkRecord, ProgressEvent
from humm.urls import parse_url


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True


def _event(count: int, total: int) -> ProgressEvent:
    now = datetime.now(timezone.utc)
    record = LinkRecord(
        url=parse_url("https://example.com/"), status_code=200, request_time=now, response_time=now
    )
    return ProgressEvent(count=count, total=total, record=record)


def _run(printer: ProgressPrinter) -> None:
    printer.start()
    for i in (1, 2, 10):
        printer(_event(i, 10))
    printer.finish()


def test_counter_rewrites_in_place(capsys) -> None:
    _run(ProgressPrinter(Console(), stream=_Tty()))
    out = capsys.readouterr().out
    assert out.startswith("crawling internal links: 1/10")
    assert "1/10\b\b\b\b2/10\b\b\b\b10/10" in out
    assert out.endswith("\r")


def test_no_progress_when_redirected(capsys) -> None:
    _run(ProgressPrinter(Console(), stream=io.StringIO()))
    assert capsys.readouterr().out == ""


def test_no_progress_when_silent(capsys) -> None:
    _run(ProgressPrinter(Console(silent=True), stream=_Tty()))
    assert capsys.readouterr().out == ""


def test_console_silent_keeps_stderr(capsys) -> None:
    console = Console(silent=True)
    console.echo("hidden")
    console.error("shown")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "shown\n"

"""Terminal output helpers for the humm CLI."""

from __future__ import annotations

import sys
from typing import TextIO

import typer

from humm.models import ProgressEvent

_ERASE_LINE = "\033[2K"


class Console:
    """Thin wrapper around ``typer.echo`` honouring ``--silent``.

    Silent mode drops everything written to stdout; stderr is always kept.
    """

    def __init__(self, silent: bool = False) -> None:
        self.silent = silent

    def echo(self, message: str = "", nl: bool = True) -> None:
        if not self.silent:
            typer.echo(message, nl=nl)

    def error(self, message: str) -> None:
        typer.echo(message, err=True)


class ProgressPrinter:
    """Renders crawl :class:`ProgressEvent`s as an in-place ``count/total`` counter.

    The counter is rewritten with backspaces and cleared with an erase-line
    sequence, so it is only drawn when stdout is a terminal.  Redirected
    output gets no progress at all.
    """

    def __init__(self, console: Console, stream: TextIO | None = None) -> None:
        self.console = console
        stream = stream if stream is not None else sys.stdout
        self.interactive = not console.silent and stream.isatty()
        self._last = ""

    def start(self) -> None:
        if self.interactive:
            self.console.echo("crawling internal links: ", nl=False)

    def __call__(self, event: ProgressEvent) -> None:
        if not self.interactive:
            return
        text = f"{event.count}/{event.total}"
        self.console.echo("\b" * len(self._last) + text, nl=False)
        self._last = text

    def finish(self) -> None:
        if self.interactive:
            self.console.echo(_ERASE_LINE + "\r", nl=False)
        self._last = ""

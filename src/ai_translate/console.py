from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from .models import OutcomeStatus, RunSummary

_THEME = Theme(
    {
        "info": "cyan",
        "ok": "bold green",
        "warn": "yellow",
        "error": "bold red",
        "meta": "dim",
    }
)

# stderr keeps stdout free for anything piped out of the tool.
console = Console(stderr=True, theme=_THEME, soft_wrap=True, highlight=False, emoji=False)


def _emit(prefix: str, message: str, style: str) -> None:
    # markup off: locale payloads regularly contain [brackets]
    console.print(f"{prefix} {message}" if prefix else message, style=style, markup=False)


def info(message: str) -> None:
    _emit("", message, "info")


def ok(message: str) -> None:
    _emit("✅", message, "ok")


def warn(message: str) -> None:
    _emit("⚠️", message, "warn")


def error(message: str) -> None:
    _emit("❌", message, "error")


def detail(message: str) -> None:
    _emit("", message, "meta")


@contextmanager
def status(text: str) -> Iterator[None]:
    """Spinner while a provider call is in flight; plain passthrough when not a TTY."""
    if not console.is_terminal:
        yield
        return
    with console.status(text, spinner="dots"):
        yield


_STATUS_STYLE = {
    OutcomeStatus.UPDATED: "ok",
    OutcomeStatus.SKIPPED: "warn",
    OutcomeStatus.FAILED: "error",
}


def print_summary(summary: RunSummary) -> None:
    table = Table(title="Translation summary", title_justify="left")
    table.add_column("Locale")
    table.add_column("Status")
    table.add_column("File", style="meta")
    table.add_column("Note", overflow="fold")
    for o in summary.outcomes:
        table.add_row(Text(o.locale), o.status.value, Text(str(o.path)), Text(o.reason), style=_STATUS_STYLE[o.status])
    console.print(table)

    c = summary.counts()
    detail(f"updated={c['updated']} skipped={c['skipped']} failed={c['failed']}")

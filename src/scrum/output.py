"""Terminal formatting for `scrum get` — headers, separators, bodies."""
from __future__ import annotations

import datetime
import logging
import os
import sys

import click

from scrum.defaults import DEFAULT_TERMINAL_WIDTH, MTIME_FORMAT

log = logging.getLogger(__name__)


def columnize(rows: list[str], delim: str = "|", glue: str = "  ") -> str:
    """Align delimited rows into columns.

    ["user | alice", "mtime | 2024-03-01"] ->
    "user   alice\\nmtime  2024-03-01"
    """
    split = [[cell.strip() for cell in row.split(delim)] for row in rows]
    ncols = max((len(r) for r in split), default=0)
    widths = [0] * ncols
    for r in split:
        for i, cell in enumerate(r):
            widths[i] = max(widths[i], len(click.unstyle(cell)))

    lines = []
    for r in split:
        cells = []
        for i, cell in enumerate(r):
            if i == len(r) - 1:
                cells.append(cell)
            else:
                cells.append(cell + " " * (widths[i] - len(click.unstyle(cell))))
        lines.append(glue.join(cells))
    return "\n".join(lines)


def format_mtime(mtime: datetime.datetime, utc: bool) -> str:
    if mtime.tzinfo is None:
        mtime = mtime.replace(tzinfo=datetime.timezone.utc)
    converted = mtime.astimezone(datetime.timezone.utc) if utc else mtime.astimezone()
    return converted.strftime(MTIME_FORMAT)


def header(user: str, mtime: datetime.datetime, utc: bool = False, color: bool = True) -> str:
    """Two-row user/mtime table followed by a blank line."""
    def key(text: str) -> str:
        return click.style(text, fg="bright_white", bold=True) if color else text

    name = click.style(user, fg="bright_white", underline=True) if color else user
    rows = [
        f"{key('user')} | {name}",
        f"{key('mtime')} | {format_mtime(mtime, utc)}",
    ]
    return columnize(rows) + "\n\n"


def separator(width: int) -> str:
    return "-" * width + "\n"


def format_body(body: bytes) -> str:
    return body.decode("utf-8", errors="replace").strip() + "\n"


def terminal_width() -> int:
    """Width of the controlling terminal, or 80 when there is none."""
    try:
        return os.get_terminal_size(sys.stdin.fileno()).columns
    except (OSError, ValueError) as exc:
        log.warning("unable to get terminal size, using default: %s", exc)
        return DEFAULT_TERMINAL_WIDTH

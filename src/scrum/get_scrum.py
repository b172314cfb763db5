"""Get flow — read one user's scrum, or every user's scrum for a day."""

from __future__ import annotations

import datetime
import io
import logging
from typing import Iterable, Optional, TextIO

from scrum.defaults import DEFAULT_TERMINAL_WIDTH
from scrum.errors import DirectoryNotFoundError, ScrumError, StorageError, wrap
from scrum.output import format_body, header, separator
from scrum.paths import resolve, scrum_dir
from scrum.storage import ObjectStorage

log = logging.getLogger(__name__)


def get_one(
    out: TextIO,
    storage: ObjectStorage,
    date: datetime.date,
    user: str,
    include_header: bool = False,
    utc: bool = False,
    color: bool = False,
) -> None:
    """Write one user's scrum to out. Any fetch failure is raised."""
    path = resolve(date, user)
    try:
        obj = storage.get_object(path)
    except StorageError as exc:
        raise StorageError(wrap("unable to get object", exc)) from exc

    if include_header:
        out.write(header(user, obj.last_modified, utc=utc, color=color))
    out.write(format_body(obj.body))


def get_all(
    out: TextIO,
    storage: ObjectStorage,
    date: datetime.date,
    ignore_users: Iterable[str] = (),
    width: int = DEFAULT_TERMINAL_WIDTH,
    utc: bool = False,
    color: bool = False,
) -> int:
    """Write every user's scrum for date, in listing order.

    Each entry is buffered and flushed on its own so a failed fetch never
    tears a neighbouring entry. Per-entry errors are logged; the first one
    is raised after every entry has been attempted. Returns the number of
    entries shown.
    """
    directory = scrum_dir(date)
    try:
        entries = storage.list_directory(directory)
    except DirectoryNotFoundError:
        entries = []
    except StorageError as exc:
        raise StorageError(wrap("unable to list directory", exc)) from exc

    if not entries:
        log.info("no users have scrummed for %s", date.isoformat())
        return 0

    ignored = frozenset(ignore_users)
    rule = separator(width)
    first_error: Optional[ScrumError] = None
    shown = 0
    for ent in entries:
        if ent.name in ignored:
            continue

        buf = io.StringIO()
        buf.write(rule)
        try:
            get_one(buf, storage, date, ent.name, include_header=True, utc=utc, color=color)
            shown += 1
        except (ScrumError, ValueError) as exc:
            log.error("unable to get user's scrum for %s: %s", ent.name, exc)
            if first_error is None:
                first_error = exc if isinstance(exc, ScrumError) else StorageError(str(exc))

        # TODO: pipeline these fetches; per-object latency dominates `get --all`.
        out.write(buf.getvalue())
        out.flush()

    if first_error is not None:
        raise first_error
    return shown

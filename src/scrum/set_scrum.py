"""Set flow — upload a user's scrum for one day or a span of leave days.

Per day: resolve path -> probe -> create dirs / skip / abort / overwrite -> put.
"""

from __future__ import annotations

import datetime
import logging
import sys
from dataclasses import dataclass, field

from scrum.config import SetOptions
from scrum.defaults import LEAVE_DATE_FORMAT
from scrum.errors import ConfigurationError, ConflictingFlagsError, LocalFileError, StorageError, wrap
from scrum.paths import leave_range, parent_dirs, resolve, shift
from scrum.probe import ObjectState, probe
from scrum.storage import ObjectStorage

log = logging.getLogger(__name__)


@dataclass
class SetResult:
    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def validate(opts: SetOptions) -> None:
    """Reject bad flag combinations before any remote call."""
    try:
        resolve(opts.date, opts.user)
    except ValueError as exc:
        raise ConfigurationError(f"a valid user is required (pass --user or set $USER): {exc}") from exc
    if opts.tomorrow and opts.days:
        raise ConflictingFlagsError("tomorrow and days are conflicting options")
    if opts.sick < 0 or opts.vacation < 0:
        raise ConfigurationError("sick and vacation day counts must not be negative")
    if not (opts.sick or opts.vacation or opts.file):
        raise ConfigurationError("nothing to scrum: pass --file, --sick or --vacation")
    try:
        shift(start_date(opts), span(opts))
    except OverflowError as exc:
        raise ConfigurationError("date out of range") from exc


def start_date(opts: SetOptions) -> datetime.date:
    try:
        if opts.tomorrow:
            return shift(opts.date, 1)
        return shift(opts.date, opts.days)
    except OverflowError as exc:
        raise ConfigurationError("date out of range") from exc


def span(opts: SetOptions) -> int:
    if opts.sick > 0 or opts.vacation > 0:
        return max(opts.sick, opts.vacation)
    return 1


def _read_file(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as exc:
        raise LocalFileError(wrap("unable to open file", exc)) from exc


def scrum_body(opts: SetOptions, start: datetime.date, days: int) -> bytes:
    """Pick the body: sick leave > vacation > file contents."""
    end = shift(start, days).strftime(LEAVE_DATE_FORMAT)
    if opts.sick:
        return f"Sick leave until {end}\n".encode()
    if opts.vacation:
        return f"Vacation until {end}\n".encode()
    if opts.file:
        return _read_file(opts.file)
    raise ConfigurationError("nothing to scrum: pass --file, --sick or --vacation")


def _create_dirs(storage: ObjectStorage, path: str) -> None:
    for directory in parent_dirs(path):
        try:
            storage.put_directory(directory)
        except StorageError as exc:
            raise StorageError(wrap("unable to put directory", exc)) from exc


def set_scrum(storage: ObjectStorage, opts: SetOptions) -> SetResult:
    validate(opts)
    start = start_date(opts)
    days = span(opts)
    body = scrum_body(opts, start, days)

    result = SetResult()
    for day in leave_range(start, days):
        path = resolve(day, opts.user)
        found = probe(storage, path)

        if found.state is ObjectState.DIR_MISSING:
            _create_dirs(storage, path)
        elif found.state is ObjectState.ERROR and not opts.force:
            raise StorageError(wrap("unable to get object", found.error)) from found.error
        elif found.state is ObjectState.EXISTS and not opts.force:
            log.warning("scrum for %r already exists, specify -f to override", path)
            result.skipped.append(path)
            continue

        log.info("scrumming for %s", day.strftime(LEAVE_DATE_FORMAT))
        try:
            storage.put_object(path, body)
        except StorageError as exc:
            raise StorageError(wrap("unable to put object", exc)) from exc
        log.info("scrum: got it (%s)", path)
        result.written.append(path)

    return result

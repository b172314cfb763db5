"""Path resolver — date + username to object path.

Layout: stor/scrum/<YYYY>/<MM>/<DD>/<username>, zero-padded. Both `get`
and `set` go through resolve() so reads and writes always agree.
"""

from __future__ import annotations

import datetime
import posixpath

from scrum.defaults import SCRUM_DATE_LAYOUT, SCRUM_DIR, STORAGE_ROOT


def scrum_dir(date: datetime.date) -> str:
    """Directory holding every user's scrum for one day."""
    return posixpath.join(STORAGE_ROOT, SCRUM_DIR, date.strftime(SCRUM_DATE_LAYOUT))


def resolve(date: datetime.date, username: str) -> str:
    if not username or not username.strip():
        raise ValueError("username must not be empty")
    if "/" in username:
        raise ValueError(f"invalid username {username!r}")
    return posixpath.join(scrum_dir(date), username)


def shift(date: datetime.date, days: int) -> datetime.date:
    return date + datetime.timedelta(days=days)


def parent_dirs(path: str) -> list[str]:
    """Every ancestor directory of path, root first.

    parent_dirs("stor/scrum/2024/03/01/alice") ->
    ["stor", "stor/scrum", "stor/scrum/2024", "stor/scrum/2024/03", "stor/scrum/2024/03/01"]
    """
    parts = path.strip("/").split("/")[:-1]
    return ["/".join(parts[: i + 1]) for i in range(len(parts))]


def leave_range(start: datetime.date, days: int) -> list[datetime.date]:
    """Consecutive days beginning at start; at least one day."""
    return [shift(start, i) for i in range(max(days, 1))]

"""Formatter helpers."""
import datetime

import click

from scrum import output
from scrum.output import columnize, format_body, format_mtime, header, separator, terminal_width


def test_columnize_aligns_first_column():
    assert columnize(["user | alice", "mtime | now"]) == "user   alice\nmtime  now"


def test_columnize_ignores_ansi_when_measuring():
    styled = click.style("user", bold=True)
    text = columnize([f"{styled} | alice", "mtime | now"])
    assert click.unstyle(text) == "user   alice\nmtime  now"


def test_separator_width():
    assert separator(3) == "---\n"


def test_format_body_trims_and_adds_single_newline():
    assert format_body(b"\r\n  hello\nworld \n\n") == "hello\nworld\n"
    assert format_body(b"") == "\n"


def test_format_mtime_utc():
    ts = datetime.datetime(2024, 3, 1, 23, 15, 0, tzinfo=datetime.timezone(datetime.timedelta(hours=-5)))
    assert format_mtime(ts, utc=True) == "2024-03-02 04:15:00 UTC"


def test_format_mtime_naive_is_treated_as_utc():
    assert format_mtime(datetime.datetime(2024, 3, 1, 12, 0), utc=True) == "2024-03-01 12:00:00 UTC"


def test_header_without_color_is_plain():
    ts = datetime.datetime(2024, 3, 1, 12, 0, tzinfo=datetime.timezone.utc)
    assert header("alice", ts, utc=True, color=False) == "user   alice\nmtime  2024-03-01 12:00:00 UTC\n\n"


def test_header_with_color_styles_key_and_user():
    ts = datetime.datetime(2024, 3, 1, 12, 0, tzinfo=datetime.timezone.utc)
    text = header("alice", ts, utc=True, color=True)
    assert "\x1b[" in text
    assert click.unstyle(text) == "user   alice\nmtime  2024-03-01 12:00:00 UTC\n\n"


def test_terminal_width_falls_back_to_80(monkeypatch):
    def no_tty(fd):
        raise OSError("not a tty")

    monkeypatch.setattr(output.os, "get_terminal_size", no_tty)
    assert terminal_width() == 80

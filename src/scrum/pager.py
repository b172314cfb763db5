"""Pipe output through $PAGER, less(1), or more(1)."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from typing import Optional, TextIO

from scrum.errors import PagerError, wrap

log = logging.getLogger(__name__)

_FALLBACK_PAGERS = ("less", "more")


def pager_command() -> list[str]:
    """Resolve the pager argv: $PAGER > less -R > more."""
    explicit = os.getenv("PAGER", "").strip()
    if explicit:
        return shlex.split(explicit)
    for name in _FALLBACK_PAGERS:
        path = shutil.which(name)
        if path:
            # -R keeps ANSI colors; -F exits when output fits one screen.
            return [path, "-R", "-F", "-X"] if name == "less" else [path]
    raise PagerError("no pager found: set $PAGER or install less(1)")


class Pager:
    def __init__(self, argv: Optional[list[str]] = None) -> None:
        self.argv = argv
        self.proc: Optional[subprocess.Popen] = None

    def open(self) -> TextIO:
        argv = self.argv or pager_command()
        try:
            self.proc = subprocess.Popen(argv, stdin=subprocess.PIPE, text=True)
        except OSError as exc:
            raise PagerError(wrap("unable to open pager", exc)) from exc
        log.debug("pager started: %s", " ".join(argv))
        if self.proc.stdin is None:
            raise PagerError("pager has no input pipe")
        return self.proc.stdin

    def wait(self) -> int:
        """Close the pipe and block until the user quits the pager."""
        if self.proc is None:
            return 0
        try:
            if self.proc.stdin is not None:
                self.proc.stdin.close()
        except BrokenPipeError:
            # User quit the pager before reading everything.
            pass
        return self.proc.wait()

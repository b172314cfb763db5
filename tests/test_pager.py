"""Pager collaborator."""
import sys

import pytest

from scrum.errors import PagerError
from scrum.pager import Pager, pager_command


def test_pager_env_wins(monkeypatch):
    monkeypatch.setenv("PAGER", "most -s")
    assert pager_command() == ["most", "-s"]


def test_falls_back_to_less(monkeypatch):
    monkeypatch.delenv("PAGER", raising=False)
    monkeypatch.setattr("scrum.pager.shutil.which", lambda name: f"/usr/bin/{name}")
    assert pager_command() == ["/usr/bin/less", "-R", "-F", "-X"]


def test_falls_back_to_more(monkeypatch):
    monkeypatch.delenv("PAGER", raising=False)
    monkeypatch.setattr("scrum.pager.shutil.which", lambda name: "/bin/more" if name == "more" else None)
    assert pager_command() == ["/bin/more"]


def test_no_pager_available(monkeypatch):
    monkeypatch.delenv("PAGER", raising=False)
    monkeypatch.setattr("scrum.pager.shutil.which", lambda name: None)
    with pytest.raises(PagerError):
        pager_command()


def test_open_write_wait(tmp_path):
    sink = tmp_path / "paged.txt"
    script = f"import pathlib, sys; pathlib.Path({str(sink)!r}).write_text(sys.stdin.read())"
    pager = Pager([sys.executable, "-c", script])
    out = pager.open()
    out.write("hello pager\n")
    assert pager.wait() == 0
    assert sink.read_text() == "hello pager\n"


def test_open_missing_binary(tmp_path):
    with pytest.raises(PagerError, match="unable to open pager"):
        Pager([str(tmp_path / "no-such-pager")]).open()


def test_wait_without_open_is_noop():
    assert Pager(["unused"]).wait() == 0


def test_open_without_pipe_is_pager_error(monkeypatch):
    class NoPipe:
        stdin = None

    monkeypatch.setattr("scrum.pager.subprocess.Popen", lambda *a, **kw: NoPipe())
    with pytest.raises(PagerError, match="no input pipe"):
        Pager(["less"]).open()

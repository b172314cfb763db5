"""Verify the scrum console script entry point resolves."""
from importlib.metadata import entry_points

from scrum.cli import cli


def test_cli_callable():
    assert callable(cli)


def test_entrypoint_metadata():
    """Verify the 'scrum' entry point is declared in package metadata."""
    eps = entry_points(group="console_scripts")
    names = [ep.name for ep in eps]
    assert "scrum" in names, f"'scrum' entry point not found in: {names}"
    (ep,) = [ep for ep in eps if ep.name == "scrum"]
    assert ep.value == "scrum.cli:cli"

from __future__ import annotations

import datetime

import pytest

from scrum.storage.local import LocalStorage

SCRUM_ENV_VARS = (
    "SCRUM_CONFIG",
    "SCRUM_STORAGE",
    "SCRUM_LOCAL_ROOT",
    "SCRUM_BUCKET",
    "SCRUM_PREFIX",
    "SCRUM_ENDPOINT_URL",
    "SCRUM_REGION",
    "SCRUM_IGNORE_USERS",
    "SCRUM_LOG_LEVEL",
    "SCRUM_COLOR",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate every test from the caller's scrum config and env."""
    for name in SCRUM_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SCRUM_CONFIG", str(tmp_path / "no-such-config.yaml"))


@pytest.fixture
def store(tmp_path):
    return LocalStorage(tmp_path / "store")


@pytest.fixture
def day():
    return datetime.date(2024, 3, 1)

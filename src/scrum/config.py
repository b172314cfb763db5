from __future__ import annotations

import datetime
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional

import yaml

from scrum.defaults import (
    DEFAULT_LOCAL_ROOT,
    ENV_BUCKET,
    ENV_COLOR,
    ENV_ENDPOINT_URL,
    ENV_IGNORE_USERS,
    ENV_LOCAL_ROOT,
    ENV_LOG_LEVEL,
    ENV_PREFIX,
    ENV_REGION,
    ENV_STORAGE,
    STORAGE_BACKENDS,
    resolve_config_path,
)
from scrum.errors import ConfigurationError

StorageName = Literal["local", "s3"]

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ScrumConfig:
    storage: StorageName = "local"
    local_root: Path = Path(DEFAULT_LOCAL_ROOT).expanduser()
    bucket: str = ""
    prefix: str = ""
    endpoint_url: Optional[str] = None
    region: Optional[str] = None
    ignore_users: frozenset[str] = frozenset()
    color: bool = True
    log_level: str = "INFO"


@dataclass(frozen=True)
class GetOptions:
    date: datetime.date
    user: str
    all_users: bool = False
    use_pager: bool = False
    utc: bool = False


@dataclass(frozen=True)
class SetOptions:
    date: datetime.date
    user: str
    force: bool = False
    tomorrow: bool = False
    days: int = 0
    sick: int = 0
    vacation: int = 0
    file: Optional[str] = None


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigurationError(f"'{name}' must be a boolean, got {value!r}")


def _parse_users(value: Any) -> frozenset[str]:
    """Accept a YAML list or a comma-separated string."""
    if value is None:
        return frozenset()
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set)):
        items = [str(v) for v in value]
    else:
        raise ConfigurationError("'ignore_users' must be a list or comma-separated string")
    return frozenset(u.strip() for u in items if u.strip())


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"unable to read config {path}: {exc}") from exc
    try:
        raw = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"unable to parse config {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError("Top-level config must be a YAML mapping")
    return raw


def load_config(config_path: str | Path | None = None) -> ScrumConfig:
    """Build the process-wide config: YAML file, then env var overrides.

    A missing config file is not an error; every field has a default.
    """
    cfg_path = Path(config_path or resolve_config_path()).expanduser()
    raw = _read_yaml(cfg_path)

    storage = str(os.getenv(ENV_STORAGE) or raw.get("storage", "local")).strip().lower()
    if storage not in STORAGE_BACKENDS:
        raise ConfigurationError(
            f"invalid storage backend '{storage}'. Expected one of: {', '.join(STORAGE_BACKENDS)}."
        )

    # $SCRUM_LOCAL_ROOT is relative to the cwd; the YAML value to the config file.
    env_root = os.getenv(ENV_LOCAL_ROOT)
    if env_root:
        local_root = Path(env_root).expanduser().resolve()
    else:
        local_root = Path(str(raw.get("local_root", DEFAULT_LOCAL_ROOT))).expanduser()
        if not local_root.is_absolute():
            local_root = (cfg_path.parent / local_root).resolve()

    bucket = str(os.getenv(ENV_BUCKET) or raw.get("bucket", "")).strip()
    if storage == "s3" and not bucket:
        raise ConfigurationError("s3 storage requires a bucket (set 'bucket' or $SCRUM_BUCKET)")

    ignore_raw = os.getenv(ENV_IGNORE_USERS)
    ignore_users = _parse_users(ignore_raw if ignore_raw is not None else raw.get("ignore_users"))

    color_raw = os.getenv(ENV_COLOR) or None
    color = _parse_bool("color", color_raw if color_raw is not None else raw.get("color", True))

    return ScrumConfig(
        storage=storage,  # type: ignore[arg-type]
        local_root=local_root,
        bucket=bucket,
        prefix=str(os.getenv(ENV_PREFIX) or raw.get("prefix", "")).strip("/"),
        endpoint_url=os.getenv(ENV_ENDPOINT_URL) or raw.get("endpoint_url") or None,
        region=os.getenv(ENV_REGION) or raw.get("region") or None,
        ignore_users=ignore_users,
        color=color,
        log_level=str(os.getenv(ENV_LOG_LEVEL) or raw.get("log_level", "INFO")).upper(),
    )

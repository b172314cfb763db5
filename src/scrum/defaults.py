"""Shared constants — env var names, storage layout, formats, resolvers.

Single source of truth for where scrum objects live and how dates are
rendered, so `get` and `set` never drift apart.
"""

from __future__ import annotations

import os

# ---------------------------------------------------------------------------
# Env var names
# ---------------------------------------------------------------------------

ENV_CONFIG = "SCRUM_CONFIG"
ENV_STORAGE = "SCRUM_STORAGE"
ENV_LOCAL_ROOT = "SCRUM_LOCAL_ROOT"
ENV_BUCKET = "SCRUM_BUCKET"
ENV_PREFIX = "SCRUM_PREFIX"
ENV_ENDPOINT_URL = "SCRUM_ENDPOINT_URL"
ENV_REGION = "SCRUM_REGION"
ENV_IGNORE_USERS = "SCRUM_IGNORE_USERS"
ENV_LOG_LEVEL = "SCRUM_LOG_LEVEL"
ENV_COLOR = "SCRUM_COLOR"

# ---------------------------------------------------------------------------
# Storage layout: stor/scrum/<YYYY>/<MM>/<DD>/<username>
# ---------------------------------------------------------------------------

STORAGE_ROOT = "stor"
SCRUM_DIR = "scrum"
SCRUM_DATE_LAYOUT = "%Y/%m/%d"

# ---------------------------------------------------------------------------
# Formats
# ---------------------------------------------------------------------------

DATE_INPUT_FORMAT = "%Y-%m-%d"
LEAVE_DATE_FORMAT = "%Y/%m/%d"
MTIME_FORMAT = "%Y-%m-%d %H:%M:%S %Z"

DEFAULT_TERMINAL_WIDTH = 80

# ---------------------------------------------------------------------------
# Default paths
# ---------------------------------------------------------------------------

DEFAULT_CONFIG_PATH = "~/.config/scrum/config.yaml"
DEFAULT_LOCAL_ROOT = "~/.scrum"

STORAGE_BACKENDS = ("local", "s3")


def resolve_config_path() -> str:
    """Resolve config path: ENV_CONFIG > ~/.config/scrum/config.yaml."""
    explicit = os.getenv(ENV_CONFIG)
    if explicit:
        return os.path.expanduser(explicit)
    return os.path.expanduser(DEFAULT_CONFIG_PATH)

"""Classify what currently lives at an object path.

Storage errors are turned into an ObjectState so callers branch on an
enum instead of inspecting exception types.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from scrum.errors import DirectoryNotFoundError, ResourceNotFoundError, StorageError
from scrum.storage import ObjectStorage


class ObjectState(enum.Enum):
    EXISTS = "exists"
    DIR_MISSING = "dir_missing"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class Probe:
    state: ObjectState
    error: Optional[StorageError] = None


def probe(storage: ObjectStorage, path: str) -> Probe:
    try:
        storage.get_object(path)
    except DirectoryNotFoundError as exc:
        return Probe(ObjectState.DIR_MISSING, exc)
    except ResourceNotFoundError as exc:
        return Probe(ObjectState.NOT_FOUND, exc)
    except StorageError as exc:
        return Probe(ObjectState.ERROR, exc)
    return Probe(ObjectState.EXISTS)

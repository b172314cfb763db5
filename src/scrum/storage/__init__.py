"""Object storage abstraction (S3 or local filesystem).

Paths are slash-separated keys such as ``stor/scrum/2024/03/01/alice``.
Directories are first-class: an object can only be written below an
existing directory, mirroring the Manta-style store the tool was built for.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Optional, Protocol

if TYPE_CHECKING:
    from scrum.config import ScrumConfig

EntryType = Literal["object", "directory"]


@dataclass(frozen=True)
class DirEntry:
    name: str
    type: EntryType = "object"
    last_modified: Optional[datetime.datetime] = None


@dataclass(frozen=True)
class StoredObject:
    path: str
    body: bytes
    last_modified: datetime.datetime


class ObjectStorage(Protocol):
    def list_directory(self, path: str) -> list[DirEntry]:
        ...

    def get_object(self, path: str) -> StoredObject:
        ...

    def put_object(self, path: str, data: bytes) -> None:
        ...

    def put_directory(self, path: str) -> None:
        ...


def parent_of(path: str) -> str:
    """Return the directory part of a key ('' for a top-level key)."""
    head, _, _ = path.strip("/").rpartition("/")
    return head


def open_storage(config: ScrumConfig) -> ObjectStorage:
    """Build the backend named by the config."""
    if config.storage == "s3":
        from scrum.storage.s3 import S3Storage
        return S3Storage(
            bucket=config.bucket,
            prefix=config.prefix,
            region=config.region,
            endpoint_url=config.endpoint_url,
        )
    from scrum.storage.local import LocalStorage
    return LocalStorage(config.local_root)


__all__ = ["DirEntry", "ObjectStorage", "StoredObject", "open_storage", "parent_of"]

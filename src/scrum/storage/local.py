from __future__ import annotations

import datetime
from pathlib import Path

from scrum.errors import DirectoryNotFoundError, ResourceNotFoundError, StorageError, wrap
from scrum.storage import DirEntry, StoredObject, parent_of


def _mtime(path: Path) -> datetime.datetime:
    return datetime.datetime.fromtimestamp(path.stat().st_mtime, tz=datetime.timezone.utc)


class LocalStorage:
    """Directory tree on a local or shared filesystem."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        parts = [p for p in key.strip("/").split("/") if p]
        if not parts or any(p in (".", "..") for p in parts):
            raise StorageError(f"invalid storage path {key!r}")
        return self.root.joinpath(*parts)

    def _require_parent(self, key: str) -> None:
        parent = parent_of(key)
        if parent and not self._path(parent).is_dir():
            raise DirectoryNotFoundError(f"directory {parent} does not exist")

    def list_directory(self, path: str) -> list[DirEntry]:
        target = self._path(path)
        if not target.is_dir():
            raise DirectoryNotFoundError(f"directory {path} does not exist")
        entries = []
        for child in sorted(target.iterdir(), key=lambda p: p.name):
            kind = "directory" if child.is_dir() else "object"
            entries.append(DirEntry(name=child.name, type=kind, last_modified=_mtime(child)))
        return entries

    def get_object(self, path: str) -> StoredObject:
        self._require_parent(path)
        target = self._path(path)
        if not target.is_file():
            raise ResourceNotFoundError(f"object {path} does not exist")
        try:
            body = target.read_bytes()
        except OSError as exc:
            raise StorageError(wrap(f"unable to read {path}", exc)) from exc
        return StoredObject(path=path, body=body, last_modified=_mtime(target))

    def put_object(self, path: str, data: bytes) -> None:
        self._require_parent(path)
        target = self._path(path)
        if target.is_dir():
            raise StorageError(f"{path} is a directory")
        try:
            target.write_bytes(data)
        except OSError as exc:
            raise StorageError(wrap(f"unable to write {path}", exc)) from exc

    def put_directory(self, path: str) -> None:
        self._require_parent(path)
        target = self._path(path)
        if target.is_file():
            raise StorageError(f"{path} is an object, not a directory")
        try:
            target.mkdir(exist_ok=True)
        except OSError as exc:
            raise StorageError(wrap(f"unable to create directory {path}", exc)) from exc


__all__ = ["LocalStorage"]

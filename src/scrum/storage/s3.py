from __future__ import annotations

import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from scrum.errors import DirectoryNotFoundError, ResourceNotFoundError, StorageError, wrap
from scrum.storage import DirEntry, StoredObject, parent_of

log = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


def _is_not_found(exc: ClientError) -> bool:
    return str(exc.response.get("Error", {}).get("Code", "")) in _NOT_FOUND_CODES


class S3Storage:
    """S3 (or MinIO) bucket with directories emulated by ``<path>/`` marker keys."""

    def __init__(
        self,
        bucket: str,
        prefix: str = "",
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        client: Any = None,
    ) -> None:
        self.bucket = bucket
        self.prefix = prefix.strip("/")
        if client is None:
            session = boto3.session.Session(region_name=region) if region else boto3.session.Session()
            client = session.client("s3", endpoint_url=endpoint_url)
        self.client = client

    def _key(self, path: str) -> str:
        path = path.strip("/")
        return f"{self.prefix}/{path}" if self.prefix else path

    def _marker(self, path: str) -> str:
        return self._key(path) + "/"

    def _dir_exists(self, path: str) -> bool:
        path = path.strip("/")
        # Top-level directories always exist, like a Manta account's /stor.
        if not path or "/" not in path:
            return True
        try:
            self.client.head_object(Bucket=self.bucket, Key=self._marker(path))
            return True
        except ClientError as exc:
            if not _is_not_found(exc):
                raise StorageError(wrap(f"unable to stat directory {path}", exc)) from exc
        except BotoCoreError as exc:
            raise StorageError(wrap(f"unable to stat directory {path}", exc)) from exc

        # Keys written without markers still imply the directory.
        try:
            resp = self.client.list_objects_v2(Bucket=self.bucket, Prefix=self._marker(path), MaxKeys=1)
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(wrap(f"unable to stat directory {path}", exc)) from exc
        return int(resp.get("KeyCount", 0)) > 0

    def _require_parent(self, path: str) -> None:
        parent = parent_of(path)
        if not self._dir_exists(parent):
            raise DirectoryNotFoundError(f"directory {parent} does not exist")

    def list_directory(self, path: str) -> list[DirEntry]:
        if not self._dir_exists(path):
            raise DirectoryNotFoundError(f"directory {path} does not exist")

        marker = self._marker(path)
        entries: dict[str, DirEntry] = {}
        kwargs: dict[str, Any] = {"Bucket": self.bucket, "Prefix": marker, "Delimiter": "/"}
        while True:
            try:
                resp = self.client.list_objects_v2(**kwargs)
            except (ClientError, BotoCoreError) as exc:
                raise StorageError(wrap(f"unable to list directory {path}", exc)) from exc

            for item in resp.get("Contents", []):
                name = item["Key"][len(marker):]
                if name:
                    entries[name] = DirEntry(name=name, type="object", last_modified=item.get("LastModified"))
            for item in resp.get("CommonPrefixes", []):
                name = item["Prefix"][len(marker):].rstrip("/")
                if name:
                    entries[name] = DirEntry(name=name, type="directory")

            if not resp.get("IsTruncated"):
                break
            kwargs["ContinuationToken"] = resp["NextContinuationToken"]

        return [entries[name] for name in sorted(entries)]

    def get_object(self, path: str) -> StoredObject:
        try:
            resp = self.client.get_object(Bucket=self.bucket, Key=self._key(path))
        except ClientError as exc:
            if not _is_not_found(exc):
                raise StorageError(wrap(f"unable to get {path}", exc)) from exc
            self._require_parent(path)
            raise ResourceNotFoundError(f"object {path} does not exist") from exc
        except BotoCoreError as exc:
            raise StorageError(wrap(f"unable to get {path}", exc)) from exc

        body = resp["Body"]
        try:
            data = body.read()
        except (BotoCoreError, OSError) as exc:
            raise StorageError(wrap(f"unable to read {path}", exc)) from exc
        finally:
            body.close()
        return StoredObject(path=path, body=data, last_modified=resp["LastModified"])

    def put_object(self, path: str, data: bytes) -> None:
        self._require_parent(path)
        try:
            self.client.put_object(Bucket=self.bucket, Key=self._key(path), Body=data)
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(wrap(f"unable to write {path}", exc)) from exc

    def put_directory(self, path: str) -> None:
        self._require_parent(path)
        try:
            self.client.put_object(Bucket=self.bucket, Key=self._marker(path), Body=b"")
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(wrap(f"unable to create directory {path}", exc)) from exc
        log.debug("created directory marker s3://%s/%s", self.bucket, self._marker(path))


__all__ = ["S3Storage"]

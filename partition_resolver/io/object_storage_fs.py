from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Iterator, Protocol

from partition_resolver.core.ports.filesystem import FileStatus, glob_entries, split_path

if TYPE_CHECKING:
    from partition_resolver.io.object_storage_client import OCIObjectStorageClient

LOGGER = logging.getLogger(__name__)

_GLOB_CHARS = re.compile(r"[*?\[]")


class ObjectStorageApi(Protocol):
    """Subset of ``OCIObjectStorageClient`` used by the filesystem."""

    def iter_keys(self, bucket: str, prefix: str | None = None) -> Iterator[str]: ...

    def get_bytes(self, bucket: str, key: str) -> bytes: ...

    def put_bytes(self, bucket: str, key: str, data: bytes) -> None: ...

    def delete_object(self, bucket: str, key: str) -> None: ...


class ObjectStorageFileSystem:
    """
    FileSystem over a flat object-storage bucket.

    Object names have no leading slash; logical paths do. Directories do
    not exist in the store and are reported implicitly from key prefixes,
    so globbing behaves as it does on a hierarchical filesystem.
    """

    def __init__(self, *, bucket: str, client: ObjectStorageApi) -> None:
        self._bucket = bucket
        self._client = client

    @classmethod
    def connect(
        cls,
        *,
        bucket: str,
        region: str | None = None,
        auth_mode: str = "instance_principal",
        oci_config_file: str | None = None,
        oci_profile: str = "DEFAULT",
    ) -> ObjectStorageFileSystem:
        from partition_resolver.io.object_storage_client import OCIObjectStorageClient

        client: OCIObjectStorageClient = OCIObjectStorageClient(
            region=region,
            auth_mode=auth_mode,
            oci_config_file=oci_config_file,
            oci_profile=oci_profile,
        )
        return cls(bucket=bucket, client=client)

    @property
    def bucket(self) -> str:
        return self._bucket

    @staticmethod
    def _key(path: str) -> str:
        return "/".join(split_path(path))

    @staticmethod
    def _list_prefix(pattern: str) -> str:
        """Longest literal prefix of ``pattern`` usable as a listing prefix."""
        key = "/".join(split_path(pattern))
        match = _GLOB_CHARS.search(key)
        return key if match is None else key[: match.start()]

    def list(self, pattern: str) -> list[FileStatus]:
        prefix = self._list_prefix(pattern)
        keys = ["/" + key for key in self._client.iter_keys(self._bucket, prefix or None)]
        statuses = glob_entries("/" + self._key(pattern), keys)
        LOGGER.debug("listed %s in bucket %s: %d entries", pattern, self._bucket, len(statuses))
        return statuses

    def read_bytes(self, path: str) -> bytes:
        return self._client.get_bytes(self._bucket, self._key(path))

    def write_bytes(self, path: str, data: bytes) -> None:
        self._client.put_bytes(self._bucket, self._key(path), data)

    def delete(self, path: str) -> None:
        key = self._key(path)
        for existing in list(self._client.iter_keys(self._bucket, key)):
            if existing == key or existing.startswith(key + "/"):
                self._client.delete_object(self._bucket, existing)

    def __repr__(self) -> str:
        return f"ObjectStorageFileSystem(bucket={self._bucket!r})"

"""Encrypted key-value storage used by the cache and favorites layers.

Two backends implement :class:`SecureStorage`: an encrypted file store for real
use and an in-memory store for tests.  :class:`StorageClient` layers JSON
encoding on top so callers only deal with plain Python values.  Every backend
failure surfaces as :class:`StorageError`; deciding whether that is fatal is
left to the caller.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from hashlib import sha256
from pathlib import Path
from typing import Any, Protocol

from cryptography.fernet import Fernet, InvalidToken

logger = logging.getLogger(__name__)

EMPLOYER_CACHE_KEY = "com.employersearch.cache.employers"
EMPLOYER_CACHE_TIMESTAMP_KEY = "com.employersearch.cache.timestamp"
FAVORITES_KEY = "com.employersearch.favorites"

_ENTRY_SUFFIX = ".bin"


class StorageError(Exception):
    """Raised when a storage entry cannot be read, written, or decoded."""


class SecureStorage(Protocol):
    """Byte-oriented key-value store."""

    def get_bytes(self, key: str) -> bytes | None:
        ...

    def set_bytes(self, key: str, value: bytes) -> None:
        ...

    def delete(self, *keys: str) -> None:
        ...


def load_or_create_key(path: Path) -> bytes:
    """Return the Fernet key stored at ``path``, generating it on first use."""

    try:
        return path.read_bytes().strip()
    except FileNotFoundError:
        pass
    except OSError as exc:
        raise StorageError(f"Unable to read storage key at {path}: {exc}") from exc

    key = Fernet.generate_key()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "wb") as handle:
            handle.write(key)
    except FileExistsError:
        # Another process created the key between the read and the write.
        return path.read_bytes().strip()
    except OSError as exc:
        raise StorageError(f"Unable to create storage key at {path}: {exc}") from exc

    logger.info("Generated new storage key at %s", path)
    return key


class EncryptedFileStorage:
    """Store each entry as a Fernet-encrypted file inside ``directory``.

    File names are derived from a SHA-256 digest of the logical key so keys may
    contain any characters.  Writes land in a temporary file that is moved into
    place with :func:`os.replace`, which keeps every entry either fully old or
    fully new even when the process dies mid-write.
    """

    def __init__(self, directory: Path, key: bytes | str) -> None:
        self._directory = Path(directory)
        try:
            self._fernet = Fernet(key)
        except (ValueError, TypeError) as exc:
            raise StorageError(f"Invalid storage encryption key: {exc}") from exc
        self._lock = threading.Lock()

    @property
    def directory(self) -> Path:
        return self._directory

    def _path_for(self, key: str) -> Path:
        digest = sha256(key.encode("utf-8")).hexdigest()
        return self._directory / f"{digest}{_ENTRY_SUFFIX}"

    def get_bytes(self, key: str) -> bytes | None:
        path = self._path_for(key)
        try:
            token = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"Unable to read entry {key}: {exc}") from exc

        try:
            return self._fernet.decrypt(token)
        except InvalidToken as exc:
            raise StorageError(f"Entry {key} could not be decrypted") from exc

    def set_bytes(self, key: str, value: bytes) -> None:
        token = self._fernet.encrypt(value)
        path = self._path_for(key)
        with self._lock:
            try:
                self._directory.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    dir=self._directory, prefix=".tmp-", suffix=_ENTRY_SUFFIX
                )
                try:
                    with os.fdopen(fd, "wb") as handle:
                        handle.write(token)
                    os.replace(tmp_name, path)
                except BaseException:
                    Path(tmp_name).unlink(missing_ok=True)
                    raise
            except OSError as exc:
                raise StorageError(f"Unable to write entry {key}: {exc}") from exc

    def delete(self, *keys: str) -> None:
        if not keys:
            return
        with self._lock:
            for key in keys:
                try:
                    self._path_for(key).unlink(missing_ok=True)
                except OSError as exc:
                    raise StorageError(f"Unable to delete entry {key}: {exc}") from exc


class InMemorySecureStorage:
    """Dictionary-backed storage for tests and throwaway sessions."""

    def __init__(self) -> None:
        self._entries: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def get_bytes(self, key: str) -> bytes | None:
        with self._lock:
            return self._entries.get(key)

    def set_bytes(self, key: str, value: bytes) -> None:
        with self._lock:
            self._entries[key] = bytes(value)

    def delete(self, *keys: str) -> None:
        with self._lock:
            for key in keys:
                self._entries.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._entries)


class StorageClient:
    """JSON convenience wrapper around a :class:`SecureStorage` backend."""

    def __init__(self, storage: SecureStorage) -> None:
        self._storage = storage

    @property
    def storage(self) -> SecureStorage:
        return self._storage

    def get_json(self, key: str) -> Any:
        payload = self._storage.get_bytes(key)
        if payload is None:
            return None
        try:
            return json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StorageError(f"Entry {key} does not contain valid JSON") from exc

    def set_json(self, key: str, value: Any) -> None:
        try:
            encoded = json.dumps(value).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Value for {key} is not JSON serialisable: {exc}") from exc
        self._storage.set_bytes(key, encoded)

    def delete(self, *keys: str) -> None:
        self._storage.delete(*keys)


__all__ = [
    "EMPLOYER_CACHE_KEY",
    "EMPLOYER_CACHE_TIMESTAMP_KEY",
    "EncryptedFileStorage",
    "FAVORITES_KEY",
    "InMemorySecureStorage",
    "SecureStorage",
    "StorageClient",
    "StorageError",
    "load_or_create_key",
]

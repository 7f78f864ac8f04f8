"""
JSON File Key-Value Store

Durable implementation of KeyValueStoreProtocol backed by a single JSON
object file whose values are all strings.

Atomic Writes:
    Every ``set``/``delete`` rewrites the file through a temporary file in
    the same directory followed by a rename, so a crash never leaves a
    half-written store behind.

Corrupt Files:
    Reads of an undecodable file raise ``StorageError``. Writes start over
    from an empty mapping and replace the file, so one bad file never
    blocks later saves.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

import structlog

from todokeeper.core.domain.errors import StorageError
from todokeeper.core.interfaces.key_value import KeyValueStoreProtocol


class _CorruptStoreError(StorageError):
    """The store file exists but its content cannot be decoded."""


class JsonFileKeyValueStore(KeyValueStoreProtocol):
    """
    File-based string store.

    The file layout is a flat JSON object:
    ``{"tasks": "[...]", "filter": "all"}``

    Example:
        >>> store = JsonFileKeyValueStore(".todokeeper/store.json")
        >>> store.set("filter", "active")
        >>> JsonFileKeyValueStore(".todokeeper/store.json").get("filter")
        'active'
    """

    def __init__(self, path: str | Path) -> None:
        """
        Initialize the store.

        Args:
            path: Location of the backing JSON file. Parent directories are
                created on the first write.
        """
        self.path = Path(path)
        self.logger = structlog.get_logger(__name__).bind(component="json_file_kv_store")

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_for_update(key)
        data[key] = value
        self._write(data, key=key)

    def delete(self, key: str) -> None:
        data = self._read_for_update(key)
        if key not in data:
            return
        del data[key]
        self._write(data, key=key)

    def _read(self) -> dict[str, str]:
        """
        Load the whole store.

        Returns:
            Mapping of keys to string values; empty if the file is missing.
            Non-string values are skipped.

        Raises:
            StorageError: If the file cannot be read or decoded, or is not a
                JSON object.
        """
        if not self.path.exists():
            return {}

        try:
            content = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise _CorruptStoreError(
                f"Store file is not valid UTF-8: {self.path}", details={"error": str(e)}
            ) from e
        except OSError as e:
            raise StorageError(
                f"Cannot read store file: {self.path}", details={"error": str(e)}
            ) from e

        if not content.strip():
            return {}

        try:
            raw = json.loads(content)
        except json.JSONDecodeError as e:
            raise _CorruptStoreError(
                f"Store file is not valid JSON: {self.path}", details={"error": str(e)}
            ) from e

        if not isinstance(raw, dict):
            raise _CorruptStoreError(
                f"Store file must contain a JSON object: {self.path}",
                details={"found": type(raw).__name__},
            )

        return {k: v for k, v in raw.items() if isinstance(v, str)}

    def _read_for_update(self, key: str) -> dict[str, str]:
        """Load the store before a write; corrupt content is discarded."""
        try:
            return self._read()
        except _CorruptStoreError as e:
            self.logger.warning(
                "store_file_corrupt_overwritten",
                path=str(self.path),
                key=key,
                error=e.message,
            )
            return {}

    def _write(self, data: dict[str, str], *, key: str) -> None:
        """
        Write the whole store atomically.

        Raises:
            StorageError: If any file operation fails.
        """
        temp_path: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent, suffix=".tmp", prefix=f".{self.path.stem}_"
            )
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            # Atomic rename
            Path(temp_path).replace(self.path)
            temp_path = None
            self.logger.debug("store_file_written", path=str(self.path), key=key)
        except OSError as e:
            raise StorageError(
                f"Cannot write store file: {self.path}", key=key, details={"error": str(e)}
            ) from e
        finally:
            if temp_path is not None and Path(temp_path).exists():
                Path(temp_path).unlink()

"""
Key-value storage backends.

Values are opaque strings; the save store serializes records to JSON
before writing them here.
"""

import os
import re
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from config.logging_config import get_logger

from ..core.error_handling import DataIntegrityError, StorageError

logger = get_logger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(ABC):
    """String key-value store used by every persistent component."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Return the stored value, or None when the key is absent.

        Raises:
            StorageError: The backend could not be read
            DataIntegrityError: The stored bytes are not a valid value
        """

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key; removing a missing key is not an error."""

    @abstractmethod
    def list_keys(self, prefix: str = "") -> List[str]:
        """List stored keys starting with ``prefix``, sorted."""


class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store for tests and the ``memory`` backend."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def list_keys(self, prefix: str = "") -> List[str]:
        return sorted(key for key in self._data if key.startswith(prefix))


class JsonFileKeyValueStore(KeyValueStore):
    """
    One file per key under a root directory.

    Writes go to a temporary file that is fsynced and then moved over the
    target, so a crash never leaves a half-written value behind.
    """

    SUFFIX = ".json"

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise StorageError(f"Invalid storage key: {key!r}", operation="resolve", key=key)
        return self.root / f"{key}{self.SUFFIX}"

    @contextmanager
    def _atomic_write(self, path: Path) -> Iterator:
        temp_path = path.with_suffix(f"{path.suffix}.tmp.{os.getpid()}")
        try:
            with open(temp_path, "w", encoding="utf-8") as file_obj:
                yield file_obj
                file_obj.flush()
                os.fsync(file_obj.fileno())
            os.replace(temp_path, path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DataIntegrityError(f"Value of {key} is not valid UTF-8: {e}", source=key) from e
        except OSError as e:
            raise StorageError(f"Failed to read {key}: {e}", operation="get", key=key) from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            with self._atomic_write(path) as file_obj:
                file_obj.write(value)
        except OSError as e:
            raise StorageError(f"Failed to write {key}: {e}", operation="set", key=key) from e
        logger.debug("Stored key", key=key, size=len(value))

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise StorageError(f"Failed to delete {key}: {e}", operation="delete", key=key) from e

    def list_keys(self, prefix: str = "") -> List[str]:
        keys = [
            path.name[: -len(self.SUFFIX)]
            for path in self.root.glob(f"*{self.SUFFIX}")
            if path.is_file()
        ]
        return sorted(key for key in keys if key.startswith(prefix))

"""
Key/value storage backends for client-side state.

Each backend stores JSON text under a string key, the same contract the cart
store expects from device storage: get_item / set_item / remove_item.
"""

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Protocol, Union

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage; contents vanish with the process"""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage:
    """
    One JSON file per key inside a directory.

    Writes go to a temporary file in the same directory which then replaces the
    target, so a crash mid-write never leaves a truncated document behind.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        safe_name = re.sub(r"[^A-Za-z0-9_.-]", "_", key)
        return self.directory / f"{safe_name}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self._path_for(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{target.stem}-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, target)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove_item(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)


class RedisStorage:
    """Keys stored as plain Redis strings, optionally namespaced"""

    def __init__(self, client, namespace: str = "cleanic:"):
        self.client = client
        self.namespace = namespace

    def get_item(self, key: str) -> Optional[str]:
        value = self.client.get(f"{self.namespace}{key}")
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set_item(self, key: str, value: str) -> None:
        self.client.set(f"{self.namespace}{key}", value)

    def remove_item(self, key: str) -> None:
        self.client.delete(f"{self.namespace}{key}")


def get_default_storage() -> KeyValueStorage:
    """Storage backend selected by CART_STORAGE_BACKEND"""
    from ..config import CART_STORAGE_BACKEND, CART_STORAGE_DIR

    if CART_STORAGE_BACKEND == "redis":
        from ..redis_client import get_redis_client

        logger.info("🛒 Using Redis cart storage")
        return RedisStorage(get_redis_client())

    if CART_STORAGE_BACKEND != "file":
        logger.warning(f"Unknown CART_STORAGE_BACKEND '{CART_STORAGE_BACKEND}', using file storage")

    logger.info(f"🛒 Using file cart storage at {CART_STORAGE_DIR}")
    return FileStorage(CART_STORAGE_DIR)

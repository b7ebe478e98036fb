# livestock_core/storage/local_storage.py
"""
Durable local storage for the client session.

A small key/value store that keeps one JSON document per key in a
directory, so the session (``user`` and ``tokens``) survives a restart.
Reads are synchronous so stores can rehydrate in their constructors.
"""
import json
import os
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional

from livestock_core.errors import StorageError
from livestock_core.logging import get_logger

logger = get_logger(__name__)

# Default storage directory
DEFAULT_STORAGE_DIR = Path(".session")

# Fixed keys of the persisted session
USER_KEY = "user"
TOKENS_KEY = "tokens"


class LocalStorage:
    """Persists JSON-serializable values to disk, one file per key."""

    def __init__(self, storage_dir: Optional[Path] = None):
        """Initialize storage with optional custom directory."""
        self.storage_dir = Path(storage_dir) if storage_dir else DEFAULT_STORAGE_DIR
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _get_path(self, key: str) -> Path:
        """Get the file path for a stored key."""
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise StorageError(f"Invalid storage key: {key!r}", key=key)
        return self.storage_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[Any]:
        """
        Load a value from storage.

        Returns:
            The stored value, or None when the key is absent or unreadable
        """
        path = self._get_path(key)
        with self._lock:
            if not path.exists():
                return None
            try:
                with open(path, "r", encoding="utf-8") as f:
                    document = json.load(f)
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Ignoring unreadable storage entry {key}: {e}")
                return None

        if isinstance(document, dict) and "value" in document:
            return document["value"]
        return None

    def set_item(self, key: str, value: Any) -> None:
        """
        Save a value to storage, replacing any previous value atomically.

        Raises:
            StorageError: The value is not serializable or the write failed
        """
        path = self._get_path(key)
        document = {"value": value, "saved_at": datetime.now().isoformat()}
        try:
            payload = json.dumps(document, indent=2)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value for {key} is not JSON serializable: {e}", key=key)

        tmp_path = path.with_suffix(".json.tmp")
        with self._lock:
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_path, path)
            except OSError as e:
                raise StorageError(f"Could not write {key}: {e}", key=key, path=str(path))

    def remove_item(self, key: str) -> bool:
        """
        Delete a stored key.

        Returns:
            True if the key is gone afterwards
        """
        path = self._get_path(key)
        with self._lock:
            try:
                path.unlink(missing_ok=True)
                return True
            except OSError as e:
                logger.error(f"Storage delete error for {key}: {e}")
                return False

    def keys(self) -> List[str]:
        """List the stored keys."""
        return sorted(p.stem for p in self.storage_dir.glob("*.json"))


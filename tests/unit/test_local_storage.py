# =============================================================================
# tests/unit/test_local_storage.py
# Unit Tests for LocalStorage
# =============================================================================

from pathlib import Path

import pytest

from livestock_core.errors import StorageError
from livestock_core.storage import LocalStorage, TOKENS_KEY, USER_KEY


class TestLocalStorage:
    """Test the JSON key/value files"""

    def test_round_trip(self, storage):
        storage.set_item(USER_KEY, {"id": 7, "email": "ana@farm.example"})

        assert storage.get_item(USER_KEY) == {"id": 7, "email": "ana@farm.example"}
        assert storage.keys() == ["user"]

    def test_missing_key_returns_none(self, storage):
        assert storage.get_item(TOKENS_KEY) is None

    def test_survives_new_instance(self, storage):
        storage.set_item(TOKENS_KEY, {"access": "a"})

        reopened = LocalStorage(storage.storage_dir)

        assert reopened.get_item(TOKENS_KEY) == {"access": "a"}

    def test_overwrite_replaces_value(self, storage):
        storage.set_item(USER_KEY, {"id": 1})
        storage.set_item(USER_KEY, {"id": 2})

        assert storage.get_item(USER_KEY) == {"id": 2}
        assert not list(storage.storage_dir.glob("*.tmp"))

    def test_corrupt_file_reads_as_none(self, storage):
        (storage.storage_dir / "user.json").write_text("{not json", encoding="utf-8")

        assert storage.get_item(USER_KEY) is None

    def test_remove_item(self, storage):
        storage.set_item(USER_KEY, {"id": 1})

        assert storage.remove_item(USER_KEY) is True
        assert storage.remove_item(USER_KEY) is True
        assert storage.get_item(USER_KEY) is None

    def test_unserializable_value_raises(self, storage):
        with pytest.raises(StorageError) as exc_info:
            storage.set_item(USER_KEY, {"when": object()})

        assert exc_info.value.code == "STORE_001"

    @pytest.mark.parametrize("key", ["", "../escape", ".hidden", "a/b"])
    def test_invalid_keys_rejected(self, storage, key):
        with pytest.raises(StorageError):
            storage.set_item(key, 1)

    def test_keys(self, storage):
        storage.set_item(USER_KEY, {"id": 1})
        storage.set_item(TOKENS_KEY, {"access": "a"})

        assert storage.keys() == ["tokens", "user"]

    def test_failed_delete_reported(self, storage, monkeypatch):
        storage.set_item(USER_KEY, {"id": 1})

        def refuse(self, missing_ok=False):
            raise PermissionError("read-only volume")

        monkeypatch.setattr(Path, "unlink", refuse)

        assert storage.remove_item(USER_KEY) is False
        assert storage.get_item(USER_KEY) == {"id": 1}

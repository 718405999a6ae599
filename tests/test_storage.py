"""Tests for account persistence and legacy migration."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from quotadash.errors import StorageError
from quotadash.models import AccountProfile
from quotadash.storage import STORAGE_KEY_SITES, AccountStore, JsonFileStore, MemoryStore


def _profile(name: str) -> AccountProfile:
    return AccountProfile(name=name, endpoint_url="https://x.example.com", auth_cookie="c=1", user_id="7")


def test_json_file_store_survives_reopen(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "accounts.json"
    AccountStore(JsonFileStore(path)).save([_profile("A"), _profile("B")])

    loaded = AccountStore(JsonFileStore(path)).load()
    assert loaded is not None
    assert [acc.name for acc in loaded] == ["A", "B"]
    assert not list(path.parent.glob("*.tmp"))


def test_json_file_store_keeps_other_keys(tmp_path: Path) -> None:
    path = tmp_path / "accounts.json"
    path.write_text(json.dumps({"newapi_url": "https://old.example.com"}), encoding="utf-8")
    store = JsonFileStore(path)
    store.set(STORAGE_KEY_SITES, "[]")
    assert store.get("newapi_url") == "https://old.example.com"
    assert store.get(STORAGE_KEY_SITES) == "[]"


def test_load_without_saved_list_returns_none() -> None:
    assert AccountStore(MemoryStore()).load() is None


def test_corrupt_file_raises_storage_error(tmp_path: Path) -> None:
    path = tmp_path / "accounts.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        AccountStore(JsonFileStore(path)).load()


def test_invalid_saved_list_raises_storage_error() -> None:
    store = AccountStore(MemoryStore({STORAGE_KEY_SITES: json.dumps([{"name": "missing fields"}])}))
    with pytest.raises(StorageError):
        store.load()


def test_load_legacy_uses_defaults() -> None:
    store = AccountStore(MemoryStore({"newapi_url": "https://old.example.com"}))
    legacy = store.load_legacy()
    assert legacy is not None
    assert legacy.name == "Default Site"
    assert legacy.endpoint_url == "https://old.example.com"
    assert legacy.auth_cookie == ""
    assert legacy.user_id == "39"


def test_load_legacy_reads_all_fields() -> None:
    store = AccountStore(
        MemoryStore(
            {
                "newapi_url": "https://old.example.com",
                "newapi_cookie": "session=old",
                "newapi_userid": "1024",
            }
        )
    )
    legacy = store.load_legacy()
    assert legacy is not None
    assert legacy.auth_cookie == "session=old"
    assert legacy.user_id == "1024"


def test_load_legacy_without_url_returns_none() -> None:
    assert AccountStore(MemoryStore({"newapi_cookie": "x"})).load_legacy() is None

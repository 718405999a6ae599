"""Key-value persistence for the account list."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from pydantic import TypeAdapter, ValidationError

from .errors import StorageError
from .models import AccountProfile

STORAGE_KEY_SITES = "newapi_sites"
LEGACY_KEY_URL = "newapi_url"
LEGACY_KEY_COOKIE = "newapi_cookie"
LEGACY_KEY_USER_ID = "newapi_userid"
LEGACY_DEFAULT_USER_ID = "39"
LEGACY_ACCOUNT_NAME = "Default Site"

_profile_list = TypeAdapter(List[AccountProfile])


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Volatile store, used for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Stores string values in a single JSON object on disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as file:
                loaded = json.load(file)
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read {self.path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise StorageError(f"{self.path} should contain a JSON object.")
        return loaded

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as file:
                json.dump(data, file, ensure_ascii=False, indent=2)
                file.flush()
                os.fsync(file.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


class AccountStore:
    """Reads and writes the ordered account list through a key-value store."""

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def load(self) -> Optional[List[AccountProfile]]:
        raw = self.kv.get(STORAGE_KEY_SITES)
        if raw is None:
            return None
        try:
            return _profile_list.validate_json(raw)
        except ValidationError as exc:
            raise StorageError(f"Stored account list is invalid: {exc}") from exc

    def save(self, accounts: List[AccountProfile]) -> None:
        self.kv.set(STORAGE_KEY_SITES, _profile_list.dump_json(accounts).decode("utf-8"))

    def load_legacy(self) -> Optional[AccountProfile]:
        """Synthesize a profile from the old single-account keys, if present."""
        url = self.kv.get(LEGACY_KEY_URL)
        if not url:
            return None
        return AccountProfile(
            name=LEGACY_ACCOUNT_NAME,
            endpoint_url=url,
            auth_cookie=self.kv.get(LEGACY_KEY_COOKIE) or "",
            user_id=self.kv.get(LEGACY_KEY_USER_ID) or LEGACY_DEFAULT_USER_ID,
        )

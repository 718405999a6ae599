"""Ordered registry of configured account profiles."""

from __future__ import annotations

from typing import List, Optional

from .models import AccountFields, AccountProfile, new_account_id
from .storage import AccountStore


class AccountRegistry:
    """
    Holds the account list in insertion order.

    Every mutation writes the full list back to the store before returning.
    """

    def __init__(self, store: AccountStore):
        self._store = store
        self._accounts: List[AccountProfile] = []

    def load(self) -> None:
        """Load saved accounts, falling back to a one-time legacy migration."""
        saved = self._store.load()
        if saved is not None:
            self._accounts = list(saved)
            print(f"Successfully loaded {len(self._accounts)} accounts.")
            return

        legacy = self._store.load_legacy()
        if legacy is None:
            self._accounts = []
            print("No saved accounts found, starting empty.")
            return

        self._accounts = [legacy]
        self._store.save(self._accounts)
        print(f"Migrated legacy account for {legacy.endpoint_url}.")

    def list(self) -> List[AccountProfile]:
        return list(self._accounts)

    def get(self, account_id: str) -> Optional[AccountProfile]:
        return next((acc for acc in self._accounts if acc.id == account_id), None)

    def index_of(self, account_id: str) -> int:
        for index, acc in enumerate(self._accounts):
            if acc.id == account_id:
                return index
        return -1

    def __len__(self) -> int:
        return len(self._accounts)

    def add(self, fields: AccountFields) -> AccountProfile:
        taken = {acc.id for acc in self._accounts}
        account_id = new_account_id()
        while account_id in taken:
            account_id = new_account_id()

        profile = AccountProfile(id=account_id, **fields.model_dump())
        self._commit(self._accounts + [profile])
        return profile

    def update(self, account_id: str, fields: AccountFields) -> bool:
        """Replace the mutable fields of an account. Unknown ids are ignored."""
        index = self.index_of(account_id)
        if index < 0:
            return False
        updated = list(self._accounts)
        updated[index] = AccountProfile(id=account_id, **fields.model_dump())
        self._commit(updated)
        return True

    def remove(self, account_id: str) -> bool:
        """Remove an account if present; removing an unknown id is a no-op."""
        remaining = [acc for acc in self._accounts if acc.id != account_id]
        if len(remaining) == len(self._accounts):
            return False
        self._commit(remaining)
        return True

    def _commit(self, accounts: List[AccountProfile]) -> None:
        self._store.save(accounts)
        self._accounts = accounts

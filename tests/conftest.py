"""Shared fixtures: in-memory storage, a fake usage client and a manual clock."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Tuple, Union

import pytest

from quotadash.config import Settings
from quotadash.models import AccountFields, ResultEnvelope
from quotadash.registry import AccountRegistry
from quotadash.storage import AccountStore, MemoryStore

Outcome = Union[ResultEnvelope, Exception]


def ok(quota: float) -> ResultEnvelope:
    return ResultEnvelope(success=True, data={"quota": quota})


def fields(name: str, url: Optional[str] = None, cookie: str = "session=abc", user_id: str = "39") -> AccountFields:
    return AccountFields(
        name=name,
        endpoint_url=url or f"https://{name.lower()}.example.com",
        auth_cookie=cookie,
        user_id=user_id,
    )


class FakeUsageClient:
    """Answers lookups per endpoint URL; unknown endpoints succeed with zero quota."""

    def __init__(self) -> None:
        self.balances: Dict[str, Outcome] = {}
        self.usages: Dict[str, Outcome] = {}
        self.gates: Dict[str, asyncio.Event] = {}
        self.calls: List[Tuple[Any, ...]] = []

    async def fetch_balance(self, endpoint_url: str, auth_cookie: str, user_id: str) -> ResultEnvelope:
        self.calls.append(("balance", endpoint_url, auth_cookie, user_id))
        gate = self.gates.get(endpoint_url)
        if gate is not None:
            await gate.wait()
        return self._answer(self.balances.get(endpoint_url, ok(0)))

    async def fetch_usage(
        self,
        endpoint_url: str,
        auth_cookie: str,
        user_id: str,
        start_timestamp: int,
        end_timestamp: int,
    ) -> ResultEnvelope:
        self.calls.append(("usage", endpoint_url, auth_cookie, user_id, start_timestamp, end_timestamp))
        return self._answer(self.usages.get(endpoint_url, ok(0)))

    def balance_calls(self) -> List[Tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == "balance"]

    @staticmethod
    def _answer(outcome: Outcome) -> ResultEnvelope:
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class ManualClock:
    """Virtual time for the scheduler: sleeps only finish when advanced."""

    def __init__(self) -> None:
        self.now = 0.0
        self._waiters: List[Tuple[float, asyncio.Future]] = []

    async def sleep(self, delay: float) -> None:
        future = asyncio.get_running_loop().create_future()
        self._waiters.append((self.now + delay, future))
        await future

    @property
    def pending(self) -> int:
        return len([w for w in self._waiters if not w[1].done()])

    async def advance(self, seconds: float) -> None:
        target = self.now + seconds
        await settle()
        while True:
            self._waiters = [w for w in self._waiters if not w[1].done()]
            due = [w for w in self._waiters if w[0] <= target]
            if not due:
                break
            waiter = min(due, key=lambda w: w[0])
            self._waiters.remove(waiter)
            self.now = waiter[0]
            waiter[1].set_result(None)
            await settle()
        self.now = target


async def settle(rounds: int = 10) -> None:
    """Let ready tasks run to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(storage_file=tmp_path / "accounts.json")


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def registry(memory_store: MemoryStore) -> AccountRegistry:
    registry = AccountRegistry(AccountStore(memory_store))
    registry.load()
    return registry


@pytest.fixture()
def usage_client() -> FakeUsageClient:
    return FakeUsageClient()


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()

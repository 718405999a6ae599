"""Concurrent, per-account balance and usage polling."""

from __future__ import annotations

import asyncio
import time
from datetime import datetime
from typing import Callable, Dict, List, Optional, Protocol, Set, Tuple

from .config import Settings
from .errors import ErrorType, UsageError, classify_error
from .models import AccountProfile, FetchState, FetchStatus, ResultEnvelope
from .registry import AccountRegistry
from .utils import day_window, log_account_event, log_debug, log_error


class UsageClient(Protocol):
    async def fetch_balance(self, endpoint_url: str, auth_cookie: str, user_id: str) -> ResultEnvelope:
        ...

    async def fetch_usage(
        self,
        endpoint_url: str,
        auth_cookie: str,
        user_id: str,
        start_timestamp: int,
        end_timestamp: int,
    ) -> ResultEnvelope:
        ...


def _require_quota(envelope: ResultEnvelope, fallback: str) -> float:
    if not envelope.success or envelope.data is None:
        raise UsageError(envelope.message or fallback, ErrorType.REMOTE_FAILURE)
    return envelope.data.quota


class FetchOrchestrator:
    """
    Keeps a FetchState per account id.

    Each account's entry is written only by that account's own cycle, and
    always as a whole new FetchState, so concurrent cycles never interfere.
    When two cycles for the same account overlap, the one that finishes last
    wins.
    """

    def __init__(
        self,
        registry: AccountRegistry,
        client: UsageClient,
        settings: Settings,
        clock: Callable[[], float] = time.time,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.registry = registry
        self.client = client
        self.settings = settings
        self._clock = clock
        self._now = now
        self._states: Dict[str, FetchState] = {}
        self._inflight: Set[asyncio.Task] = set()

    def get_state(self, account_id: str) -> Optional[FetchState]:
        return self._states.get(account_id)

    def snapshot(self) -> Dict[str, FetchState]:
        return dict(self._states)

    def forget(self, account_id: str) -> None:
        self._states.pop(account_id, None)

    def refresh_all(self) -> List[asyncio.Task]:
        """Start a fetch cycle for every registered account at once."""
        return [self.refresh_account(profile) for profile in self.registry.list()]

    def refresh_account(self, profile: AccountProfile) -> asyncio.Task:
        """Mark the account as loading now and complete its cycle in the background."""
        self._mark_loading(profile)
        task = asyncio.get_running_loop().create_task(self._complete_cycle(profile))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def fetch_account(self, profile: AccountProfile) -> FetchState:
        """Awaitable form of refresh_account: runs one cycle and returns its result."""
        self._mark_loading(profile)
        return await self._complete_cycle(profile)

    async def wait_idle(self) -> None:
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    def cancel_pending(self) -> None:
        for task in list(self._inflight):
            task.cancel()

    def _mark_loading(self, profile: AccountProfile) -> None:
        previous = self._states.get(profile.id)
        if previous is None:
            self._states[profile.id] = FetchState(status=FetchStatus.LOADING)
        else:
            self._states[profile.id] = previous.model_copy(
                update={"status": FetchStatus.LOADING, "error_message": None}
            )

    async def _complete_cycle(self, profile: AccountProfile) -> FetchState:
        cookie = profile.auth_cookie.strip()
        try:
            balance, used_today = await self._run_cycle(profile, cookie)
        except Exception as exc:  # pylint: disable=broad-except
            reason = str(exc) or "Failed"
            log_error(
                classify_error(exc),
                f"Fetch failed for {profile.name}",
                account_token=cookie,
                endpoint=profile.endpoint_url,
                exception=exc,
            )
            state = FetchState(
                status=FetchStatus.ERROR,
                balance=0,
                used_today=0,
                error_message=reason,
                last_updated=self._clock(),
            )
        else:
            log_debug(self.settings, f"{profile.name}: balance={balance} used_today={used_today}")
            state = FetchState(
                status=FetchStatus.SUCCESS,
                balance=balance,
                used_today=used_today,
                last_updated=self._clock(),
            )

        if self.registry.get(profile.id) is None:
            log_account_event(profile, "Fetch completed after account was removed")
        self._states[profile.id] = state
        return state

    async def _run_cycle(self, profile: AccountProfile, cookie: str) -> Tuple[float, float]:
        balance_envelope = await self.client.fetch_balance(profile.endpoint_url, cookie, profile.user_id)
        balance = _require_quota(balance_envelope, "Balance failed")

        start_timestamp, end_timestamp = day_window(self._now())
        usage_envelope = await self.client.fetch_usage(
            profile.endpoint_url,
            cookie,
            profile.user_id,
            start_timestamp,
            end_timestamp,
        )
        used_today = _require_quota(usage_envelope, "Usage failed")
        return balance, used_today

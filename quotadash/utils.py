"""Utility functions used across modules."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple

import requests
from requests import Session

from .config import Settings
from .errors import ErrorType
from .models import AccountProfile


def create_requests_session(settings: Settings) -> Session:
    """Create a configured requests session with retries and proxy support."""
    session = requests.Session()
    proxies = {key: value for key, value in settings.proxies.items() if value}

    if proxies:
        session.proxies.update(proxies)
    else:
        session.proxies = {"http": None, "https": None}

    adapter = requests.adapters.HTTPAdapter(max_retries=3)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def day_window(now: datetime) -> Tuple[int, int]:
    """
    Return (start, end) epoch seconds covering "today" up to ``now``.

    ``now`` is a naive local datetime; start is local midnight of that date,
    end is ``now`` truncated to the second.
    """
    midnight = datetime(now.year, now.month, now.day)
    return int(midnight.timestamp()), int(now.timestamp())


def mask_token(token: Optional[str], visible_chars: int = 4) -> str:
    """Safely mask a token for logging, showing only last N characters"""
    if not token or len(token) <= visible_chars:
        return "***"
    return f"...{token[-visible_chars:]}"


def log_debug(settings: Settings, message: str) -> None:
    """Log message only if DEBUG_MODE is enabled."""
    if settings.debug_mode:
        print(f"[DEBUG] {message}")


def log_error(
    error_type: ErrorType,
    message: str,
    account_token: Optional[str] = None,
    endpoint: Optional[str] = None,
    exception: Optional[Exception] = None,
) -> None:
    """Centralized error logging with context"""
    masked_token = mask_token(account_token) if account_token else "N/A"
    endpoint_str = endpoint if endpoint else "N/A"
    exception_str = f" | Exception: {exception}" if exception else ""
    print(f"[ERROR] Type: {error_type.value} | Token: {masked_token} | Endpoint: {endpoint_str} | {message}{exception_str}")


def log_account_event(account: Optional[AccountProfile], message: str) -> None:
    """Log account-specific events with masked cookies"""
    if account is None:
        print(f"[ACCOUNT] unknown: {message}")
        return
    print(f"[ACCOUNT] {account.name} ({mask_token(account.auth_cookie)}): {message}")

"""Remote usage client for New API style consoles."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, Optional

import requests
from pydantic import ValidationError
from requests import Session

from .config import Settings
from .errors import ErrorType, UsageError, classify_error, classify_status
from .models import ResultEnvelope
from .utils import create_requests_session, log_debug, mask_token

BALANCE_PATH = "/api/user/self"
USAGE_PATH = "/api/log/self/stat"

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/143.0.0.0 Safari/537.36"
)


def build_headers(base_url: str, auth_cookie: str, user_id: str) -> Dict[str, str]:
    """Headers the console expects from a logged-in browser session."""
    return {
        "Accept": "application/json, text/plain, */*",
        "Accept-Language": "zh-CN,zh;q=0.9,en-US;q=0.8,en;q=0.7",
        "Cache-Control": "no-store",
        "DNT": "1",
        "New-Api-User": user_id,
        "Referer": f"{base_url}/console",
        "Sec-Fetch-Dest": "empty",
        "Sec-Fetch-Mode": "cors",
        "Sec-Fetch-Site": "same-origin",
        "User-Agent": USER_AGENT,
        "Cookie": auth_cookie,
    }


class RemoteUsageClient:
    """Performs the balance and today's-usage lookups for one account at a time."""

    def __init__(
        self,
        settings: Settings,
        session_factory: Callable[[Settings], Session] = create_requests_session,
    ):
        self.settings = settings
        self._session_factory = session_factory

    async def fetch_balance(self, endpoint_url: str, auth_cookie: str, user_id: str) -> ResultEnvelope:
        return await asyncio.to_thread(self._get, endpoint_url, auth_cookie, user_id, BALANCE_PATH, None)

    async def fetch_usage(
        self,
        endpoint_url: str,
        auth_cookie: str,
        user_id: str,
        start_timestamp: int,
        end_timestamp: int,
    ) -> ResultEnvelope:
        params = {
            "type": 2,
            "token_name": "",
            "model_name": "",
            "start_timestamp": start_timestamp,
            "end_timestamp": end_timestamp,
            "group": "",
        }
        return await asyncio.to_thread(self._get, endpoint_url, auth_cookie, user_id, USAGE_PATH, params)

    def _get(
        self,
        endpoint_url: str,
        auth_cookie: str,
        user_id: str,
        path: str,
        params: Optional[Dict[str, Any]],
    ) -> ResultEnvelope:
        base_url = endpoint_url.rstrip("/")
        url = f"{base_url}{path}"
        headers = build_headers(base_url, auth_cookie, user_id)

        log_debug(self.settings, f"GET {url} with cookie {mask_token(auth_cookie)}")

        session = self._session_factory(self.settings)
        try:
            try:
                response = session.get(url, headers=headers, params=params, timeout=self.settings.request_timeout)
            except requests.exceptions.RequestException as exc:
                raise UsageError(f"Request failed: {exc}", classify_error(exc)) from exc

            if not response.ok:
                raise UsageError(
                    f"HTTP Error {response.status_code}: {response.text}",
                    classify_status(response.status_code),
                )

            try:
                payload = response.json()
            except ValueError as exc:
                raise UsageError(f"Read body failed: {exc}", ErrorType.PARSE_ERROR) from exc

            if isinstance(payload, dict) and not payload.get("success"):
                # data is not inspected on failure; only the reason matters
                message = payload.get("message")
                return ResultEnvelope(success=False, message=None if message is None else str(message))

            try:
                return ResultEnvelope.model_validate(payload)
            except ValidationError as exc:
                raise UsageError("Unexpected response payload", ErrorType.PARSE_ERROR) from exc
        finally:
            session.close()

"""Error types raised while polling accounts or reading persisted state."""

from __future__ import annotations

import json
from enum import Enum

import requests


class ErrorType(Enum):
    """Classification of error types for logging and display"""
    AUTH_ERROR = "auth_error"           # 401, 403 - cookie rejected
    RATE_LIMIT = "rate_limit"           # 429 - too many requests
    SERVER_ERROR = "server_error"       # 5xx - upstream issues
    NETWORK_ERROR = "network_error"     # Connection, timeout errors
    CLIENT_ERROR = "client_error"       # other 4xx
    PARSE_ERROR = "parse_error"         # JSON or envelope shape errors
    REMOTE_FAILURE = "remote_failure"   # success=false or missing data
    UNKNOWN_ERROR = "unknown_error"     # Catch-all


class UsageError(Exception):
    """A failed balance or usage lookup. ``str(exc)`` is shown to the user."""

    def __init__(self, message: str, error_type: ErrorType = ErrorType.UNKNOWN_ERROR):
        super().__init__(message)
        self.error_type = error_type


class StorageError(Exception):
    """Persisted account data could not be read or validated."""


def classify_status(status_code: int) -> ErrorType:
    if status_code in [401, 403]:
        return ErrorType.AUTH_ERROR
    if status_code == 429:
        return ErrorType.RATE_LIMIT
    if 500 <= status_code < 600:
        return ErrorType.SERVER_ERROR
    if 400 <= status_code < 500:
        return ErrorType.CLIENT_ERROR
    return ErrorType.UNKNOWN_ERROR


def classify_error(error: Exception) -> ErrorType:
    """Classify an exception into an ErrorType"""
    if isinstance(error, UsageError):
        return error.error_type
    if isinstance(error, requests.exceptions.HTTPError) and error.response is not None:
        return classify_status(error.response.status_code)
    if isinstance(error, (requests.exceptions.ConnectionError, requests.exceptions.Timeout)):
        return ErrorType.NETWORK_ERROR
    if isinstance(error, json.JSONDecodeError):
        return ErrorType.PARSE_ERROR
    return ErrorType.UNKNOWN_ERROR

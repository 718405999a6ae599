"""Common FastAPI dependencies."""

from __future__ import annotations

from fastapi import Request

from .config import Settings
from .dashboard import Dashboard


def get_settings(request: Request) -> Settings:  # pragma: no cover - trivial accessor
    return request.app.state.settings  # type: ignore[attr-defined]


def get_dashboard(request: Request) -> Dashboard:  # pragma: no cover - trivial accessor
    return request.app.state.dashboard  # type: ignore[attr-defined]

"""Helpers for assembling the dashboard from configuration."""

from __future__ import annotations

from typing import Optional

from .client import RemoteUsageClient
from .config import Settings
from .dashboard import Dashboard
from .orchestrator import FetchOrchestrator, UsageClient
from .registry import AccountRegistry
from .scheduler import Scheduler
from .storage import AccountStore, JsonFileStore, KeyValueStore


def build_dashboard(
    settings: Settings,
    client: Optional[UsageClient] = None,
    store: Optional[KeyValueStore] = None,
    scheduler: Optional[Scheduler] = None,
) -> Dashboard:
    """Load saved accounts and wire up the polling and carousel components."""
    kv = store if store is not None else JsonFileStore(settings.storage_file)
    registry = AccountRegistry(AccountStore(kv))
    registry.load()

    orchestrator = FetchOrchestrator(registry, client or RemoteUsageClient(settings), settings)
    dashboard = Dashboard(settings, registry, orchestrator, scheduler=scheduler)
    if dashboard.state.settings_mode:
        print("No accounts configured, opening settings.")
    return dashboard

"""FastAPI application factory for the quota dashboard."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .bootstrap import build_dashboard
from .config import Settings, get_settings
from .orchestrator import UsageClient
from .routers import accounts_router, dashboard_router
from .storage import KeyValueStore


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[UsageClient] = None,
    store: Optional[KeyValueStore] = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        print("Starting quota dashboard...")
        dashboard = build_dashboard(settings, client=client, store=store)
        app.state.dashboard = dashboard
        dashboard.start()
        print("Dashboard initialization completed.")
        yield
        await dashboard.stop()
        print("Dashboard shutdown completed.")

    app = FastAPI(title="Quota Dashboard", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(dashboard_router.router)
    app.include_router(accounts_router.router)

    return app

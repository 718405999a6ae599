"""Command line entry point: print a banner and serve the dashboard."""

from __future__ import annotations

import uvicorn

from .app import create_app
from .config import get_settings


def main() -> None:
    settings = get_settings()

    print("\n--- Quota Dashboard ---")
    print(f"Debug Mode: {settings.debug_mode}")
    print(f"Storage: {settings.storage_file}")
    print(f"Refresh every {settings.refresh_interval:g}s, rotate every {settings.carousel_interval:g}s")
    print("Endpoints:")
    print("  GET  /view")
    print("  POST /navigate/next | /navigate/previous")
    print("  POST /settings/toggle")
    print("  GET  /accounts")
    print("------------------------")

    print(f"Starting server on {settings.host}:{settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()

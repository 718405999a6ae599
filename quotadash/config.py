"""Application configuration and settings helpers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    """Centralized dashboard configuration."""

    storage_file: Path = Field(default=Path("./data/accounts.json"), description="Where account profiles are persisted")
    refresh_interval: float = Field(default=60.0, description="Seconds between balance/usage polls")
    carousel_interval: float = Field(default=5.0, description="Seconds between carousel auto-advances")
    request_timeout: float = Field(default=30.0)
    default_account_name: str = Field(default="New Site")
    default_endpoint_url: str = Field(default="https://api.husanai.com")
    default_user_id: str = Field(default="39")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8001)
    debug_mode: bool = Field(default=False)
    http_proxy: Optional[str] = Field(default=None)
    https_proxy: Optional[str] = Field(default=None)
    no_proxy: Optional[str] = Field(default=None)

    @field_validator("refresh_interval", "carousel_interval", "request_timeout")
    @classmethod
    def _ensure_positive(cls, value: float, info):
        if value <= 0:
            raise ValueError(f"{info.field_name} must be greater than zero")
        return value

    @property
    def proxies(self) -> dict[str, Optional[str]]:
        return {
            "http": self.http_proxy,
            "https": self.https_proxy,
            "no_proxy": self.no_proxy,
        }


@lru_cache()
def get_settings() -> Settings:
    """Load settings from environment variables."""

    import os
    from dotenv import load_dotenv

    load_dotenv()

    return Settings(
        storage_file=Path(os.getenv("STORAGE_FILE", "./data/accounts.json")),
        refresh_interval=float(os.getenv("REFRESH_INTERVAL", "60")),
        carousel_interval=float(os.getenv("CAROUSEL_INTERVAL", "5")),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
        default_account_name=os.getenv("DEFAULT_ACCOUNT_NAME", "New Site"),
        default_endpoint_url=os.getenv("DEFAULT_ENDPOINT_URL", "https://api.husanai.com"),
        default_user_id=os.getenv("DEFAULT_USER_ID", "39"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8001")),
        debug_mode=os.getenv("DEBUG_MODE", "false").lower() == "true",
        http_proxy=os.getenv("HTTP_PROXY"),
        https_proxy=os.getenv("HTTPS_PROXY"),
        no_proxy=os.getenv("NO_PROXY"),
    )

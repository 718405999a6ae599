"""Pydantic models for accounts, fetch results and rendered views."""

from __future__ import annotations

import uuid
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


NEW_ACCOUNT_ID = "new"


def new_account_id() -> str:
    return uuid.uuid4().hex


class AccountDraft(BaseModel):
    """Contents of the settings form; may be incomplete while being edited."""

    name: str = ""
    endpoint_url: str = ""
    auth_cookie: str = ""
    user_id: str = ""


class AccountFields(AccountDraft):
    """Mutable account fields as committed to the registry."""

    name: str
    endpoint_url: str
    auth_cookie: str
    user_id: str

    @field_validator("name", "endpoint_url", "auth_cookie", "user_id")
    @classmethod
    def _ensure_not_blank(cls, value: str, info):
        if not value or not value.strip():
            raise ValueError(f"{info.field_name} cannot be empty")
        return value

    @field_validator("user_id")
    @classmethod
    def _ensure_numeric(cls, value: str):
        if not value.strip().isdigit():
            raise ValueError("user_id must be numeric")
        return value.strip()


class AccountProfile(BaseModel):
    """A configured remote account. ``id`` never changes once assigned."""

    id: str = Field(default_factory=new_account_id)
    name: str
    endpoint_url: str
    auth_cookie: str
    user_id: str

    def draft(self) -> AccountDraft:
        return AccountDraft(
            name=self.name,
            endpoint_url=self.endpoint_url,
            auth_cookie=self.auth_cookie,
            user_id=self.user_id,
        )


class FetchStatus(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class FetchState(BaseModel):
    """Snapshot of one account's latest fetch cycle. Replaced whole, never patched."""

    model_config = ConfigDict(frozen=True)

    status: FetchStatus
    balance: float = 0
    used_today: float = 0
    error_message: Optional[str] = None
    last_updated: Optional[float] = None


class QuotaData(BaseModel):
    quota: float


class ResultEnvelope(BaseModel):
    """Response envelope returned by both remote lookups."""

    success: bool = False
    message: Optional[str] = None
    data: Optional[QuotaData] = None


class ViewKind(str, Enum):
    EMPTY = "empty"
    LIST = "list"
    FORM = "form"
    LOADING = "loading"
    ERROR = "error"
    DATA = "data"


class AccountSummary(BaseModel):
    id: str
    name: str


class MaskedAccount(AccountSummary):
    endpoint_url: str
    auth_cookie: str
    user_id: str


class RenderState(BaseModel):
    view: ViewKind
    settings_mode: bool = False
    accounts: List[AccountSummary] = Field(default_factory=list)
    editing_id: Optional[str] = None
    form: Optional[AccountDraft] = None
    account: Optional[AccountSummary] = None
    current_index: int = 0
    account_count: int = 0
    show_pagination: bool = False
    used_today: Optional[str] = None
    balance: Optional[str] = None
    error_message: Optional[str] = None
    last_updated: Optional[float] = None

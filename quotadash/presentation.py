"""Derive the render state from dashboard state. No side effects."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from .models import (
    AccountDraft,
    AccountProfile,
    AccountSummary,
    FetchState,
    FetchStatus,
    RenderState,
    ViewKind,
)

QUOTA_PER_DOLLAR = 500000


def format_money(quota: float) -> str:
    return f"${quota / QUOTA_PER_DOLLAR:.3f}"


def select_view(
    accounts: Sequence[AccountProfile],
    current_index: int,
    states: Mapping[str, FetchState],
    settings_mode: bool = False,
    editing_id: Optional[str] = None,
    draft: Optional[AccountDraft] = None,
) -> RenderState:
    """
    Map dashboard state to one of the six views.

    An open form wins over everything so the first account can be added
    from an empty list; otherwise an empty list always shows the empty view.
    """
    count = len(accounts)
    summaries = [AccountSummary(id=acc.id, name=acc.name) for acc in accounts]

    if settings_mode and editing_id is not None:
        return RenderState(
            view=ViewKind.FORM,
            settings_mode=True,
            editing_id=editing_id,
            form=draft or AccountDraft(),
            account_count=count,
        )

    if not accounts:
        return RenderState(view=ViewKind.EMPTY, settings_mode=settings_mode)

    if settings_mode:
        return RenderState(
            view=ViewKind.LIST,
            settings_mode=True,
            accounts=summaries,
            account_count=count,
        )

    index = current_index if 0 <= current_index < count else 0
    current = accounts[index]
    base = dict(
        settings_mode=False,
        account=summaries[index],
        current_index=index,
        account_count=count,
        show_pagination=count > 1,
    )

    state = states.get(current.id)
    if state is not None and state.error_message:
        return RenderState(
            view=ViewKind.ERROR,
            error_message=state.error_message,
            last_updated=state.last_updated,
            **base,
        )

    if state is None or state.status == FetchStatus.LOADING:
        return RenderState(view=ViewKind.LOADING, **base)

    return RenderState(
        view=ViewKind.DATA,
        used_today=format_money(state.used_today),
        balance=format_money(state.balance),
        last_updated=state.last_updated,
        **base,
    )

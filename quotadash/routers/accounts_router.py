"""Routers exposing direct account management and fetch status."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from ..dashboard import Dashboard
from ..dependencies import get_dashboard
from ..models import AccountFields, AccountProfile, FetchState, MaskedAccount
from ..utils import mask_token

router = APIRouter(prefix="/accounts")


def _masked(profile: AccountProfile) -> MaskedAccount:
    return MaskedAccount(
        id=profile.id,
        name=profile.name,
        endpoint_url=profile.endpoint_url,
        auth_cookie=mask_token(profile.auth_cookie),
        user_id=profile.user_id,
    )


@router.get("", response_model=List[MaskedAccount])
async def list_accounts(dashboard: Dashboard = Depends(get_dashboard)) -> List[MaskedAccount]:
    return [_masked(profile) for profile in dashboard.registry.list()]


@router.post("", response_model=MaskedAccount, status_code=201)
async def add_account(fields: AccountFields, dashboard: Dashboard = Depends(get_dashboard)) -> MaskedAccount:
    return _masked(dashboard.add_account(fields))


@router.put("/{account_id}", response_model=List[MaskedAccount])
async def update_account(
    account_id: str,
    fields: AccountFields,
    dashboard: Dashboard = Depends(get_dashboard),
) -> List[MaskedAccount]:
    """Update an account. Unknown ids leave the list unchanged."""
    dashboard.update_account(account_id, fields)
    return [_masked(profile) for profile in dashboard.registry.list()]


@router.delete("/{account_id}", status_code=204)
async def delete_account(account_id: str, dashboard: Dashboard = Depends(get_dashboard)) -> Response:
    dashboard.delete_account(account_id)
    return Response(status_code=204)


@router.get("/{account_id}/state", response_model=FetchState)
async def account_state(account_id: str, dashboard: Dashboard = Depends(get_dashboard)) -> FetchState:
    if dashboard.registry.get(account_id) is None:
        raise HTTPException(status_code=404, detail=f"Account '{account_id}' not found.")
    state = dashboard.orchestrator.get_state(account_id)
    if state is None:
        raise HTTPException(status_code=404, detail=f"Account '{account_id}' has not been fetched yet.")
    return state

"""Routers for the carousel view, navigation and the settings editor."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError

from ..dashboard import Dashboard
from ..dependencies import get_dashboard
from ..models import AccountDraft, RenderState

router = APIRouter()


@router.get("/health")
async def health(dashboard: Dashboard = Depends(get_dashboard)) -> dict:
    return {
        "status": "ok",
        "accounts": len(dashboard.registry),
        "settings_mode": dashboard.state.settings_mode,
        "polling": dashboard.started and not dashboard.state.settings_mode,
    }


@router.get("/view", response_model=RenderState)
async def current_view(dashboard: Dashboard = Depends(get_dashboard)) -> RenderState:
    return dashboard.view()


@router.post("/navigate/next", response_model=RenderState)
async def navigate_next(dashboard: Dashboard = Depends(get_dashboard)) -> RenderState:
    dashboard.next()
    return dashboard.view()


@router.post("/navigate/previous", response_model=RenderState)
async def navigate_previous(dashboard: Dashboard = Depends(get_dashboard)) -> RenderState:
    dashboard.previous()
    return dashboard.view()


@router.post("/settings/toggle", response_model=RenderState)
async def toggle_settings(dashboard: Dashboard = Depends(get_dashboard)) -> RenderState:
    dashboard.toggle_settings()
    return dashboard.view()


@router.post("/settings/enter", response_model=RenderState)
async def enter_settings(dashboard: Dashboard = Depends(get_dashboard)) -> RenderState:
    dashboard.enter_settings()
    return dashboard.view()


@router.post("/settings/leave", response_model=RenderState)
async def leave_settings(dashboard: Dashboard = Depends(get_dashboard)) -> RenderState:
    dashboard.leave_settings()
    return dashboard.view()


@router.post("/settings/form/new", response_model=RenderState)
async def open_new_form(dashboard: Dashboard = Depends(get_dashboard)) -> RenderState:
    dashboard.begin_add()
    return dashboard.view()


@router.post("/settings/form/save", response_model=RenderState)
async def save_form(
    draft: Optional[AccountDraft] = Body(default=None),
    dashboard: Dashboard = Depends(get_dashboard),
) -> RenderState:
    if dashboard.state.editing_id is None:
        raise HTTPException(status_code=409, detail="No account form is open.")
    try:
        dashboard.save_form(draft)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc
    return dashboard.view()


@router.post("/settings/form/cancel", response_model=RenderState)
async def cancel_form(dashboard: Dashboard = Depends(get_dashboard)) -> RenderState:
    dashboard.cancel_form()
    return dashboard.view()


@router.patch("/settings/form", response_model=RenderState)
async def update_form(draft: AccountDraft, dashboard: Dashboard = Depends(get_dashboard)) -> RenderState:
    if dashboard.update_draft(draft) is None:
        raise HTTPException(status_code=409, detail="No account form is open.")
    return dashboard.view()


@router.post("/settings/form/{account_id}", response_model=RenderState)
async def open_edit_form(account_id: str, dashboard: Dashboard = Depends(get_dashboard)) -> RenderState:
    if dashboard.begin_edit(account_id) is None:
        raise HTTPException(status_code=404, detail=f"Account '{account_id}' not found.")
    return dashboard.view()

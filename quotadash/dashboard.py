"""Dashboard controller: one entry point per user action."""

from __future__ import annotations

from typing import Optional

from .carousel import CarouselController
from .config import Settings
from .models import NEW_ACCOUNT_ID, AccountDraft, AccountFields, AccountProfile, RenderState
from .orchestrator import FetchOrchestrator
from .presentation import select_view
from .registry import AccountRegistry
from .scheduler import Scheduler
from .state import UiState
from .utils import log_account_event, log_debug

REFRESH_TIMER = "refresh"
CAROUSEL_TIMER = "carousel"


class Dashboard:
    """
    Owns the account registry, fetch orchestrator, carousel and UI state.

    Timers are re-armed after every action that changes their inputs:
    the refresh timer runs while not in settings mode and restarts with an
    immediate refresh whenever the account list changes; the carousel timer
    runs while not in settings mode with more than one account and restarts
    when the number of accounts changes.
    """

    def __init__(
        self,
        settings: Settings,
        registry: AccountRegistry,
        orchestrator: FetchOrchestrator,
        scheduler: Optional[Scheduler] = None,
    ):
        self.settings = settings
        self.registry = registry
        self.orchestrator = orchestrator
        self.scheduler = scheduler or Scheduler()
        self.carousel = CarouselController(lambda: len(self.registry))
        self.state = UiState(settings_mode=len(registry) == 0)
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def start(self) -> None:
        self._started = True
        self._sync_timers(list_changed=True, length_changed=True)

    async def stop(self) -> None:
        self._started = False
        self.scheduler.cancel_all()
        self.orchestrator.cancel_pending()
        await self.orchestrator.wait_idle()

    # -- accounts --

    def add_account(self, fields: AccountFields) -> AccountProfile:
        previous_count = len(self.registry)
        profile = self.registry.add(fields)
        log_account_event(profile, "Added")
        self._after_list_change(previous_count)
        return profile

    def update_account(self, account_id: str, fields: AccountFields) -> bool:
        previous_count = len(self.registry)
        if not self.registry.update(account_id, fields):
            log_debug(self.settings, f"Ignoring update for unknown account {account_id}")
            return False
        log_account_event(self.registry.get(account_id), "Updated")
        self._after_list_change(previous_count)
        return True

    def delete_account(self, account_id: str) -> bool:
        previous_count = len(self.registry)
        profile = self.registry.get(account_id)
        if not self.registry.remove(account_id):
            log_debug(self.settings, f"Ignoring delete for unknown account {account_id}")
            return False
        self.orchestrator.forget(account_id)
        if self.state.editing_id == account_id:
            self.cancel_form()
        log_account_event(profile, "Deleted")
        self._after_list_change(previous_count)
        return True

    # -- navigation --

    def next(self) -> int:
        return self.carousel.next()

    def previous(self) -> int:
        return self.carousel.previous()

    # -- settings mode --

    def enter_settings(self) -> None:
        if self.state.settings_mode:
            return
        self.state.settings_mode = True
        self._sync_timers()

    def leave_settings(self) -> None:
        if not self.state.settings_mode:
            return
        self.state.settings_mode = False
        self.state.editing_id = None
        self.state.draft = None
        self._sync_timers()

    def toggle_settings(self) -> None:
        if self.state.settings_mode:
            self.leave_settings()
        else:
            self.enter_settings()

    # -- settings form --

    def begin_add(self) -> AccountDraft:
        self.enter_settings()
        self.state.editing_id = NEW_ACCOUNT_ID
        self.state.draft = AccountDraft(
            name=self.settings.default_account_name,
            endpoint_url=self.settings.default_endpoint_url,
            auth_cookie="",
            user_id=self.settings.default_user_id,
        )
        return self.state.draft

    def begin_edit(self, account_id: str) -> Optional[AccountDraft]:
        profile = self.registry.get(account_id)
        if profile is None:
            return None
        self.enter_settings()
        self.state.editing_id = account_id
        self.state.draft = profile.draft()
        return self.state.draft

    def update_draft(self, draft: AccountDraft) -> Optional[AccountDraft]:
        if self.state.editing_id is None:
            return None
        self.state.draft = draft
        return draft

    def save_form(self, draft: Optional[AccountDraft] = None) -> Optional[AccountProfile]:
        """
        Validate and commit the open form, then close it.

        Raises pydantic.ValidationError when a required field is blank; the
        form stays open in that case. Saving an edit of an account that has
        since been deleted silently does nothing.
        """
        editing_id = self.state.editing_id
        if editing_id is None:
            return None
        if draft is not None:
            self.state.draft = draft
        fields = AccountFields.model_validate((self.state.draft or AccountDraft()).model_dump())

        if editing_id == NEW_ACCOUNT_ID:
            saved: Optional[AccountProfile] = self.add_account(fields)
        else:
            self.update_account(editing_id, fields)
            saved = self.registry.get(editing_id)
        self.cancel_form()
        return saved

    def cancel_form(self) -> None:
        self.state.editing_id = None
        self.state.draft = None

    # -- rendering --

    def view(self) -> RenderState:
        return select_view(
            self.registry.list(),
            self.carousel.index,
            self.orchestrator.snapshot(),
            settings_mode=self.state.settings_mode,
            editing_id=self.state.editing_id,
            draft=self.state.draft,
        )

    # -- timers --

    def _after_list_change(self, previous_count: int) -> None:
        self.carousel.repair()
        self._sync_timers(list_changed=True, length_changed=len(self.registry) != previous_count)

    def _sync_timers(self, list_changed: bool = False, length_changed: bool = False) -> None:
        active = self._started and not self.state.settings_mode

        if not active:
            self.scheduler.disarm(REFRESH_TIMER)
        elif list_changed or not self.scheduler.is_armed(REFRESH_TIMER):
            self.scheduler.arm(
                REFRESH_TIMER,
                self.settings.refresh_interval,
                self.orchestrator.refresh_all,
                immediate=True,
            )

        if not active or len(self.registry) <= 1:
            self.scheduler.disarm(CAROUSEL_TIMER)
        elif length_changed or not self.scheduler.is_armed(CAROUSEL_TIMER):
            self.scheduler.arm(
                CAROUSEL_TIMER,
                self.settings.carousel_interval,
                self.carousel.next,
            )

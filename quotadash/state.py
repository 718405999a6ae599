"""UI state owned by the dashboard controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .models import AccountDraft


@dataclass
class UiState:
    """Holds mutable UI data that changes while the dashboard is running."""

    settings_mode: bool = False
    editing_id: Optional[str] = None
    draft: Optional[AccountDraft] = None

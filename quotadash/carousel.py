"""Which account the dashboard is currently showing."""

from __future__ import annotations

from typing import Callable


class CarouselController:
    """
    Wrap-around index over the account list.

    Manual navigation does not reset the auto-advance timer; a manual step
    followed shortly by an automatic one advances twice.
    """

    def __init__(self, size: Callable[[], int]):
        self._size = size
        self.index = 0

    def next(self) -> int:
        count = self._size()
        self.index = (self.index + 1) % count if count else 0
        return self.index

    def previous(self) -> int:
        count = self._size()
        self.index = (self.index - 1 + count) % count if count else 0
        return self.index

    def repair(self) -> int:
        """Reset to the first account when the list shrank past the index."""
        if self.index >= self._size() or self.index < 0:
            self.index = 0
        return self.index

"""Cancellable periodic timers running on the asyncio event loop."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Dict, Optional

from .errors import ErrorType
from .utils import log_error

SleepFunc = Callable[[float], Awaitable[None]]


class PeriodicTask:
    """Calls ``callback`` every ``interval`` seconds until cancelled."""

    def __init__(
        self,
        name: str,
        interval: float,
        callback: Callable[[], object],
        immediate: bool = False,
        sleep: SleepFunc = asyncio.sleep,
    ):
        self.name = name
        self.interval = interval
        self.callback = callback
        self.immediate = immediate
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        if self.immediate:
            self._fire()
        self._task = asyncio.get_running_loop().create_task(self._run(), name=f"timer:{self.name}")

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        while True:
            await self._sleep(self.interval)
            self._fire()

    def _fire(self) -> None:
        try:
            self.callback()
        except Exception as exc:  # pylint: disable=broad-except
            log_error(ErrorType.UNKNOWN_ERROR, f"Timer '{self.name}' callback failed", exception=exc)


class Scheduler:
    """Owns named periodic tasks; arming a name replaces its previous task."""

    def __init__(self, sleep: SleepFunc = asyncio.sleep):
        self._sleep = sleep
        self._tasks: Dict[str, PeriodicTask] = {}

    def arm(self, name: str, interval: float, callback: Callable[[], object], immediate: bool = False) -> PeriodicTask:
        self.disarm(name)
        task = PeriodicTask(name, interval, callback, immediate=immediate, sleep=self._sleep)
        self._tasks[name] = task
        task.start()
        return task

    def disarm(self, name: str) -> None:
        task = self._tasks.pop(name, None)
        if task is not None:
            task.cancel()

    def is_armed(self, name: str) -> bool:
        task = self._tasks.get(name)
        return task is not None and task.running

    def cancel_all(self) -> None:
        for name in list(self._tasks):
            self.disarm(name)

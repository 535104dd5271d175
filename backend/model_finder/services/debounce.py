from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, Protocol


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Handle: ...


class Debouncer:
    """Runs the last submitted call once ``delay`` seconds pass without another submit.

    The scheduler defaults to the running asyncio loop; anything with a
    ``call_later(delay, callback, *args)`` returning a cancellable handle works.
    """

    def __init__(self, delay: float, scheduler: Scheduler | None = None) -> None:
        self.delay = delay
        self._scheduler = scheduler
        self._handle: Handle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def submit(self, fn: Callable[..., Any], *args: Any) -> None:
        self.cancel()
        scheduler = self._scheduler or asyncio.get_running_loop()
        self._handle = scheduler.call_later(self.delay, self._fire, fn, args)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, fn: Callable[..., Any], args: tuple[Any, ...]) -> None:
        self._handle = None
        fn(*args)

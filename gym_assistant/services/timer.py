"""Elapsed-time counter for the live workout."""

from __future__ import annotations

import asyncio
import contextlib
from typing import Callable, Optional

TickCallback = Callable[[int], None]


def format_duration(seconds: int) -> str:
    """``HH:MM:SS`` display for an elapsed second count."""
    hours, rest = divmod(max(0, int(seconds)), 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


class SessionTimer:
    """Monotonic 1 Hz tick counter.

    When started inside a running event loop the timer ticks itself on an
    asyncio task; otherwise the owner drives it with :meth:`tick`.
    """

    def __init__(self, interval_sec: float = 1.0) -> None:
        self._interval_sec = interval_sec
        self._elapsed = 0
        self._lap: int | None = None
        self._running = False
        self._task: Optional[asyncio.Task[None]] = None
        self._listeners: list[TickCallback] = []

    @property
    def is_running(self) -> bool:
        return self._running

    def on_tick(self, callback: TickCallback) -> None:
        self._listeners.append(callback)

    def start(self) -> None:
        if self._running:
            raise RuntimeError("Timer already running")
        self._running = True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._task = loop.create_task(self._run())

    def stop(self) -> None:
        self._running = False
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def tick(self) -> None:
        if not self._running:
            return
        self._elapsed += 1
        if self._lap is not None:
            self._lap += 1
        for callback in list(self._listeners):
            callback(self._elapsed)

    def lap(self) -> None:
        """Start (or restart) the lap counter; the total keeps running."""
        self._lap = 0

    def read_elapsed(self) -> int:
        return self._elapsed

    def read_lap(self) -> int | None:
        return self._lap

    async def _run(self) -> None:
        with contextlib.suppress(asyncio.CancelledError):
            while self._running:
                await asyncio.sleep(self._interval_sec)
                self.tick()

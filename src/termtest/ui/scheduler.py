# src/termtest/ui/scheduler.py

"""
Coalesces redraw requests so a burst of state updates produces one frame.
"""

import asyncio
from collections.abc import Callable
from typing import Any

import structlog

from termtest.telemetry import StructLogger

log: StructLogger = structlog.get_logger("ui.scheduler")

DeferFunction = Callable[[Callable[[], None]], Any]


def _defer_on_running_loop(callback: Callable[[], None]) -> asyncio.Handle:
    return asyncio.get_running_loop().call_soon(callback)


class RedrawScheduler:
    """
    Holds the single "redraw scheduled" flag.

    `schedule()` defers one `flush()` when nothing is pending and is a no-op
    otherwise. `flush()` clears the flag before rendering, so an update that
    arrives while a frame is being built schedules the next frame instead of
    being folded into the current one.
    """

    def __init__(self, redraw: Callable[[], None], defer: DeferFunction | None = None):
        self._redraw = redraw
        self._defer = defer or _defer_on_running_loop
        self._scheduled = False

    @property
    def redraw_scheduled(self) -> bool:
        return self._scheduled

    def schedule(self) -> None:
        if self._scheduled:
            return
        self._scheduled = True
        self._defer(self.flush)

    def flush(self) -> None:
        """Runs the pending redraw now. Does nothing if none is pending."""
        if not self._scheduled:
            return
        self._scheduled = False
        self._redraw()


# 🔼⚙️

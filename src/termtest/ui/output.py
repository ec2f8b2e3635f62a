# src/termtest/ui/output.py

"""
Terminal sinks for rendered frames.
"""

from typing import Protocol, runtime_checkable

import structlog
from rich.console import Console
from rich.live import Live
from rich.text import Text

from termtest.telemetry import StructLogger

log: StructLogger = structlog.get_logger("ui.output")


@runtime_checkable
class FrameWriter(Protocol):
    """Replaces the previously written frame; `done` finalizes the output."""

    def replace(self, frame: str) -> None: ...

    def done(self) -> None: ...


class LiveFrameWriter:
    """Redraws frames in place with a rich Live display."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self._live: Live | None = None
        self._closed = False

    def replace(self, frame: str) -> None:
        if self._closed:
            log.debug("Frame dropped after output was finalized")
            return
        renderable = Text.from_markup(frame)
        if self._live is None:
            self._live = Live(
                renderable,
                console=self.console,
                auto_refresh=False,
                transient=False,
                redirect_stdout=False,
                redirect_stderr=False,
            )
            self._live.start(refresh=True)
            return
        self._live.update(renderable, refresh=True)

    def done(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._live is not None:
            self._live.stop()
            self._live = None


class StaticFrameWriter:
    """For non-interactive consoles: keeps only the latest frame and prints it once on `done`."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self._last_frame: str | None = None
        self._closed = False

    def replace(self, frame: str) -> None:
        if not self._closed:
            self._last_frame = frame

    def done(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._last_frame is not None:
            self.console.print(Text.from_markup(self._last_frame))


def make_frame_writer(console: Console | None = None) -> LiveFrameWriter | StaticFrameWriter:
    console = console or Console()
    if console.is_terminal:
        return LiveFrameWriter(console)
    log.debug("Console is not a terminal, only the final frame will be printed")
    return StaticFrameWriter(console)


# 🔼⚙️

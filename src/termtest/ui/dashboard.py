# src/termtest/ui/dashboard.py

"""
Live dashboard: owns the UI-side state and turns state updates into frames.
"""

import asyncio
import time
from collections.abc import Callable, Iterable

import structlog

from termtest.config.models import RenderSettings
from termtest.declaration.models import RegisteredTest
from termtest.state import AllTestStates, TestState, TestStatus
from termtest.telemetry import StructLogger
from termtest.ui.output import FrameWriter
from termtest.ui.renderer import RenderContext, render_frame
from termtest.ui.scheduler import DeferFunction, RedrawScheduler

log: StructLogger = structlog.get_logger("ui.dashboard")


class Dashboard:
    """
    Receives registered tests and state updates from the runner engine and
    keeps the terminal frame in sync with them.

    All methods must be called from the event loop thread. Updates never
    render directly; they go through the RedrawScheduler so a burst of
    updates costs one frame.
    """

    def __init__(
        self,
        writer: FrameWriter,
        settings: RenderSettings | None = None,
        model: str = "",
        spinner_interval: float = 0.1,
        defer: DeferFunction | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.writer = writer
        self.settings = settings or RenderSettings()
        self.model = model
        self.spinner_interval = spinner_interval
        self.registered_tests: list[RegisteredTest] = []
        self.test_states: AllTestStates = {}
        self.elapsed_times: dict[str, float] = {}
        self.spinner_frame = 0
        self.is_finished = False
        self.frame_count = 0
        self.last_output_line_count = 0
        self._clock = clock
        self._start_times: dict[str, float] = {}
        self._stopped_tests: set[str] = set()
        self._closed = False
        self._tick_handle: asyncio.TimerHandle | None = None
        self._scheduler = RedrawScheduler(self.redraw, defer)

    @property
    def is_closed(self) -> bool:
        return self._closed

    # --- Inputs from the runner engine ---

    def set_registered_tests(self, tests: Iterable[RegisteredTest]) -> None:
        self.registered_tests = list(tests)
        log.debug("Registered tests updated", count=len(self.registered_tests))
        self.schedule_redraw()

    def update_test_state(self, test_id: str, state: TestState) -> None:
        self.test_states[test_id] = state
        self._track_elapsed(test_id, state)
        self.schedule_redraw()

    def schedule_redraw(self) -> None:
        if self._closed:
            return
        self._scheduler.schedule()

    def flush(self) -> None:
        """Renders a pending frame immediately instead of waiting for the loop."""
        self._scheduler.flush()

    # --- Timers ---

    def _track_elapsed(self, test_id: str, state: TestState) -> None:
        now = self._clock()
        if state.status != TestStatus.PENDING and test_id not in self._start_times:
            self._start_times[test_id] = now
        if test_id in self._start_times and test_id not in self._stopped_tests:
            self.elapsed_times[test_id] = now - self._start_times[test_id]
            if state.is_finished:
                self._stopped_tests.add(test_id)

    def _refresh_running_elapsed(self) -> None:
        now = self._clock()
        for test_id, started in self._start_times.items():
            if test_id not in self._stopped_tests:
                self.elapsed_times[test_id] = now - started

    def start(self) -> None:
        """Starts the ticker that advances the spinner and running timers."""
        if self._tick_handle is not None or self.is_finished:
            return
        self._tick_handle = asyncio.get_running_loop().call_later(self.spinner_interval, self._tick)
        log.debug("Dashboard ticker started", interval=self.spinner_interval)

    def _tick(self) -> None:
        self._tick_handle = None
        if self.is_finished:
            return
        self.spinner_frame += 1
        self._refresh_running_elapsed()
        self.schedule_redraw()
        self._tick_handle = asyncio.get_running_loop().call_later(self.spinner_interval, self._tick)

    def stop(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
            log.debug("Dashboard ticker stopped")

    def finish(self) -> None:
        """Marks the next frame as the last one. Safe to call more than once."""
        if self.is_finished:
            return
        self.is_finished = True
        self.stop()
        self._refresh_running_elapsed()
        log.debug("Dashboard finishing", emoji_key="render")
        self.schedule_redraw()

    # --- Rendering ---

    def build_context(self) -> RenderContext:
        return RenderContext(
            tests=self.registered_tests,
            states=self.test_states,
            model=self.model,
            settings=self.settings,
            elapsed_times=self.elapsed_times,
            spinner_frame=self.spinner_frame,
        )

    def redraw(self) -> None:
        if self._closed:
            return
        frame = render_frame(self.build_context())
        self.writer.replace(frame)
        self.frame_count += 1
        self.last_output_line_count = frame.count("\n") + 1

        if self.is_finished:
            self._closed = True
            self.writer.done()
            log.debug("Final frame written", frames=self.frame_count, emoji_key="render")


# 🔼⚙️

# src/termtest/state.py
#
"""
Defines the execution state records that the runner engine publishes for each
registered test. The dashboard only ever reads these.
"""

from enum import Enum
from typing import Literal, TypeAlias

import structlog
from attrs import define, field, mutable

from termtest.telemetry import StructLogger

log: StructLogger = structlog.get_logger("state")


class TestStatus(Enum):
    """Lifecycle status shared by tests, steps and checks."""

    __test__ = False  # not a pytest test class

    PENDING = "pending"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"
    CANCELLED = "cancelled"


TERMINAL_STATUSES = frozenset({TestStatus.PASSED, TestStatus.FAILED, TestStatus.CANCELLED})


@define(frozen=True, slots=True)
class ActionRecord:
    """A browser action performed during a step, already pretty-printed."""

    text: str
    time: float


@define(frozen=True, slots=True)
class ThoughtRecord:
    """A reasoning note emitted by the agent during a step."""

    text: str
    time: float


@define(frozen=True, slots=True)
class ModelUsage:
    """Token usage reported by one LLM client."""

    input_tokens: int = 0
    output_tokens: int = 0
    model: str | None = None


@define(frozen=True, slots=True)
class TestFailure:
    """Failure details attached to a test once it fails."""

    __test__ = False  # not a pytest test class

    message: str = ""


@mutable(slots=True)
class StepDescriptor:
    description: str
    status: TestStatus = field(default=TestStatus.PENDING, converter=TestStatus)
    actions: list[ActionRecord] = field(factory=list)
    thoughts: list[ThoughtRecord] = field(factory=list)
    variant: Literal["step"] = field(default="step", init=False)


@mutable(slots=True)
class CheckDescriptor:
    description: str
    status: TestStatus = field(default=TestStatus.PENDING, converter=TestStatus)
    variant: Literal["check"] = field(default="check", init=False)


StepOrCheck: TypeAlias = StepDescriptor | CheckDescriptor


@mutable(slots=True)
class TestState:
    """
    Holds the live execution state for a single registered test.

    Mutable because the runner engine keeps appending steps, actions and
    usage while the test runs; the renderer treats it as a snapshot.
    """

    __test__ = False  # not a pytest test class

    status: TestStatus = field(default=TestStatus.PENDING, converter=TestStatus)
    steps_and_checks: list[StepOrCheck] = field(factory=list)
    failure: TestFailure | None = field(default=None)
    model_usage: list[ModelUsage] = field(factory=list)

    def update_status(self, new_status: TestStatus | str, failure_message: str | None = None) -> None:
        """Moves the test to a new status, attaching a failure when it fails."""
        new_status = TestStatus(new_status)
        old_status = self.status
        if old_status == new_status:
            return

        self.status = new_status
        if new_status == TestStatus.FAILED:
            self.failure = TestFailure(message=failure_message or "")
            log.debug(
                "Test status changed",
                old_status=old_status.value,
                new_status=new_status.value,
                failure=self.failure.message,
            )
            return

        log.debug("Test status changed", old_status=old_status.value, new_status=new_status.value)

    @property
    def is_finished(self) -> bool:
        return self.status in TERMINAL_STATUSES


AllTestStates: TypeAlias = dict[str, TestState]


# 🔼⚙️

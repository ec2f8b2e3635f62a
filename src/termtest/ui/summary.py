# src/termtest/ui/summary.py

"""
Aggregates run-wide counts, token usage, cost and failures from the state map.
"""

from collections.abc import Mapping, Sequence

from attrs import define, field
from rich.markup import escape

from termtest.declaration.models import RegisteredTest
from termtest.pricing import calculate_cost
from termtest.state import TestFailure, TestState, TestStatus
from termtest.ui.formatting import UI_LEFT_PADDING, generate_failure_lines

# Display order and label of each status in the summary line.
STATUS_SUMMARY_FORMAT: tuple[tuple[TestStatus, str, str, str], ...] = (
    (TestStatus.PASSED, "green", "✓", "passed"),
    (TestStatus.FAILED, "red", "✗", "failed"),
    (TestStatus.RUNNING, "bright_blue", "▷", "running"),
    (TestStatus.PENDING, "grey50", "◌", "pending"),
    (TestStatus.CANCELLED, "grey50", "⊘", "cancelled"),
)


@define(frozen=True, slots=True)
class FailureContext:
    filepath: str
    group_names: tuple[str, ...]
    test_title: str
    failure: TestFailure

    @property
    def breadcrumb(self) -> str:
        return " > ".join((self.filepath, *self.group_names, self.test_title))


@define(slots=True)
class RunSummary:
    status_counts: dict[TestStatus, int] = field(factory=lambda: {status: 0 for status in TestStatus})
    total: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    cost: float | None = None
    failures: list[FailureContext] = field(factory=list)


def aggregate_summary(
    tests: Sequence[RegisteredTest],
    states: Mapping[str, TestState],
    model: str | None,
) -> RunSummary:
    """Walks the state map once, in state-map order."""
    context_by_id = {test.id: test for test in tests}
    summary = RunSummary()

    for test_id, state in states.items():
        summary.total += 1
        summary.status_counts[state.status] += 1
        # Only the first client's usage is counted.
        if state.model_usage:
            summary.input_tokens += state.model_usage[0].input_tokens
            summary.output_tokens += state.model_usage[0].output_tokens
        if state.failure:
            test = context_by_id.get(test_id)
            summary.failures.append(
                FailureContext(
                    filepath=test.filepath if test else "Unknown File",
                    group_names=test.group_names if test else (),
                    test_title=test.title if test else "Unknown Test",
                    failure=state.failure,
                )
            )

    summary.cost = calculate_cost(model, summary.input_tokens, summary.output_tokens)
    return summary


def generate_summary_lines(summary: RunSummary) -> list[str]:
    output: list[str] = []

    status_parts = [
        f"[{style}]{glyph} {summary.status_counts[status]} {label}[/]"
        for status, style, glyph, label in STATUS_SUMMARY_FORMAT
        if summary.status_counts[status] > 0
    ]
    status_line = "  ".join(status_parts)

    cost_description = f" (${summary.cost:.2f})" if summary.cost is not None else ""
    token_text = (
        f"[grey50]tokens: {summary.input_tokens} in, {summary.output_tokens} out{escape(cost_description)}[/]"
    )
    output.append(UI_LEFT_PADDING + status_line + ("  " if status_line else "") + token_text)

    if summary.failures:
        output.append(UI_LEFT_PADDING + "[dim]Failures:[/]")
        for failure_context in summary.failures:
            output.append(UI_LEFT_PADDING * 2 + f"[dim]{escape(failure_context.breadcrumb)}[/]")
            output.extend(generate_failure_lines(failure_context.failure, 4))
            output.append(UI_LEFT_PADDING)
    return output


def calculate_summary_height(states: Mapping[str, TestState]) -> int:
    """Line count of the summary section, mirroring generate_summary_lines."""
    failure_count = sum(1 for state in states.values() if state.failure)
    height = 1
    if failure_count:
        height += 1 + failure_count * 3
    return height


# 🔼⚙️

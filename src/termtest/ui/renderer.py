# src/termtest/ui/renderer.py

"""
Pure rendering of the dashboard frame.

Every function here reads a RenderContext and returns rich-markup lines;
nothing is written to the terminal and no state is advanced.
"""

from collections.abc import Mapping, Sequence
from typing import Literal

from attrs import define, field
from rich.markup import escape

from termtest import __version__
from termtest.config.models import RenderSettings
from termtest.declaration.models import RegisteredTest
from termtest.state import StepDescriptor, TestState, TestStatus
from termtest.ui.formatting import (
    UI_LEFT_PADDING,
    format_duration,
    generate_failure_lines,
    indent_prefix,
)
from termtest.ui.indicators import styled_indicator
from termtest.ui.summary import aggregate_summary, calculate_summary_height, generate_summary_lines
from termtest.ui.tree import TreeNode, group_tests_by_file

HEADER_STYLE = "bold bright_blue"


@define(frozen=True, slots=True)
class RenderContext:
    """Everything one frame is computed from."""

    tests: Sequence[RegisteredTest]
    states: Mapping[str, TestState]
    model: str = ""
    settings: RenderSettings = field(factory=RenderSettings)
    elapsed_times: Mapping[str, float] = field(factory=dict)
    spinner_frame: int = 0
    version: str = __version__


@define(frozen=True, slots=True)
class _StepEvent:
    time: float
    order: int
    kind: Literal["thought", "action"]
    text: str


def merge_step_events(step: StepDescriptor) -> list[_StepEvent]:
    """Thoughts and actions by time; on equal times the thought comes first."""
    events = [_StepEvent(thought.time, 0, "thought", thought.text) for thought in step.thoughts]
    events.extend(_StepEvent(action.time, 1, "action", action.text) for action in step.actions)
    return sorted(events, key=lambda event: (event.time, event.order))


def generate_title_bar(context: RenderContext) -> list[str]:
    title = f"[{HEADER_STYLE}]termtest v{escape(context.version)}[/]"
    model = f"[grey50]{escape(context.model)}[/]" if context.model else ""
    return [f"{UI_LEFT_PADDING}{title}  {model}".rstrip()]


def generate_test_lines(
    test: RegisteredTest, state: TestState, indent: int, context: RenderContext
) -> list[str]:
    output: list[str] = []
    step_indent = indent + 2
    detail_indent = step_indent + 2
    settings = context.settings

    indicator = styled_indicator(state.status, "test", context.spinner_frame)
    timer_text = ""
    if state.status != TestStatus.PENDING:
        elapsed = format_duration(context.elapsed_times.get(test.id, 0.0))
        timer_text = f"[grey50] {escape(f'[{elapsed}]')}[/]"
    output.append(f"{indent_prefix(indent)}{indicator} {escape(test.title)}{timer_text}")

    for item in state.steps_and_checks:
        item_indicator = styled_indicator(item.status, item.variant)
        output.append(f"{indent_prefix(step_indent)}{item_indicator} {escape(item.description)}")

        if item.variant != "step":
            continue
        for event in merge_step_events(item):
            if event.kind == "thought" and settings.show_thoughts:
                output.append(f"{indent_prefix(detail_indent)}[dim]💭 {escape(event.text)}[/]")
            elif event.kind == "action" and settings.show_actions:
                output.append(f"{indent_prefix(detail_indent)}[grey50]{escape(event.text)}[/]")

    if state.failure:
        output.extend(generate_failure_lines(state.failure, step_indent))
    return output


def generate_tree_lines(node: TreeNode, indent: int, context: RenderContext, output: list[str]) -> None:
    """Tests of this node, then each child group's header and contents."""
    for test in node.tests:
        state = context.states.get(test.id)
        if state is None:
            continue
        output.extend(generate_test_lines(test, state, indent, context))

    for group_name, child in node.children.items():
        output.append(f"{indent_prefix(indent)}[{HEADER_STYLE}]↳ {escape(group_name)}[/]")
        generate_tree_lines(child, indent + 2, context, output)


def generate_test_list(context: RenderContext) -> list[str]:
    output: list[str] = []
    for filepath, tree in group_tests_by_file(context.tests).items():
        output.append(f"{UI_LEFT_PADDING}[{HEADER_STYLE}]☰ {escape(filepath)}[/]")
        generate_tree_lines(tree, 2, context, output)
        output.append(UI_LEFT_PADDING)
    return output


def calculate_tree_height(node: TreeNode, states: Mapping[str, TestState], settings: RenderSettings) -> int:
    height = 0
    for test in node.tests:
        state = states.get(test.id)
        if state is None:
            continue
        height += 1
        for item in state.steps_and_checks:
            height += 1
            if item.variant == "step":
                if settings.show_actions:
                    height += len(item.actions)
                if settings.show_thoughts:
                    height += len(item.thoughts)
        if state.failure:
            height += 1

    for child in node.children.values():
        height += 1 + calculate_tree_height(child, states, settings)
    return height


def calculate_test_list_height(
    tests: Sequence[RegisteredTest], states: Mapping[str, TestState], settings: RenderSettings
) -> int:
    """Line count of the test list, mirroring generate_test_list without building text."""
    height = 0
    for tree in group_tests_by_file(tests).values():
        # File header and the blank line after the file.
        height += 2 + calculate_tree_height(tree, states, settings)
    return height


def render_frame_lines(context: RenderContext) -> list[str]:
    test_list_height = calculate_test_list_height(context.tests, context.states, context.settings)
    summary_height = calculate_summary_height(context.states)
    if not context.states:
        test_list_height = summary_height = 0

    lines = generate_title_bar(context)
    lines.append(UI_LEFT_PADDING)

    if test_list_height > 0:
        lines.extend(generate_test_list(context))

    if summary_height > 0:
        if test_list_height > 0:
            lines.append(UI_LEFT_PADDING)
        summary = aggregate_summary(context.tests, context.states, context.model)
        lines.extend(generate_summary_lines(summary))
    return lines


def render_frame(context: RenderContext) -> str:
    """The full frame as one rich-markup string."""
    return "\n".join(render_frame_lines(context))


# 🔼⚙️

# src/termtest/ui/formatting.py

"""
Small line-building helpers shared by the test list and the summary.
"""

from rich.markup import escape

from termtest.state import TestFailure

UI_LEFT_PADDING = "  "


def indent_prefix(indent: int) -> str:
    return UI_LEFT_PADDING + " " * indent


def format_duration(seconds: float) -> str:
    """Compact elapsed time: `4.2s`, `1m 05s`, `2h 03m`."""
    seconds = max(0.0, seconds)
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    if minutes < 60:
        return f"{minutes}m {secs:02d}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes:02d}m"


def generate_failure_lines(failure: TestFailure | None, indent: int) -> list[str]:
    """A failure always renders as exactly one line; embedded newlines are folded."""
    message = failure.message if failure and failure.message else ""
    message = " ".join(line.strip() for line in message.splitlines() if line.strip()) or "Unknown error details"
    return [f"{indent_prefix(indent)}[red]↳ {escape(message)}[/]"]

# src/termtest/ui/indicators.py

"""
Status glyphs and styles for tests, steps and checks.
"""

from typing import Literal, TypeAlias

from termtest.state import TestStatus

IndicatorKind: TypeAlias = Literal["test", "step", "check"]

SPINNER_CHARS = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")

STATUS_STYLE_MAP: dict[TestStatus, str] = {
    TestStatus.PENDING: "grey50",
    TestStatus.RUNNING: "bright_blue",
    TestStatus.PASSED: "green",
    TestStatus.FAILED: "red",
    TestStatus.CANCELLED: "grey50",
}

TEST_GLYPH_MAP: dict[TestStatus, str] = {
    TestStatus.PENDING: "◌",
    TestStatus.RUNNING: "▷",
    TestStatus.PASSED: "✓",
    TestStatus.FAILED: "✗",
    TestStatus.CANCELLED: "⊘",
}

STEP_GLYPH_MAP: dict[TestStatus, str] = {
    TestStatus.PENDING: "•",
    TestStatus.RUNNING: ">",
    TestStatus.PASSED: "⚑",
    TestStatus.FAILED: "✗",
    TestStatus.CANCELLED: "⊘",
}

CHECK_GLYPH_MAP: dict[TestStatus, str] = {
    TestStatus.PENDING: "•",
    TestStatus.RUNNING: "?",
    TestStatus.PASSED: "✓",
    TestStatus.FAILED: "✗",
    TestStatus.CANCELLED: "⊘",
}

_GLYPHS_BY_KIND: dict[str, dict[TestStatus, str]] = {
    "test": TEST_GLYPH_MAP,
    "step": STEP_GLYPH_MAP,
    "check": CHECK_GLYPH_MAP,
}


def status_glyph(status: TestStatus, kind: IndicatorKind, spinner_frame: int = 0) -> str:
    """Plain glyph for a status; running tests take the current spinner character."""
    if kind == "test" and status == TestStatus.RUNNING:
        return SPINNER_CHARS[spinner_frame % len(SPINNER_CHARS)]
    return _GLYPHS_BY_KIND[kind].get(status, "?")


def styled_indicator(status: TestStatus, kind: IndicatorKind, spinner_frame: int = 0) -> str:
    """Glyph wrapped in rich markup for its status style."""
    style = STATUS_STYLE_MAP.get(status, "default")
    return f"[{style}]{status_glyph(status, kind, spinner_frame)}[/]"


# 🔼⚙️

#
# config/models.py
#
"""
Attrs-based data models for termtest configuration structure.
"""

import logging
from typing import Any, TypeAlias

from attrs import define, field

# Options accepted by test and group declarations. Recognized keys are
# `url` and `prompt`; everything else is passed through to the runner engine.
TestOptions: TypeAlias = dict[str, Any]


def _validate_log_level(inst: Any, attr: Any, value: str) -> None:
    """Validator for standard logging level names."""
    valid = logging._nameToLevel.keys()
    if value.upper() not in valid:
        raise ValueError(f"Invalid log_level '{value}'. Must be one of {list(valid)}.")


def _validate_positive_float(inst: Any, attr: Any, value: float) -> None:
    if not isinstance(value, int | float) or value <= 0:
        raise ValueError(f"Field '{attr.name}' must be a positive number, got {value}")


@define(frozen=True, slots=True)
class WorkerOptions:
    """Session-wide defaults applied to every declared test."""

    url: str | None = field(default=None)
    prompt: str | None = field(default=None)
    extra: dict[str, Any] = field(factory=dict)

    def as_options(self) -> TestOptions:
        """Returns the defaults as a plain options mapping, omitting unset keys."""
        options: TestOptions = dict(self.extra)
        if self.url:
            options["url"] = self.url
        if self.prompt:
            options["prompt"] = self.prompt
        return options


@define(frozen=True, slots=True)
class RenderSettings:
    """Toggles for the optional detail lines under each step."""

    show_thoughts: bool = field(default=False)
    show_actions: bool = field(default=True)


@define(frozen=True, slots=True)
class DashboardConfig:
    model: str = field(default="claude-sonnet-4")
    spinner_interval: float = field(default=0.1, validator=_validate_positive_float)
    test_pattern: str = field(default="**/*.tt.py")


@define(frozen=True, slots=True)
class GlobalConfig:
    """Global default settings for termtest."""

    log_level: str = field(default="WARNING", validator=_validate_log_level)


@define(frozen=True, slots=True)
class TermtestConfig:
    """Root configuration object for the termtest application."""

    global_config: GlobalConfig = field(factory=GlobalConfig, metadata={"toml_name": "global"})
    worker: WorkerOptions = field(factory=WorkerOptions)
    render: RenderSettings = field(factory=RenderSettings)
    dashboard: DashboardConfig = field(factory=DashboardConfig)


# 🔼⚙️

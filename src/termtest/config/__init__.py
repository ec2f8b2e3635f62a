#
# config/__init__.py
#
"""
Configuration handling sub-package for termtest.

Exports the loading function and core configuration models.
"""

from .loader import load_config
from .models import (
    DashboardConfig,
    GlobalConfig,
    RenderSettings,
    TermtestConfig,
    TestOptions,
    WorkerOptions,
)

__all__ = [
    "DashboardConfig",
    "GlobalConfig",
    "RenderSettings",
    "TermtestConfig",
    "TestOptions",
    "WorkerOptions",
    "load_config",
]

# 🔼⚙️

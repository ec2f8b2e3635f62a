#
# src/termtest/telemetry/__init__.py
#
"""
Logging setup and logger type aliases for termtest.
"""

from .logger import StructLogger, setup_logging

__all__ = ["StructLogger", "setup_logging"]

# 🔼⚙️

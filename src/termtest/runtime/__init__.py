#
# src/termtest/runtime/__init__.py
#
"""
Runtime sub-package: loading test files into a declared suite.
"""

from .loader import LoadedFile, LoadedSuite, TestFileLoader, discover_test_files

__all__ = [
    "LoadedFile",
    "LoadedSuite",
    "TestFileLoader",
    "discover_test_files",
]

# 🔼⚙️

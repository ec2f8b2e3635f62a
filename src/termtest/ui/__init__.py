#
# src/termtest/ui/__init__.py
#
"""
Terminal dashboard sub-package: tree building, rendering and redraw scheduling.
"""

from .dashboard import Dashboard
from .output import FrameWriter, LiveFrameWriter, StaticFrameWriter, make_frame_writer
from .renderer import RenderContext, render_frame
from .scheduler import RedrawScheduler
from .summary import RunSummary, aggregate_summary
from .tree import TreeNode, build_test_tree, group_tests_by_file

__all__ = [
    "Dashboard",
    "FrameWriter",
    "LiveFrameWriter",
    "RedrawScheduler",
    "RenderContext",
    "RunSummary",
    "StaticFrameWriter",
    "TreeNode",
    "aggregate_summary",
    "build_test_tree",
    "group_tests_by_file",
    "make_frame_writer",
    "render_frame",
]

# 🔼⚙️

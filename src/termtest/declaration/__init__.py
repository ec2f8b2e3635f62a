#
# src/termtest/declaration/__init__.py
#
"""
Test, group and hook declaration sub-package for termtest.
"""

from .api import (
    active_session,
    after_all,
    after_each,
    before_all,
    before_each,
    current_session,
    group,
    test,
)
from .models import (
    HIERARCHY_SEPARATOR,
    Group,
    HookKind,
    HookSet,
    RegisteredTest,
    hierarchy_key,
)
from .session import DeclarationSession

__all__ = [
    "HIERARCHY_SEPARATOR",
    "DeclarationSession",
    "Group",
    "HookKind",
    "HookSet",
    "RegisteredTest",
    "active_session",
    "after_all",
    "after_each",
    "before_all",
    "before_each",
    "current_session",
    "group",
    "hierarchy_key",
    "test",
]

# 🔼⚙️

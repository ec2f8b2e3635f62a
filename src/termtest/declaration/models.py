# src/termtest/declaration/models.py

"""
Records produced while test files declare their tests, groups and hooks.
"""

from collections.abc import Awaitable, Callable, Sequence
from enum import Enum
from typing import Any, TypeAlias

from attrs import define, field, mutable

from termtest.config.models import TestOptions

TestFunction: TypeAlias = Callable[..., Awaitable[Any] | Any]
GroupFunction: TypeAlias = Callable[[], Any]
HookFunction: TypeAlias = Callable[..., Awaitable[Any] | Any]

HIERARCHY_SEPARATOR = ">"


class HookKind(Enum):
    BEFORE_ALL = "before_all"
    AFTER_ALL = "after_all"
    BEFORE_EACH = "before_each"
    AFTER_EACH = "after_each"


@define(frozen=True, slots=True)
class Group:
    """A named declaration scope. Only exists as a tag on the tests it encloses."""

    id: str
    name: str
    options: TestOptions = field(factory=dict)


@define(frozen=True, slots=True)
class RegisteredTest:
    """Immutable record of one declared test and its resolved context."""

    __test__ = False  # not a pytest test class

    id: str
    title: str
    filepath: str
    fn: TestFunction = field(repr=False, eq=False)
    url: str
    group_hierarchy: tuple[Group, ...] = field(default=(), converter=tuple)
    prompt_stack: tuple[str, ...] = field(default=(), converter=tuple)
    options: TestOptions = field(factory=dict, eq=False)

    @property
    def group_names(self) -> tuple[str, ...]:
        return tuple(group.name for group in self.group_hierarchy)


@mutable(slots=True)
class HookSet:
    """The four ordered lifecycle-callback lists for one scope."""

    before_all: list[HookFunction] = field(factory=list)
    after_all: list[HookFunction] = field(factory=list)
    before_each: list[HookFunction] = field(factory=list)
    after_each: list[HookFunction] = field(factory=list)

    def hooks(self, kind: HookKind) -> list[HookFunction]:
        return getattr(self, kind.value)

    def __len__(self) -> int:
        return len(self.before_all) + len(self.after_all) + len(self.before_each) + len(self.after_each)


def hierarchy_key(groups: Sequence[Group]) -> str:
    """Joins group ids outer to inner into the key that scopes a HookSet."""
    return HIERARCHY_SEPARATOR.join(group.id for group in groups)


# 🔼⚙️

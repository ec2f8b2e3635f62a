# src/termtest/ui/tree.py

"""
Rebuilds the file/group nesting of registered tests for display.
"""

from collections.abc import Iterable

from attrs import define, field

from termtest.declaration.models import RegisteredTest


@define(slots=True)
class TreeNode:
    """One display bucket: its own tests, then child groups keyed by name."""

    tests: list[RegisteredTest] = field(factory=list)
    children: dict[str, "TreeNode"] = field(factory=dict)


def build_test_tree(tests: Iterable[RegisteredTest]) -> TreeNode:
    """
    Nests tests under their groups, keyed by group name.

    Children keep first-encounter order. Groups sharing a name at the same
    depth land in the same node even when they were declared separately.
    """
    root = TreeNode()
    for test in tests:
        node = root
        for group in test.group_hierarchy:
            child = node.children.get(group.name)
            if child is None:
                child = node.children[group.name] = TreeNode()
            node = child
        node.tests.append(test)
    return root


def group_tests_by_file(tests: Iterable[RegisteredTest]) -> dict[str, TreeNode]:
    """Partitions tests by file in first-seen order and builds one tree per file."""
    files: dict[str, list[RegisteredTest]] = {}
    for test in tests:
        files.setdefault(test.filepath, []).append(test)
    return {filepath: build_test_tree(file_tests) for filepath, file_tests in files.items()}

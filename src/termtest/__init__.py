#
# src/termtest/__init__.py
#
"""
termtest: declarative test registration with a live terminal dashboard.

Test files import their declaration helpers from here:

    from termtest import after_each, before_all, group, test
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("termtest")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from termtest.declaration import (  # noqa: E402
    after_all,
    after_each,
    before_all,
    before_each,
    group,
    test,
)

__all__ = [
    "__version__",
    "after_all",
    "after_each",
    "before_all",
    "before_each",
    "group",
    "test",
]

# 🔼⚙️

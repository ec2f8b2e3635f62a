# src/termtest/declaration/api.py

"""
Module-level declaration functions used inside test files.

Each call is forwarded to the DeclarationSession bound for the file that is
currently being loaded:

    from termtest import before_each, group, test

    def checkout():
        before_each(reset_cart)
        test("pays with card", pay_with_card)

    group("checkout", {"url": "/cart"}, checkout)
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from termtest.config.models import TestOptions
from termtest.declaration.models import (
    GroupFunction,
    HookFunction,
    HookKind,
    RegisteredTest,
    TestFunction,
)
from termtest.declaration.session import DeclarationSession
from termtest.exceptions import DeclarationContextError

_active_session: ContextVar[DeclarationSession | None] = ContextVar("termtest_active_session", default=None)


def current_session() -> DeclarationSession:
    session = _active_session.get()
    if session is None:
        raise DeclarationContextError(
            "No test file is being loaded. Declarations are only valid while termtest loads a test file."
        )
    return session


@contextmanager
def active_session(session: DeclarationSession) -> Iterator[DeclarationSession]:
    """Binds `session` as the declaration target for the duration of the block."""
    token = _active_session.set(session)
    try:
        yield session
    finally:
        _active_session.reset(token)


def group(
    name: str,
    options_or_fn: TestOptions | GroupFunction | None = None,
    fn: GroupFunction | None = None,
) -> None:
    current_session().group(name, options_or_fn, fn)


class _TestDeclaration:
    """Callable `test(...)` with `test.group(...)` attached."""

    __test__ = False  # not a pytest test class
    group = staticmethod(group)

    def __call__(
        self,
        title: str,
        options_or_fn: TestOptions | TestFunction | None = None,
        fn: TestFunction | None = None,
    ) -> RegisteredTest:
        return current_session().test(title, options_or_fn, fn)


test = _TestDeclaration()


def _hook_registrar(kind: HookKind) -> Callable[[HookFunction], HookFunction]:
    def register(fn: HookFunction) -> HookFunction:
        return current_session().create_hook_registrar(kind)(fn)

    register.__name__ = kind.value
    register.__doc__ = f"Registers a {kind.value.replace('_', ' ')} hook in the current scope."
    return register


before_all = _hook_registrar(HookKind.BEFORE_ALL)
after_all = _hook_registrar(HookKind.AFTER_ALL)
before_each = _hook_registrar(HookKind.BEFORE_EACH)
after_each = _hook_registrar(HookKind.AFTER_EACH)


# 🔼⚙️

from collections.abc import Callable

import pytest
from rich.text import Text

from termtest.config import WorkerOptions
from termtest.declaration import DeclarationSession, Group, RegisteredTest


def noop() -> None:
    pass


def plain(line: str) -> str:
    """Strips rich markup from a rendered line."""
    return Text.from_markup(line).plain


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TERMTEST_URL", raising=False)
    monkeypatch.delenv("TERMTEST_MODEL", raising=False)


@pytest.fixture
def session() -> DeclarationSession:
    return DeclarationSession("tests/example.tt.py", WorkerOptions(url="https://example.com"))


@pytest.fixture
def bare_session() -> DeclarationSession:
    """A session without a worker url."""
    return DeclarationSession("tests/example.tt.py")


@pytest.fixture
def make_test() -> Callable[..., RegisteredTest]:
    counter = iter(range(1, 10_000))

    def factory(
        title: str,
        filepath: str = "tests/example.tt.py",
        groups: tuple[str, ...] = (),
        test_id: str | None = None,
    ) -> RegisteredTest:
        hierarchy = tuple(Group(id=f"grp{name}", name=name) for name in groups)
        return RegisteredTest(
            id=test_id or f"tst{next(counter)}",
            title=title,
            filepath=filepath,
            fn=noop,
            url="https://example.com",
            group_hierarchy=hierarchy,
        )

    return factory

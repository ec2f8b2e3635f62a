# src/termtest/runtime/loader.py
"""
Discovers test files and runs their declaration pass, one session per file.
"""

import runpy
from collections.abc import Iterable
from pathlib import Path

import structlog
from attrs import define, field

from termtest.config.models import TestOptions, WorkerOptions
from termtest.declaration.api import active_session
from termtest.declaration.models import HookSet, RegisteredTest
from termtest.declaration.session import DeclarationSession
from termtest.exceptions import TermtestError, TestLoadError
from termtest.telemetry import StructLogger

log: StructLogger = structlog.get_logger("runtime.loader")


@define(slots=True)
class LoadedFile:
    """What one test file declared."""

    filepath: str
    tests: list[RegisteredTest]
    file_hooks: HookSet
    group_hooks: dict[str, HookSet]
    prompt_stacks: dict[str, list[str]]


@define(slots=True)
class LoadedSuite:
    """Everything declared across the loaded files, in load order."""

    files: list[LoadedFile] = field(factory=list)

    @property
    def tests(self) -> list[RegisteredTest]:
        return [test for loaded in self.files for test in loaded.tests]

    def file(self, filepath: str) -> LoadedFile | None:
        return next((loaded for loaded in self.files if loaded.filepath == filepath), None)


def discover_test_files(paths: Iterable[Path], pattern: str) -> list[Path]:
    """Expands directories with `pattern`; explicit files are kept as given."""
    found: list[Path] = []
    seen: set[Path] = set()
    for path in paths:
        candidates = sorted(path.glob(pattern)) if path.is_dir() else [path]
        for candidate in candidates:
            resolved = candidate.resolve()
            if resolved in seen or not candidate.is_file():
                continue
            seen.add(resolved)
            found.append(candidate)
    log.debug("Discovered test files", count=len(found), pattern=pattern)
    return found


class TestFileLoader:
    """Runs each test file's module body with a fresh declaration session bound."""

    __test__ = False  # not a pytest test class

    def __init__(self, worker_options: WorkerOptions | TestOptions | None = None, root: Path | None = None):
        self.worker_options = worker_options
        self.root = root
        self._used_ids: set[str] = set()

    def _display_path(self, path: Path) -> str:
        if self.root is not None:
            try:
                return path.resolve().relative_to(self.root.resolve()).as_posix()
            except ValueError:
                pass
        return path.as_posix()

    def load_file(self, path: Path) -> LoadedFile:
        filepath = self._display_path(path)
        load_log = log.bind(filepath=filepath)
        session = DeclarationSession(filepath, self.worker_options, used_ids=self._used_ids)

        load_log.debug("Loading test file", emoji_key="load")
        try:
            with active_session(session):
                runpy.run_path(str(path), run_name="__termtest__")
        except TermtestError as e:
            load_log.error("Declaration failed", error=str(e))
            raise TestLoadError("Invalid test declaration", filepath, e) from e
        except Exception as e:
            load_log.error("Test file raised while loading", error=str(e), exc_info=True)
            raise TestLoadError("Test file raised while loading", filepath, e) from e

        tests = session.registered_tests
        load_log.info("Test file loaded", test_count=len(tests))
        return LoadedFile(
            filepath=filepath,
            tests=tests,
            file_hooks=session.file_hooks,
            group_hooks=session.group_hooks,
            prompt_stacks=session.prompt_stacks,
        )

    def load(self, paths: Iterable[Path]) -> LoadedSuite:
        suite = LoadedSuite()
        for path in paths:
            suite.files.append(self.load_file(path))
        return suite


# 🔼⚙️

# src/termtest/declaration/session.py

"""
The declaration session: registry of tests, group stack and hook scopes for
exactly one test-file load pass.
"""

import inspect
import secrets
import string
from collections.abc import Callable, Mapping
from typing import Any

import structlog

from termtest.config.models import TestOptions, WorkerOptions
from termtest.declaration.models import (
    Group,
    GroupFunction,
    HookFunction,
    HookKind,
    HookSet,
    RegisteredTest,
    TestFunction,
    hierarchy_key,
)
from termtest.declaration.urls import add_protocol_if_missing, resolve_url
from termtest.exceptions import (
    ConfigurationError,
    HookRegistrationError,
    InvalidDeclarationError,
)
from termtest.telemetry import StructLogger

log: StructLogger = structlog.get_logger("declaration.session")

_ID_ALPHABET = string.ascii_lowercase + string.digits
GROUP_ID_PREFIX = "grp"
TEST_ID_PREFIX = "tst"

URL_SOURCES_MESSAGE = (
    "URL must be provided either through (1) env var TERMTEST_URL, "
    "(2) the worker url in termtest.toml, or (3) in group or test options"
)


def _generate_id(prefix: str, length: int) -> str:
    return prefix + "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def _resolve_call_form(
    what: str,
    options_or_fn: TestOptions | Callable[..., Any] | None,
    fn: Callable[..., Any] | None,
) -> tuple[TestOptions, Callable[..., Any]]:
    """Splits the `(options, fn)` / `(fn)` call forms into options and body."""
    if callable(options_or_fn):
        if fn is not None:
            raise InvalidDeclarationError(f"{what} accepts a single function after its name")
        return {}, options_or_fn

    if options_or_fn is not None and not isinstance(options_or_fn, Mapping):
        raise InvalidDeclarationError(
            f"{what} options must be a mapping, got {type(options_or_fn).__name__}"
        )
    if fn is None:
        raise InvalidDeclarationError(f"{what} function is required")
    if not callable(fn):
        raise InvalidDeclarationError(f"{what} function must be callable, got {type(fn).__name__}")
    return dict(options_or_fn or {}), fn


class DeclarationSession:
    """
    Collects everything one test file declares.

    A session lives for exactly one file-load pass. Nothing it holds leaks
    into the next file: the loader creates a fresh session per file.
    """

    def __init__(
        self,
        filepath: str,
        worker_options: WorkerOptions | TestOptions | None = None,
        used_ids: set[str] | None = None,
    ):
        self.filepath = filepath
        if isinstance(worker_options, WorkerOptions):
            self.worker_options: TestOptions = worker_options.as_options()
        else:
            self.worker_options = dict(worker_options or {})
        self.file_hooks = HookSet()
        self.group_hooks: dict[str, HookSet] = {}
        self.prompt_stacks: dict[str, list[str]] = {}
        self._stack: list[Group] = []
        self._tests: list[RegisteredTest] = []
        self._used_ids = used_ids if used_ids is not None else set()
        self._log = log.bind(filepath=filepath)

    # --- Read-only views ---

    @property
    def hierarchy(self) -> tuple[Group, ...]:
        """A snapshot of the group stack, outer to inner."""
        return tuple(self._stack)

    @property
    def registered_tests(self) -> list[RegisteredTest]:
        return list(self._tests)

    def hooks_for(self, key: str) -> HookSet | None:
        """Exact-key lookup; ancestor scopes are not merged in."""
        return self.group_hooks.get(key)

    def hook_sets_for(self, test: RegisteredTest) -> list[HookSet]:
        """File hooks followed by the HookSet of every ancestor scope, outer to inner."""
        hook_sets = [self.file_hooks]
        for depth in range(1, len(test.group_hierarchy) + 1):
            hook_set = self.group_hooks.get(hierarchy_key(test.group_hierarchy[:depth]))
            if hook_set is not None:
                hook_sets.append(hook_set)
        return hook_sets

    # --- Option helpers ---

    def current_group_options(self) -> TestOptions:
        """Options of every enclosing group merged outer to inner."""
        merged: TestOptions = {}
        for group in self._stack:
            merged.update(group.options)
        return merged

    def _closest_group_value(self, key: str) -> Any:
        for group in reversed(self._stack):
            value = group.options.get(key)
            if value:
                return value
        return None

    def _new_id(self, prefix: str, length: int) -> str:
        new_id = _generate_id(prefix, length)
        while new_id in self._used_ids:
            new_id = _generate_id(prefix, length)
        self._used_ids.add(new_id)
        return new_id

    # --- Registration ---

    def register_test(
        self,
        fn: TestFunction,
        title: str,
        url: str,
        *,
        prompt_stack: tuple[str, ...] | list[str] = (),
        options: TestOptions | None = None,
    ) -> RegisteredTest:
        """Appends a test, capturing the group stack as it is right now."""
        if not url:
            raise ConfigurationError(f"Test '{title}' has no resolved url. {URL_SOURCES_MESSAGE}")

        registered = RegisteredTest(
            id=self._new_id(TEST_ID_PREFIX, 8),
            title=title,
            filepath=self.filepath,
            fn=fn,
            url=url,
            group_hierarchy=tuple(self._stack),
            prompt_stack=tuple(prompt_stack),
            options=dict(options or {}),
        )
        self._tests.append(registered)
        self._log.debug(
            "Test registered",
            test_id=registered.id,
            title=title,
            groups=list(registered.group_names),
            emoji_key="declare",
        )
        return registered

    def test(
        self,
        title: str,
        options_or_fn: TestOptions | TestFunction | None = None,
        fn: TestFunction | None = None,
    ) -> RegisteredTest:
        """Declares a test: `test(title, fn)` or `test(title, options, fn)`."""
        options, test_fn = _resolve_call_form("Test", options_or_fn, fn)
        group_options = self.current_group_options()

        url = resolve_url(
            self.worker_options.get("url"),
            self._closest_group_value("url"),
            options.get("url"),
        )
        if not url:
            self._log.error("No url resolvable for test", title=title)
            raise ConfigurationError(URL_SOURCES_MESSAGE)

        combined: TestOptions = {**self.worker_options, **group_options, **options, "url": url}

        # Group prompt first, then the test's own prompt.
        prompt_stack: list[str] = []
        group_prompt = self._closest_group_value("prompt")
        if group_prompt:
            prompt_stack.append(group_prompt)
        if options.get("prompt"):
            prompt_stack.append(options["prompt"])

        if title in self.prompt_stacks:
            self._log.warning("Duplicate test title in file", title=title)
        self.prompt_stacks[title] = prompt_stack

        return self.register_test(
            test_fn,
            title,
            add_protocol_if_missing(url),
            prompt_stack=prompt_stack,
            options=combined,
        )

    def group(
        self,
        name: str,
        options_or_fn: TestOptions | GroupFunction | None = None,
        fn: GroupFunction | None = None,
    ) -> None:
        """
        Declares a group and runs its body with the group on the stack.

        The group is popped on every exit path, so an error raised by one
        body never leaves a stale entry for the declarations that follow.
        """
        options, group_fn = _resolve_call_form("Group", options_or_fn, fn)
        group = Group(id=self._new_id(GROUP_ID_PREFIX, 6), name=name, options=options)

        self._stack.append(group)
        self._log.debug("Entered group", group=name, group_id=group.id, depth=len(self._stack))
        try:
            result = group_fn()
            if inspect.isawaitable(result):
                if inspect.iscoroutine(result):
                    result.close()
                raise InvalidDeclarationError(f"Group '{name}' body must be synchronous")
        finally:
            self._stack.pop()

    def get_or_init_group_hook_set(self, key: str) -> HookSet:
        hook_set = self.group_hooks.get(key)
        if hook_set is None:
            hook_set = self.group_hooks[key] = HookSet()
        return hook_set

    def create_hook_registrar(self, kind: HookKind) -> Callable[[HookFunction], HookFunction]:
        """Returns a function registering `kind` hooks in the scope active at call time."""

        def register(fn: HookFunction) -> HookFunction:
            if not callable(fn):
                raise HookRegistrationError(kind.value, fn)

            if self._stack:
                key = hierarchy_key(self._stack)
                self.get_or_init_group_hook_set(key).hooks(kind).append(fn)
                self._log.debug("Group hook registered", kind=kind.value, scope=key)
            else:
                self.file_hooks.hooks(kind).append(fn)
                self._log.debug("File hook registered", kind=kind.value)
            return fn

        register.__name__ = kind.value
        return register


# 🔼⚙️

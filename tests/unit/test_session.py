# tests/unit/test_session.py

"""Unit tests for the DeclarationSession registry, group stack and hook scoping."""

import pytest

from termtest.declaration import DeclarationSession, HookKind, HookSet, hierarchy_key
from termtest.exceptions import (
    ConfigurationError,
    DeclarationError,
    HookRegistrationError,
    InvalidDeclarationError,
)
from tests.conftest import noop


class TestGroupStack:
    """Stack discipline of group declarations."""

    def test_depth_restored_after_nested_groups(self, session: DeclarationSession):
        depths: list[int] = []

        def level_three():
            depths.append(len(session.hierarchy))

        def level_two():
            session.group("three", level_three)
            depths.append(len(session.hierarchy))

        def level_one():
            session.group("two", level_two)

        session.group("one", level_one)

        assert depths == [3, 2]
        assert session.hierarchy == ()

    def test_depth_restored_when_inner_body_raises(self, session: DeclarationSession):
        def inner():
            raise RuntimeError("boom")

        def middle():
            session.group("inner", inner)

        with pytest.raises(RuntimeError, match="boom"):
            session.group("outer", middle)

        assert session.hierarchy == ()

    def test_sibling_after_failed_group_sees_clean_hierarchy(self, session: DeclarationSession):
        def broken():
            session.test("inside broken", noop)
            raise ValueError("declaration bug")

        def parent():
            with pytest.raises(ValueError):
                session.group("broken", broken)
            session.group("sibling", lambda: session.test("inside sibling", noop))

        session.group("parent", parent)

        sibling_test = session.registered_tests[-1]
        assert sibling_test.title == "inside sibling"
        assert [group.name for group in sibling_test.group_hierarchy] == ["parent", "sibling"]

    def test_registered_hierarchy_is_a_snapshot(self, session: DeclarationSession):
        def body():
            session.test("first", noop)
            session.group("nested", lambda: session.test("second", noop))

        session.group("outer", body)

        first, second = session.registered_tests
        assert first.group_names == ("outer",)
        assert second.group_names == ("outer", "nested")

    def test_group_ids_are_unique(self, session: DeclarationSession):
        def body():
            session.test("t", noop)

        for _ in range(50):
            session.group("same name", body)

        ids = {test.group_hierarchy[0].id for test in session.registered_tests}
        assert len(ids) == 50
        assert all(group_id.startswith("grp") and len(group_id) == 9 for group_id in ids)

    def test_async_group_body_is_rejected(self, session: DeclarationSession):
        async def body():
            pass

        with pytest.raises(InvalidDeclarationError, match="synchronous"):
            session.group("async", body)
        assert session.hierarchy == ()


class TestCallForms:
    """Argument resolution for test and group declarations."""

    def test_test_with_options_and_function(self, session: DeclarationSession):
        registered = session.test("with options", {"url": "https://other.example.com"}, noop)
        assert registered.url == "https://other.example.com"
        assert registered.fn is noop

    def test_options_without_function_fails(self, session: DeclarationSession):
        with pytest.raises(InvalidDeclarationError, match="function is required"):
            session.test("missing fn", {"url": "https://example.com"})

    def test_group_options_without_function_fails(self, session: DeclarationSession):
        with pytest.raises(InvalidDeclarationError):
            session.group("missing fn", {"prompt": "x"})

    def test_non_callable_final_argument_fails(self, session: DeclarationSession):
        with pytest.raises(InvalidDeclarationError, match="callable"):
            session.group("bad", {}, "not a function")

    def test_non_mapping_options_fail(self, session: DeclarationSession):
        with pytest.raises(InvalidDeclarationError, match="mapping"):
            session.test("bad", ["url"], noop)

    def test_two_functions_fail(self, session: DeclarationSession):
        with pytest.raises(InvalidDeclarationError):
            session.test("bad", noop, noop)

    def test_declaration_errors_share_a_base(self):
        assert issubclass(InvalidDeclarationError, DeclarationError)


class TestUrlResolution:
    """Effective url from worker defaults, group and test options."""

    def test_test_url_overrides_worker_default(self):
        session = DeclarationSession("f.tt.py", {"url": "https://a"})
        assert session.test("t", {"url": "https://b"}, noop).url == "https://b"

    def test_worker_default_used_when_nothing_overrides(self):
        session = DeclarationSession("f.tt.py", {"url": "https://a"})
        session.group("g", lambda: session.test("t", noop))
        assert session.registered_tests[0].url == "https://a"

    def test_missing_url_names_all_sources(self, bare_session: DeclarationSession):
        with pytest.raises(ConfigurationError) as exc_info:
            bare_session.test("t", noop)

        message = str(exc_info.value)
        assert "TERMTEST_URL" in message
        assert "termtest.toml" in message
        assert "group or test options" in message
        assert bare_session.registered_tests == []

    def test_empty_group_url_does_not_mask_worker_default(self):
        session = DeclarationSession("f.tt.py", {"url": "https://a"})
        session.group("g", {"url": ""}, lambda: session.test("t", noop))
        assert session.registered_tests[0].url == "https://a"

    def test_closest_group_url_wins(self, bare_session: DeclarationSession):
        def inner():
            bare_session.test("t", noop)

        def outer():
            bare_session.group("inner", {"url": "https://inner.example.com"}, inner)

        bare_session.group("outer", {"url": "https://outer.example.com"}, outer)
        assert bare_session.registered_tests[0].url == "https://inner.example.com"

    def test_relative_group_url_joins_worker_default(self):
        session = DeclarationSession("f.tt.py", {"url": "https://shop.example.com"})
        session.group("cart", {"url": "/cart"}, lambda: session.test("t", noop))
        assert session.registered_tests[0].url == "https://shop.example.com/cart"

    def test_bare_host_gets_a_scheme(self, bare_session: DeclarationSession):
        assert bare_session.test("t", {"url": "localhost:3000"}, noop).url == "http://localhost:3000"

    def test_register_test_rejects_empty_url(self, session: DeclarationSession):
        with pytest.raises(ConfigurationError):
            session.register_test(noop, "t", "")


class TestOptionMerging:
    def test_last_applied_value_wins_per_key(self):
        session = DeclarationSession("f.tt.py", {"url": "https://a", "timeout": 1, "retries": 0})

        def inner():
            session.test("t", {"timeout": 4}, noop)

        def outer():
            session.group("inner", {"timeout": 3, "headless": True}, inner)

        session.group("outer", {"timeout": 2, "retries": 2}, outer)

        options = session.registered_tests[0].options
        assert options["timeout"] == 4
        assert options["retries"] == 2
        assert options["headless"] is True
        assert options["url"] == "https://a"


class TestPromptStack:
    def test_group_prompt_precedes_test_prompt(self, session: DeclarationSession):
        session.group(
            "g",
            {"prompt": "the store is in test mode"},
            lambda: session.test("pays", {"prompt": "use the test card"}, noop),
        )

        assert session.prompt_stacks["pays"] == ["the store is in test mode", "use the test card"]
        assert session.registered_tests[0].prompt_stack == ("the store is in test mode", "use the test card")

    def test_only_present_prompts_are_recorded(self, session: DeclarationSession):
        session.test("no prompts", noop)
        session.test("own prompt", {"prompt": "be quick"}, noop)

        assert session.prompt_stacks["no prompts"] == []
        assert session.prompt_stacks["own prompt"] == ["be quick"]


class TestHookScoping:
    def test_group_hook_is_keyed_by_full_path(self, session: DeclarationSession):
        before_each = session.create_hook_registrar(HookKind.BEFORE_EACH)
        hook = lambda: None  # noqa: E731
        captured = {}

        def inner():
            captured["path"] = session.hierarchy
            before_each(hook)

        session.group("A", lambda: session.group("B", inner))

        group_a, group_b = captured["path"]
        key = f"{group_a.id}>{group_b.id}"
        assert key == hierarchy_key(captured["path"])
        assert session.hooks_for(key).before_each == [hook]
        assert session.hooks_for(group_a.id) is None
        assert session.hooks_for("grpC") is None
        assert len(session.file_hooks) == 0

    def test_hook_without_group_is_file_level(self, session: DeclarationSession):
        after_all = session.create_hook_registrar(HookKind.AFTER_ALL)
        hook = lambda: None  # noqa: E731

        after_all(hook)

        assert session.file_hooks.after_all == [hook]
        assert session.group_hooks == {}

    def test_hooks_accumulate_in_order(self, session: DeclarationSession):
        before_all = session.create_hook_registrar(HookKind.BEFORE_ALL)
        first, second = (lambda: 1), (lambda: 2)

        def body():
            before_all(first)
            before_all(second)

        session.group("g", body)

        (hook_set,) = session.group_hooks.values()
        assert hook_set.before_all == [first, second]

    def test_non_callable_hook_is_a_type_error(self, session: DeclarationSession):
        before_each = session.create_hook_registrar(HookKind.BEFORE_EACH)

        with pytest.raises(HookRegistrationError, match="before_each expects a function"):
            before_each("nope")
        with pytest.raises(TypeError):
            before_each(None)

    def test_hook_sets_for_collects_ancestor_scopes(self, session: DeclarationSession):
        after_each = session.create_hook_registrar(HookKind.AFTER_EACH)
        file_hook, outer_hook, inner_hook = (lambda: 0), (lambda: 1), (lambda: 2)
        after_each(file_hook)

        def inner():
            after_each(inner_hook)
            session.test("t", noop)

        def outer():
            after_each(outer_hook)
            session.group("inner", inner)

        session.group("outer", outer)

        hook_sets = session.hook_sets_for(session.registered_tests[0])
        assert [hook_set.after_each for hook_set in hook_sets] == [[file_hook], [outer_hook], [inner_hook]]

    def test_get_or_init_creates_empty_hook_set(self, session: DeclarationSession):
        hook_set = session.get_or_init_group_hook_set("grpx>grpy")
        assert hook_set == HookSet()
        assert session.get_or_init_group_hook_set("grpx>grpy") is hook_set

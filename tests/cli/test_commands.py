# tests/cli/test_commands.py

"""CLI tests for `termtest list` and `termtest config show`."""

import logging
import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

import termtest
from termtest.cli.main import cli

DECLARATIONS = """
from termtest import group, test


def body():
    pass


test("homepage loads", {"url": "https://example.com"}, body)


def checkout():
    test("pays with card", body)


group("checkout", {"url": "https://shop.example.com"}, checkout)
"""


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TERMTEST_CONF", raising=False)
    monkeypatch.delenv("TERMTEST_LOG_LEVEL", raising=False)
    return tmp_path


def test_help_lists_commands(runner: CliRunner):
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "list" in result.output
    assert "config" in result.output


def test_version(runner: CliRunner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert termtest.__version__ in result.output


def test_list_shows_declared_tree(runner: CliRunner, project: Path):
    (project / "shop.tt.py").write_text(textwrap.dedent(DECLARATIONS))

    result = runner.invoke(cli, ["list"])

    assert result.exit_code == 0, result.output
    assert "☰ shop.tt.py" in result.output
    assert "◌ homepage loads" in result.output
    assert "↳ checkout" in result.output
    assert "◌ pays with card" in result.output
    assert "◌ 2 pending" in result.output


def test_list_without_test_files_fails(runner: CliRunner, project: Path):
    result = runner.invoke(cli, ["list"])

    assert result.exit_code == 1
    assert "No test files found" in result.output


def test_list_reports_declaration_errors(runner: CliRunner, project: Path):
    (project / "nourl.tt.py").write_text("from termtest import test\ntest('t', lambda: None)\n")

    result = runner.invoke(cli, ["list", "nourl.tt.py"])

    assert result.exit_code == 1
    assert "nourl.tt.py" in result.output
    assert "TERMTEST_URL" in result.output


def test_list_uses_worker_url_from_config(runner: CliRunner, project: Path):
    (project / "termtest.toml").write_text('[worker]\nurl = "https://example.com"\n')
    (project / "plain.tt.py").write_text("from termtest import test\ntest('t', lambda: None)\n")

    result = runner.invoke(cli, ["list"])

    assert result.exit_code == 0, result.output
    assert "◌ t" in result.output


def test_config_show(runner: CliRunner, project: Path):
    (project / "termtest.toml").write_text('[worker]\nurl = "https://example.com"\n')

    result = runner.invoke(cli, ["config", "show"])

    assert result.exit_code == 0, result.output
    assert "TermtestConfig(" in result.output
    assert "https://example.com" in result.output


def test_config_show_invalid_file(runner: CliRunner, project: Path):
    (project / "termtest.toml").write_text("[dashboard]\nspinner_interval = 0\n")

    result = runner.invoke(cli, ["config", "show"])

    assert result.exit_code == 1
    assert "Configuration problem" in result.output


def test_config_file_sets_log_level(runner: CliRunner, project: Path):
    (project / "termtest.toml").write_text('[global]\nlog_level = "DEBUG"\n')

    result = runner.invoke(cli, ["config", "show"])

    assert result.exit_code == 0, result.output
    assert logging.getLogger().level == logging.DEBUG


def test_cli_log_level_beats_config_file(runner: CliRunner, project: Path):
    (project / "termtest.toml").write_text('[global]\nlog_level = "DEBUG"\n')

    result = runner.invoke(cli, ["--log-level", "ERROR", "config", "show"])

    assert result.exit_code == 0, result.output
    assert logging.getLogger().level == logging.ERROR


def test_env_log_level_beats_config_file(runner: CliRunner, project: Path, monkeypatch: pytest.MonkeyPatch):
    (project / "termtest.toml").write_text('[global]\nlog_level = "DEBUG"\n')
    monkeypatch.setenv("TERMTEST_LOG_LEVEL", "ERROR")

    result = runner.invoke(cli, ["config", "show"])

    assert result.exit_code == 0, result.output
    assert logging.getLogger().level == logging.ERROR

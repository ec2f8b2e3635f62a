# tests/unit/test_config.py

from pathlib import Path

import pytest

from termtest.config import TermtestConfig, load_config
from termtest.exceptions import ConfigurationError

FULL_CONFIG = """
[global]
log_level = "DEBUG"

[worker]
url = "https://shop.example.com"
prompt = "the store is in test mode"
viewport = "1280x720"

[render]
show_thoughts = true

[dashboard]
model = "gpt-4.1"
spinner_interval = 0.25
"""


@pytest.fixture
def config_file(tmp_path: Path):
    def write(content: str) -> Path:
        path = tmp_path / "termtest.toml"
        path.write_text(content)
        return path

    return write


def test_missing_file_gives_defaults(tmp_path: Path):
    config = load_config(tmp_path / "absent.toml")

    assert config == TermtestConfig()
    assert config.worker.url is None
    assert config.dashboard.test_pattern == "**/*.tt.py"


def test_full_file_is_structured(config_file):
    config = load_config(config_file(FULL_CONFIG))

    assert config.global_config.log_level == "DEBUG"
    assert config.worker.url == "https://shop.example.com"
    assert config.worker.extra == {"viewport": "1280x720"}
    assert config.render.show_thoughts is True
    assert config.render.show_actions is True
    assert config.dashboard.model == "gpt-4.1"
    assert config.dashboard.spinner_interval == 0.25


def test_worker_options_as_declaration_defaults(config_file):
    options = load_config(config_file(FULL_CONFIG)).worker.as_options()

    assert options == {
        "url": "https://shop.example.com",
        "prompt": "the store is in test mode",
        "viewport": "1280x720",
    }


def test_environment_overrides_file(config_file, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TERMTEST_URL", "https://staging.example.com")
    monkeypatch.setenv("TERMTEST_MODEL", "claude-opus-4")

    config = load_config(config_file(FULL_CONFIG))

    assert config.worker.url == "https://staging.example.com"
    assert config.worker.prompt == "the store is in test mode"
    assert config.dashboard.model == "claude-opus-4"


def test_environment_applies_without_a_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TERMTEST_URL", "https://env.example.com")

    assert load_config(tmp_path / "absent.toml").worker.url == "https://env.example.com"


@pytest.mark.parametrize(
    "content",
    [
        "[worker\nurl = 1",
        "[dashboard]\nspinner_interval = -1\n",
        "[global]\nlog_level = \"LOUD\"\n",
        "[render]\nshow_everything = true\n",
    ],
    ids=["bad-toml", "negative-interval", "bad-log-level", "unknown-render-key"],
)
def test_invalid_content_raises_configuration_error(config_file, content):
    path = config_file(content)

    with pytest.raises(ConfigurationError) as exc_info:
        load_config(path)

    assert str(path) in str(exc_info.value)

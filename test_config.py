"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from srt_web_translator.config import (
    TranslatorConfig,
    config_from_environ,
    load_config,
)
from srt_web_translator.errors import ConfigurationError

ENV_NAMES = (
    "LOCAL_SERVER_URL",
    "TRANSLATED_LOCAL_SERVER_URL",
    "GITHUB_PAGES_URL",
    "TRANSLATED_GITHUB_PAGES_URL",
    "SRT_TRANSLATE_DEPLOYMENT",
    "SRT_TRANSLATE_PORT",
    "SRT_TRANSLATE_MAX_WAIT",
    "SRT_TRANSLATE_HEADLESS",
    "SRT_TRANSLATE_SITE_DIR",
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in ENV_NAMES:
        # setenv first so teardown also removes values loaded from .env files
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


def test_defaults() -> None:
    config = config_from_environ({})

    assert config == TranslatorConfig()
    assert config.local_serving_url == ""
    assert config.deployment == "local"
    assert config.port == 3333
    assert config.poll_interval == 5.0
    assert config.site_path == Path("dist")


def test_urls_and_overrides_from_environment() -> None:
    config = config_from_environ({
        "LOCAL_SERVER_URL": "http://127.0.0.1:3333",
        "TRANSLATED_GITHUB_PAGES_URL": "https://mirror.test/",
        "SRT_TRANSLATE_DEPLOYMENT": "remote",
        "SRT_TRANSLATE_PORT": "4000",
        "SRT_TRANSLATE_MAX_WAIT": "12.5",
        "SRT_TRANSLATE_HEADLESS": "no",
        "SRT_TRANSLATE_SITE_DIR": "site",
    })

    assert config.local_serving_url == "http://127.0.0.1:3333"
    assert config.translated_remote_url == "https://mirror.test/"
    assert config.deployment == "remote"
    assert config.port == 4000
    assert config.max_wait == 12.5
    assert config.headless is False
    assert config.site_path == Path("site")


def test_invalid_number_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="SRT_TRANSLATE_PORT"):
        config_from_environ({"SRT_TRANSLATE_PORT": "many"})


def test_unknown_deployment_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        TranslatorConfig(deployment="ftp")


def test_max_wait_must_be_positive() -> None:
    with pytest.raises(ConfigurationError):
        TranslatorConfig(max_wait=0)


def test_with_overrides_ignores_none() -> None:
    config = TranslatorConfig(port=4000).with_overrides(port=None, deployment="remote")

    assert config.port == 4000
    assert config.deployment == "remote"


def test_load_config_reads_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text("TRANSLATED_LOCAL_SERVER_URL=https://mirror.test/local\n", encoding="utf-8")

    config = load_config(env_file)

    assert config.translated_local_url == "https://mirror.test/local"


def test_load_config_does_not_override_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("SRT_TRANSLATE_PORT=5000\n", encoding="utf-8")
    monkeypatch.setenv("SRT_TRANSLATE_PORT", "6000")

    assert load_config().port == 6000


def test_load_config_falls_back_to_user_config_dir(tmp_path: Path) -> None:
    user_dir = tmp_path / "xdg" / "srt-web-translator"
    user_dir.mkdir(parents=True)
    (user_dir / ".env").write_text("GITHUB_PAGES_URL=https://user.github.io/subs\n", encoding="utf-8")

    assert load_config().remote_hosted_url == "https://user.github.io/subs"


def test_missing_explicit_env_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "nope.env")

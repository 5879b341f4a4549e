from __future__ import annotations

import pytest

from sales_client_sdk.config import ConfigError, load_config

ENV_KEYS = (
    "SALES_APP_ENV",
    "SALES_API_HOST",
    "SALES_API_PORT",
    "SALES_TIMEOUT_SECONDS",
    "SALES_CONNECT_TIMEOUT_SECONDS",
    "SALES_READ_TIMEOUT_SECONDS",
    "SALES_MAX_CONNECTIONS",
    "SALES_DATA_DIR",
    "SALES_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # setenv first so teardown also reverts values written by load_dotenv
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_defaults() -> None:
    cfg = load_config()
    assert cfg.default_host == "127.0.0.1"
    assert cfg.default_port == "8080"
    assert cfg.timeout == (5.0, 10.0)
    assert cfg.max_connections == 10
    assert cfg.data_dir is None
    assert cfg.log_level == "INFO"


def test_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("SALES_APP_ENV", " Staging ")
    monkeypatch.setenv("SALES_API_HOST", "10.0.2.2")
    monkeypatch.setenv("SALES_API_PORT", "9000")
    monkeypatch.setenv("SALES_TIMEOUT_SECONDS", "3")
    monkeypatch.setenv("SALES_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SALES_LOG_LEVEL", "debug")
    cfg = load_config()
    assert cfg.normalized_env == "staging"
    assert (cfg.default_host, cfg.default_port) == ("10.0.2.2", "9000")
    assert cfg.timeout == (3.0, 3.0)
    assert cfg.data_dir == str(tmp_path)
    assert cfg.log_level == "DEBUG"


def test_env_file(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("SALES_API_PORT=8181\n")
    assert load_config(str(env_file)).default_port == "8181"


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("SALES_API_HOST", "example.com"),
        ("SALES_API_PORT", "0"),
        ("SALES_TIMEOUT_SECONDS", "0"),
        ("SALES_CONNECT_TIMEOUT_SECONDS", "-1"),
        ("SALES_READ_TIMEOUT_SECONDS", "abc"),
        ("SALES_MAX_CONNECTIONS", "0"),
        ("SALES_MAX_CONNECTIONS", "many"),
        ("SALES_LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values_name_the_variable(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)
    with pytest.raises(ConfigError, match=key):
        load_config()

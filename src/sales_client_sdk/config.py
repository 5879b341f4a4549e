from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .endpoint import DEFAULT_HOST, DEFAULT_PORT, is_valid_ip_address, is_valid_port


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str = "dev"
    default_host: str = DEFAULT_HOST
    default_port: str = DEFAULT_PORT
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 10.0
    max_connections: int = 10
    data_dir: str | None = None
    log_level: str = "INFO"

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()

    @property
    def timeout(self) -> tuple[float, float]:
        return (self.connect_timeout_seconds, self.read_timeout_seconds)


def _env(name: str, default: str) -> str:
    return (os.getenv(name) or default).strip()


def _positive_seconds(name: str, default: float) -> float:
    raw = _env(name, str(default))
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"Invalid {name}: expected > 0, got {value}")
    return value


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    default_host = _env("SALES_API_HOST", DEFAULT_HOST)
    if not is_valid_ip_address(default_host):
        raise ConfigError(f"Invalid SALES_API_HOST: expected dotted quad or localhost, got {default_host!r}")
    default_port = _env("SALES_API_PORT", DEFAULT_PORT)
    if not is_valid_port(default_port):
        raise ConfigError(f"Invalid SALES_API_PORT: expected 1-65535, got {default_port!r}")

    # connect defaults to at most 5s, read to at least the connect timeout
    overall = _positive_seconds("SALES_TIMEOUT_SECONDS", 10.0)
    connect = _positive_seconds("SALES_CONNECT_TIMEOUT_SECONDS", min(overall, 5.0))
    read = _positive_seconds("SALES_READ_TIMEOUT_SECONDS", max(overall, connect))

    raw_connections = _env("SALES_MAX_CONNECTIONS", "10")
    if not raw_connections.isdigit() or int(raw_connections) < 1:
        raise ConfigError(f"Invalid SALES_MAX_CONNECTIONS: expected an integer >= 1, got {raw_connections!r}")

    log_level = _env("SALES_LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"Invalid SALES_LOG_LEVEL: unknown level {log_level!r}")

    return ClientConfig(
        env_name=_env("SALES_APP_ENV", "dev"),
        default_host=default_host,
        default_port=default_port,
        connect_timeout_seconds=connect,
        read_timeout_seconds=read,
        max_connections=int(raw_connections),
        data_dir=os.getenv("SALES_DATA_DIR", "").strip() or None,
        log_level=log_level,
    )

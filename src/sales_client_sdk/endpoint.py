from __future__ import annotations

import logging
import re
import socket
from dataclasses import dataclass

from .exceptions import LocalValidationError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = "8080"

_OCTET = r"(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
_IP_PATTERN = re.compile(rf"^({_OCTET}\.){{3}}{_OCTET}$")

PRESETS: dict[str, tuple[str, str]] = {
    "localhost": ("127.0.0.1", "8080"),
    "network": ("192.168.1.1", "8080"),
    "android-emulator": ("10.0.2.2", "8080"),
}


def is_valid_ip_address(value: str) -> bool:
    return bool(_IP_PATTERN.match(value)) or value == "localhost"


def is_valid_port(value: str) -> bool:
    try:
        port = int(value)
    except (TypeError, ValueError):
        return False
    return 0 < port <= 65535


@dataclass(frozen=True)
class ServerEndpoint:
    host: str = DEFAULT_HOST
    port: str = DEFAULT_PORT

    @classmethod
    def validated(cls, host: str, port: str | int) -> "ServerEndpoint":
        host = (host or "").strip()
        port = str(port).strip()
        if not is_valid_ip_address(host):
            raise LocalValidationError("Invalid IP address format", field="host")
        if not is_valid_port(port):
            raise LocalValidationError("Invalid port number (1-65535)", field="port")
        return cls(host=host, port=port)

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


def check_connection(host: str, port: int, timeout_seconds: float = 5) -> bool:
    """Return True when a TCP connection to host:port can be opened."""
    try:
        with socket.create_connection((host, int(port)), timeout=timeout_seconds):
            return True
    except (OSError, ValueError) as exc:
        logger.info("connection_test_failed", extra={"host": host, "port": port, "reason": str(exc)})
        return False

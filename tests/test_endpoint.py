from __future__ import annotations

import socket

import pytest

from sales_client_sdk.endpoint import PRESETS, ServerEndpoint, check_connection, is_valid_ip_address, is_valid_port
from sales_client_sdk.exceptions import LocalValidationError


@pytest.mark.parametrize("host", ["127.0.0.1", "10.0.2.2", "255.255.255.255", "localhost"])
def test_valid_hosts(host) -> None:
    assert is_valid_ip_address(host)


@pytest.mark.parametrize("host", ["256.1.1.1", "1.2.3", "example.com", "", "LOCALHOST", "1.2.3.4.5"])
def test_invalid_hosts(host) -> None:
    assert not is_valid_ip_address(host)


@pytest.mark.parametrize(("port", "valid"), [("1", True), ("65535", True), ("0", False), ("65536", False), ("http", False)])
def test_port_range(port, valid) -> None:
    assert is_valid_port(port) is valid


def test_validated_endpoint_errors_name_the_field() -> None:
    with pytest.raises(LocalValidationError, match="Invalid IP address format") as excinfo:
        ServerEndpoint.validated("999.0.0.1", "8080")
    assert excinfo.value.field == "host"
    with pytest.raises(LocalValidationError, match=r"Invalid port number \(1-65535\)") as excinfo:
        ServerEndpoint.validated("127.0.0.1", "70000")
    assert excinfo.value.field == "port"


def test_presets_are_valid() -> None:
    for host, port in PRESETS.values():
        assert ServerEndpoint.validated(host, port).base_url == f"http://{host}:{port}"


def test_check_connection_reports_reachability() -> None:
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]
    try:
        assert check_connection("127.0.0.1", port, timeout_seconds=1)
    finally:
        listener.close()
    assert not check_connection("127.0.0.1", port, timeout_seconds=1)

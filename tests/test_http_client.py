from __future__ import annotations

import json
from datetime import datetime

import pytest
import requests
import responses

from sales_client_sdk.exceptions import NetworkFailure
from sales_client_sdk.http_client import ApiResponse, build_query, parse_error

from .conftest import BASE_URL


def test_build_query_skips_empty_values() -> None:
    assert build_query("/v1/products", {"name": "", "min_price": None}) == "/v1/products"
    assert build_query("/v1/products", None) == "/v1/products"


def test_build_query_encodes_values() -> None:
    query = build_query(
        "/v1/sales",
        {"min_date": datetime(2024, 1, 2, 3, 4, 5), "is_active": True, "name": "a b&c", "page": 2},
    )
    assert query == "/v1/sales?min_date=2024-01-02T03%3A04%3A05&is_active=true&name=a%20b%26c&page=2"


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ({"error": {"email": "must be provided", "password": "too short"}}, "must be provided"),
        ({"error": "invalid authentication credentials"}, "invalid authentication credentials"),
        ({"message": "the server encountered a problem"}, "the server encountered a problem"),
        ({"error": 12}, "Unknown error occurred + response code: 500"),
        ([1, 2], "Unknown error occurred + response code: 500"),
    ],
)
def test_parse_error_shapes(body, expected) -> None:
    assert parse_error(ApiResponse(status_code=500, text=json.dumps(body))) == expected


def test_parse_error_never_raises_on_non_json() -> None:
    assert parse_error(ApiResponse(status_code=502, text="<html>")) == "Unknown error occurred + response code: 502"
    assert parse_error(ApiResponse(status_code=404)) == "Unknown error occurred + response code: 404"


@responses.activate
def test_auth_header_only_when_requested_and_token_present(http, store) -> None:
    responses.add(responses.GET, f"{BASE_URL}/v1/products", json={}, status=200)

    http.get("/v1/products", include_auth=True)
    store.set_token("tok-1")
    http.get("/v1/products", include_auth=True)
    http.get("/v1/products")

    first, second, third = (call.request.headers for call in responses.calls)
    assert "Authorization" not in first
    assert second["Authorization"] == "Bearer tok-1"
    assert "Authorization" not in third
    assert all(headers["Content-Type"] == "application/json" for headers in (first, second, third))


@responses.activate
def test_request_body_is_json(http) -> None:
    responses.add(responses.POST, f"{BASE_URL}/v1/users", json={}, status=201)
    response = http.post("/v1/users", {"email": "a@b.c"})
    assert response.status_code == 201
    assert json.loads(responses.calls[0].request.body) == {"email": "a@b.c"}


@responses.activate
def test_base_url_read_per_request(http, store) -> None:
    responses.add(responses.GET, "http://10.0.2.2:9000/v1/products", json={}, status=200)
    store.set_host("10.0.2.2")
    store.set_port("9000")
    http.get("/v1/products")
    assert responses.calls[0].request.url == "http://10.0.2.2:9000/v1/products"


@responses.activate
def test_transport_error_maps_to_network_failure(http) -> None:
    responses.add(responses.GET, f"{BASE_URL}/v1/products", body=requests.ConnectionError("refused"))
    with pytest.raises(NetworkFailure) as excinfo:
        http.get("/v1/products")
    assert excinfo.value.status_code == 0
    assert excinfo.value.code == "TRANSPORT_ERROR"
    assert BASE_URL in str(excinfo.value)


@responses.activate
def test_non_2xx_is_returned_not_raised(http) -> None:
    responses.add(responses.GET, f"{BASE_URL}/v1/products", json={"error": "boom"}, status=500)
    response = http.get("/v1/products")
    assert not response.ok
    assert parse_error(response) == "boom"

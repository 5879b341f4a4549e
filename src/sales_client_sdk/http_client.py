from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter

from .auth_store import AuthStore
from .config import ClientConfig
from .exceptions import NetworkFailure

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class ApiResponse:
    status_code: int
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.text)


def _format_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def build_query(path: str, params: Mapping[str, Any] | None) -> str:
    """Append a percent-encoded query string to ``path``, skipping empty values."""
    pairs = [
        f"{key}={quote(_format_query_value(value), safe='')}"
        for key, value in (params or {}).items()
        if value is not None and value != ""
    ]
    if not pairs:
        return path
    return f"{path}?{'&'.join(pairs)}"


def parse_error(response: ApiResponse) -> str:
    """Reduce an error body to a single human-readable message. Never raises."""
    fallback = f"Unknown error occurred + response code: {response.status_code}"
    try:
        payload = response.json()
    except (ValueError, TypeError):
        return fallback
    if not isinstance(payload, dict):
        return fallback
    error = payload.get("error")
    if isinstance(error, dict):
        # first key in whatever order the server delivered them
        for value in error.values():
            return str(value)
    elif isinstance(error, str):
        return error
    message = payload.get("message")
    if isinstance(message, str):
        return message
    return fallback


@dataclass
class HttpClient:
    config: ClientConfig
    store: AuthStore
    session: requests.Session | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        return f"{self.store.base_url()}{path}"

    def _headers(self, include_auth: bool) -> dict[str, str]:
        headers = {"Content-Type": JSON_CONTENT_TYPE}
        if include_auth:
            token = self.store.get_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        json_body: Mapping[str, Any] | None = None,
        include_auth: bool = False,
    ) -> ApiResponse:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        normalized_method = method.upper()
        url = self._build_url(path)
        data = json.dumps(dict(json_body)) if json_body is not None else None
        logger.debug("http_request", extra={"method": normalized_method, "path": path})
        try:
            response = self.session.request(
                method=normalized_method,
                url=url,
                headers=self._headers(include_auth),
                data=data,
                timeout=self.config.timeout,
            )
        except requests.RequestException as exc:
            logger.warning(
                "http_transport_error",
                extra={"method": normalized_method, "path": path, "error_type": type(exc).__name__},
            )
            raise NetworkFailure(
                message=f"Unable to reach server at {self.store.base_url()}: {exc}",
                status_code=0,
                code="TRANSPORT_ERROR",
                details={"type": type(exc).__name__},
            ) from exc
        logger.debug(
            "http_response",
            extra={"method": normalized_method, "path": path, "status_code": response.status_code},
        )
        return ApiResponse(status_code=response.status_code, text=response.text)

    def get(self, path: str, *, include_auth: bool = False) -> ApiResponse:
        return self.request("GET", path, include_auth=include_auth)

    def post(self, path: str, body: Mapping[str, Any], *, include_auth: bool = False) -> ApiResponse:
        return self.request("POST", path, json_body=body, include_auth=include_auth)

    def put(self, path: str, body: Mapping[str, Any], *, include_auth: bool = False) -> ApiResponse:
        return self.request("PUT", path, json_body=body, include_auth=include_auth)

    def delete(self, path: str, *, include_auth: bool = False) -> ApiResponse:
        return self.request("DELETE", path, include_auth=include_auth)

from __future__ import annotations

from .exceptions import (
    ApiError,
    AuthenticationRequired,
    NotFound,
    PermissionDenied,
    ServerError,
    ValidationFailed,
)

_CODES = {
    401: "UNAUTHORIZED",
    403: "PERMISSION_DENIED",
    404: "NOT_FOUND",
    422: "VALIDATION_ERROR",
}


def map_error(status_code: int, message: str, payload: object | None = None) -> ApiError:
    mapped: type[ApiError]
    if status_code == 401:
        mapped = AuthenticationRequired
    elif status_code == 403:
        mapped = PermissionDenied
    elif status_code == 404:
        mapped = NotFound
    elif status_code == 422:
        mapped = ValidationFailed
    else:
        mapped = ServerError
    code = _CODES.get(status_code, "SERVER_ERROR")
    return mapped(
        message=message,
        status_code=status_code,
        code=code,
        raw_payload=payload,
    )

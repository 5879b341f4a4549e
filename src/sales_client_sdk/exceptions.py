from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    message: str
    status_code: int = 0
    code: str = "HTTP_ERROR"
    details: object | None = None
    raw_payload: object | None = None

    def __str__(self) -> str:
        return self.message


class NetworkFailure(ApiError):
    """Transport failure before an HTTP response was returned."""


TransportError = NetworkFailure


class AuthenticationRequired(ApiError):
    """401 on an authenticated call, or no usable session."""


class PermissionDenied(ApiError):
    pass


class NotFound(ApiError):
    pass


class ValidationFailed(ApiError):
    pass


class ServerError(ApiError):
    pass


class ActivationRequired(ApiError):
    """Login rejected because the account has not been activated yet."""


class LocalValidationError(ValueError):
    """Client-side input check failure; never reaches the network."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

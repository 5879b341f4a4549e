from __future__ import annotations

from typing import NamedTuple

from .exceptions import ApiError, LocalValidationError


class UserFacingError(NamedTuple):
    """Message shown to the user as-is, plus optional detail for a disclosure panel."""

    message: str
    details: str | None = None


def to_user_facing_error(exc: Exception) -> UserFacingError:
    if isinstance(exc, LocalValidationError):
        return UserFacingError(exc.message, exc.field)
    if not isinstance(exc, ApiError):
        return UserFacingError(str(exc) or "Unexpected client error")
    # server text is kept verbatim; only an empty message gets a placeholder
    details = f"{exc.code} (HTTP {exc.status_code})"
    if exc.details:
        details += f": {exc.details}"
    return UserFacingError(exc.message.strip() or "Request failed", details)

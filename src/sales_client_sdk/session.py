from __future__ import annotations

import logging
from enum import Enum

from .auth_store import AuthStore
from .error_mapper import map_error
from .exceptions import (
    ActivationRequired,
    ApiError,
    AuthenticationRequired,
    LocalValidationError,
    ServerError,
)
from .http_client import ApiResponse, HttpClient, parse_error
from .models import LoginResult, User

logger = logging.getLogger(__name__)

TOKENS_PATH = "/v1/tokens/authentication"
PROFILE_PATH = "/v1/users/profile"
USERS_PATH = "/v1/users"
ACTIVATE_PATH = "/v1/users/activate"

AUTHENTICATION_REQUIRED_MESSAGE = "Authentication required. Please login again."
_ACTIVATION_MARKERS = ("account must be activated", "activation")


class SessionState(str, Enum):
    LOGGED_OUT = "logged_out"
    AUTHENTICATING = "authenticating"
    LOGGED_IN = "logged_in"
    INVALID = "invalid"


def requires_activation(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in _ACTIVATION_MARKERS)


def _require(value: str, field: str, label: str) -> str:
    if not value or not value.strip():
        raise LocalValidationError(f"{label} is required", field=field)
    return value.strip()


class SessionManager:
    """Owns the bearer token lifecycle and the cached user id/role.

    The token is the only source of truth for an active session; the cached
    id and role are copies of the profile and are rewritten on every login or
    refresh. Token validity is learned only by calling the server.
    """

    def __init__(self, http: HttpClient, store: AuthStore) -> None:
        self.http = http
        self.store = store
        self.state = SessionState.LOGGED_IN if store.get_token() else SessionState.LOGGED_OUT

    @property
    def token(self) -> str | None:
        return self.store.get_token()

    def current_role(self) -> str | None:
        return self.store.get_role()

    def current_user_id(self) -> int | None:
        return self.store.get_user_id()

    def login(self, email: str, password: str) -> LoginResult:
        email = _require(email, "email", "Email")
        if not password:
            raise LocalValidationError("Password is required", field="password")
        logger.info("login_attempt", extra={"email": email})
        self.state = SessionState.AUTHENTICATING
        try:
            response = self.http.post(TOKENS_PATH, {"email": email, "password": password})
            if response.status_code != 201:
                raise self._login_error(response)
            token = self._extract_token(response)
            # persisted before the profile fetch so that call can authenticate
            self.store.set_token(token)
            user = self.get_current_user()
            self._cache_user(user)
        except ApiError as exc:
            logger.warning(
                "login_failure",
                extra={"email": email, "status_code": exc.status_code, "reason": exc.message},
            )
            self.store.clear_session()
            self.state = SessionState.LOGGED_OUT
            raise
        except Exception:
            logger.exception("login_failure", extra={"email": email})
            self.store.clear_session()
            self.state = SessionState.LOGGED_OUT
            raise
        self.state = SessionState.LOGGED_IN
        logger.info("login_success", extra={"user_id": user.id, "role": user.role})
        return LoginResult(token=token, user=user)

    def get_current_user(self) -> User:
        logger.info("profile_fetch_attempt")
        response = self.http.get(PROFILE_PATH, include_auth=True)
        if response.status_code == 200:
            user = self._parse_user(response)
            logger.info("profile_fetch_success", extra={"user_id": user.id})
            return user
        if response.status_code == 401:
            self.store.clear_session()
            self.state = SessionState.INVALID
            logger.warning("profile_fetch_unauthorized", extra={"reason": parse_error(response)})
            raise AuthenticationRequired(
                message=AUTHENTICATION_REQUIRED_MESSAGE,
                status_code=401,
                code="UNAUTHORIZED",
            )
        message = parse_error(response)
        logger.error("profile_fetch_failure", extra={"status_code": response.status_code, "reason": message})
        raise map_error(response.status_code, message)

    def is_logged_in(self) -> bool:
        if not self.store.get_token():
            logger.debug("session_check_no_token")
            return False
        try:
            self.get_current_user()
        except Exception as exc:
            logger.debug("session_check_failed", extra={"reason": str(exc)})
            return False
        return True

    def logout(self) -> None:
        logger.info("logout")
        try:
            response = self.http.delete(TOKENS_PATH, include_auth=True)
        except Exception as exc:
            logger.warning("logout_request_failed", extra={"reason": str(exc)})
        else:
            if response.status_code == 401:
                logger.warning("logout_token_already_invalid")
            elif not response.ok:
                logger.warning(
                    "logout_rejected",
                    extra={"status_code": response.status_code, "reason": parse_error(response)},
                )
        self.store.clear_session()
        self.state = SessionState.LOGGED_OUT
        logger.info("session_cleared")

    def register(self, email: str, password: str, first_name: str, last_name: str) -> None:
        payload = {
            "email": _require(email, "email", "Email"),
            "password": password,
            "first_name": _require(first_name, "first_name", "First name"),
            "last_name": _require(last_name, "last_name", "Last name"),
        }
        if not password:
            raise LocalValidationError("Password is required", field="password")
        logger.info("register_attempt", extra={"email": payload["email"]})
        response = self.http.post(USERS_PATH, payload)
        if response.status_code != 201:
            message = parse_error(response)
            logger.warning("register_failure", extra={"status_code": response.status_code, "reason": message})
            raise map_error(response.status_code, message)
        logger.info("register_success", extra={"email": payload["email"]})

    def activate(self, token: str) -> None:
        token = _require(token, "token", "Activation token")
        logger.info("activation_attempt")
        response = self.http.put(ACTIVATE_PATH, {"token": token})
        if response.status_code != 200:
            message = parse_error(response)
            logger.warning("activation_failure", extra={"status_code": response.status_code, "reason": message})
            raise map_error(response.status_code, message)
        logger.info("activation_success")

    def refresh_user_data(self) -> User:
        logger.info("refresh_user_data")
        user = self.get_current_user()
        self._cache_user(user)
        return user

    def _cache_user(self, user: User) -> None:
        self.store.set_user_id(user.id)
        self.store.set_role(user.role)

    @staticmethod
    def _login_error(response: ApiResponse) -> ApiError:
        message = parse_error(response)
        if requires_activation(message):
            return ActivationRequired(
                message=message,
                status_code=response.status_code,
                code="ACCOUNT_NOT_ACTIVATED",
            )
        return map_error(response.status_code, message)

    @staticmethod
    def _extract_token(response: ApiResponse) -> str:
        try:
            payload = response.json()
        except ValueError as exc:
            raise ServerError(message="Invalid login response from server", status_code=response.status_code) from exc
        token = payload.get("authentication_token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise ServerError(message="Login response did not include a token", status_code=response.status_code)
        return token

    @staticmethod
    def _parse_user(response: ApiResponse) -> User:
        try:
            payload = response.json()
            return User.from_wire(payload["user"])
        except (ValueError, KeyError, TypeError) as exc:
            raise ServerError(
                message="Invalid profile response from server",
                status_code=response.status_code,
            ) from exc

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir

from .endpoint import DEFAULT_HOST, DEFAULT_PORT, ServerEndpoint

logger = logging.getLogger(__name__)

KEY_HOST = "api_ip_address"
KEY_PORT = "api_port"
KEY_TOKEN = "auth_token"
KEY_USER_ID = "user_id"
KEY_ROLE = "user_role"

SESSION_KEYS = (KEY_TOKEN, KEY_USER_ID, KEY_ROLE)


@dataclass
class AuthStore:
    """Key/value preferences file holding the server endpoint and the cached session.

    Writes are independent per key: a crash between ``set_token`` and
    ``set_role`` leaves a token without a cached role, which callers must
    tolerate (the role is re-derivable from the token via a profile fetch).
    """

    app_name: str = "sales_app"
    filename: str = "preferences.json"
    base_dir: str | Path | None = None
    default_host: str = DEFAULT_HOST
    default_port: str = DEFAULT_PORT

    def _path(self) -> Path:
        base = Path(self.base_dir) if self.base_dir else Path(user_data_dir(self.app_name, "SalesApp"))
        base.mkdir(parents=True, exist_ok=True)
        return base / self.filename

    def _read(self) -> dict[str, Any]:
        path = self._path()
        if not path.exists():
            return {}
        try:
            data = json.loads(path.read_text())
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("preferences_corrupt", extra={"path": str(path)})
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        path = self._path()
        path.write_text(json.dumps(data, indent=2))
        try:
            path.chmod(0o600)
        except OSError:
            pass

    def get(self, key: str) -> Any:
        return self._read().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, *keys: str) -> None:
        data = self._read()
        if not any(key in data for key in keys):
            return
        for key in keys:
            data.pop(key, None)
        self._write(data)

    def get_host(self) -> str:
        return self.get(KEY_HOST) or self.default_host

    def set_host(self, host: str) -> None:
        self.set(KEY_HOST, host)

    def get_port(self) -> str:
        return self.get(KEY_PORT) or self.default_port

    def set_port(self, port: str) -> None:
        self.set(KEY_PORT, str(port))

    def get_endpoint(self) -> ServerEndpoint:
        return ServerEndpoint(host=self.get_host(), port=self.get_port())

    def set_endpoint(self, endpoint: ServerEndpoint) -> None:
        # The cached session is left alone; a token issued by the previous
        # server keeps being sent to the new one.
        self.set_host(endpoint.host)
        self.set_port(endpoint.port)

    def base_url(self) -> str:
        return self.get_endpoint().base_url

    def get_token(self) -> str | None:
        return self.get(KEY_TOKEN)

    def set_token(self, token: str) -> None:
        self.set(KEY_TOKEN, token)

    def get_user_id(self) -> int | None:
        value = self.get(KEY_USER_ID)
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    def set_user_id(self, user_id: int) -> None:
        self.set(KEY_USER_ID, int(user_id))

    def get_role(self) -> str | None:
        return self.get(KEY_ROLE)

    def set_role(self, role: str) -> None:
        self.set(KEY_ROLE, role)

    def clear_session(self) -> None:
        self.remove(*SESSION_KEYS)

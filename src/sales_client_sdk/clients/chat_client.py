from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError

from ..error_mapper import map_error
from ..exceptions import LocalValidationError, PermissionDenied, ServerError
from ..http_client import parse_error
from ..models import ChatResponse
from .base import BaseClient

logger = logging.getLogger(__name__)

CHATBOT_PATH = "/v1/chatbot"


class ChatClient(BaseClient):
    """Forwards free text to the server-side assistant and returns its reply as-is."""

    def send_message(self, message: str) -> ChatResponse:
        text = (message or "").strip()
        if not text:
            raise LocalValidationError("Message cannot be empty", field="message")
        logger.info("chatbot_message", extra={"length": len(text)})
        response = self._request("POST", CHATBOT_PATH, {"message": text})
        if response.status_code == 200:
            payload = self._payload(response)
            try:
                return ChatResponse.model_validate(payload.get("chatbot") or {})
            except PydanticValidationError as exc:
                raise ServerError(message=f"Invalid chatbot response: {exc}", status_code=200) from exc
        reason = parse_error(response)
        logger.warning("chatbot_failure", extra={"status_code": response.status_code, "reason": reason})
        if response.status_code == 403:
            raise PermissionDenied(
                message="You do not have permission to use the chatbot",
                status_code=403,
                code="PERMISSION_DENIED",
                details=reason,
            )
        raise map_error(response.status_code, reason)

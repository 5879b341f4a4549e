from __future__ import annotations

import json

import pytest
import responses

from sales_client_sdk.clients import ChatClient
from sales_client_sdk.exceptions import LocalValidationError, PermissionDenied, ServerError, ValidationFailed

from .conftest import BASE_URL

CHAT_URL = f"{BASE_URL}/v1/chatbot"


@responses.activate
def test_send_message_returns_reply(http, logged_in) -> None:
    responses.add(
        responses.POST,
        CHAT_URL,
        json={
            "chatbot": {
                "response": "You sold 12 items today.",
                "data": {"total": 12},
                "timestamp": "2024-05-01T10:00:00Z",
                "type": "data",
            }
        },
        status=200,
    )

    reply = ChatClient(http=http).send_message("  how many sales today?  ")

    assert reply.response == "You sold 12 items today."
    assert reply.type == "data"
    assert reply.data == {"total": 12}
    assert json.loads(responses.calls[0].request.body) == {"message": "how many sales today?"}
    assert responses.calls[0].request.headers["Authorization"] == "Bearer tok-123"


@responses.activate
def test_reply_defaults(http, logged_in) -> None:
    responses.add(responses.POST, CHAT_URL, json={"chatbot": {"response": "hi"}}, status=200)
    reply = ChatClient(http=http).send_message("hello")
    assert reply.type == "text"
    assert reply.data is None


@pytest.mark.parametrize("text", ["", "   ", None])
@responses.activate
def test_blank_message_is_rejected_locally(http, logged_in, text) -> None:
    with pytest.raises(LocalValidationError):
        ChatClient(http=http).send_message(text)
    assert len(responses.calls) == 0


@pytest.mark.parametrize(
    ("status", "error", "message"),
    [
        (403, PermissionDenied, "You do not have permission to use the chatbot"),
        (422, ValidationFailed, "must not be more than 500 bytes long"),
        (500, ServerError, "must not be more than 500 bytes long"),
    ],
)
@responses.activate
def test_chat_error_mapping(http, logged_in, status, error, message) -> None:
    responses.add(
        responses.POST,
        CHAT_URL,
        json={"error": {"message": "must not be more than 500 bytes long"}},
        status=status,
    )
    with pytest.raises(error, match=message):
        ChatClient(http=http).send_message("hello")

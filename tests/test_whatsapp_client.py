"""
Tests for the WhatsApp Cloud API client using httpx's mock transport.
"""

from __future__ import annotations

import json

import httpx

from app.domain.entities.reply import ReplyButton
from app.infrastructure.whatsapp.whatsapp_client import WhatsAppClient


def _client(handler):
    return WhatsAppClient(
        access_token="token",
        api_version="v20.0",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_send_text_payload():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"messages": [{"id": "wamid.1"}]})

    assert _client(handler).send_text("pnid_1", "38160111", "Zdravo") is True
    assert captured["url"] == "https://graph.facebook.com/v20.0/pnid_1/messages"
    assert captured["auth"] == "Bearer token"
    assert captured["body"] == {
        "messaging_product": "whatsapp",
        "to": "38160111",
        "type": "text",
        "text": {"body": "Zdravo"},
    }


def test_send_buttons_payload_is_capped():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={})

    buttons = [ReplyButton(id=f"b{i}", title="A very long button title indeed") for i in range(5)]
    assert _client(handler).send_buttons("pnid_1", "38160111", "Izaberite", buttons) is True

    interactive = captured["body"]["interactive"]
    assert interactive["type"] == "button"
    assert interactive["body"] == {"text": "Izaberite"}
    sent = interactive["action"]["buttons"]
    assert [b["reply"]["id"] for b in sent] == ["b0", "b1", "b2"]
    assert all(len(b["reply"]["title"]) <= 20 for b in sent)


def test_provider_error_is_logged_not_raised():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"message": "Invalid parameter", "code": 100}})

    assert _client(handler).send_text("pnid_1", "38160111", "Zdravo") is False


def test_network_error_is_logged_not_raised():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    assert _client(handler).send_text("pnid_1", "38160111", "Zdravo") is False


def test_error_body_that_is_not_an_object_is_logged_not_raised():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json=["oops"])

    client = _client(handler)
    assert client.send_text("pnid_1", "38160111", "Zdravo") is False
    assert client.send_buttons("pnid_1", "38160111", "Izaberite", [ReplyButton(id="b0", title="Da")]) is False

"""
Tests for the webhook HTTP surface.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import app
from app.wiring.dependencies import get_handle_incoming_message_use_case, get_settings
from tests.conftest import ROUTING_KEY


@pytest.fixture
def http(use_case):
    app.dependency_overrides[get_settings] = lambda: Settings(VERIFY_TOKEN="secret")
    app.dependency_overrides[get_handle_incoming_message_use_case] = lambda: use_case
    yield TestClient(app)
    app.dependency_overrides.clear()


def _text_payload(text, sender="38160111"):
    return {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "changes": [
                    {
                        "value": {
                            "metadata": {"phone_number_id": ROUTING_KEY},
                            "messages": [{"from": sender, "id": "wamid.1", "type": "text", "text": {"body": text}}],
                        }
                    }
                ]
            }
        ],
    }


def test_verification_echoes_challenge(http):
    resp = http.get(
        "/webhook",
        params={"hub.mode": "subscribe", "hub.verify_token": "secret", "hub.challenge": "12345"},
    )
    assert resp.status_code == 200
    assert resp.text == "12345"


@pytest.mark.parametrize(
    "params",
    [
        {"hub.mode": "subscribe", "hub.verify_token": "wrong", "hub.challenge": "1"},
        {"hub.mode": "unsubscribe", "hub.verify_token": "secret", "hub.challenge": "1"},
        {"hub.challenge": "1"},
    ],
)
def test_verification_mismatch_is_forbidden(http, params):
    assert http.get("/webhook", params=params).status_code == 403


def test_post_is_acknowledged_and_processed(http, platform):
    resp = http.post("/webhook", json=_text_payload("Zdravo"))
    assert resp.status_code == 200
    assert len(platform.sent) == 1


def test_malformed_body_is_still_acknowledged(http, platform):
    resp = http.post("/webhook", content=b"not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 200
    assert platform.sent == []


def test_unexpected_shape_is_still_acknowledged(http, platform):
    assert http.post("/webhook", json=[1, 2, 3]).status_code == 200
    assert http.post("/webhook", json={"entry": "oops"}).status_code == 200
    assert platform.sent == []


def test_health(http):
    assert http.get("/health").json() == {"status": "ok"}

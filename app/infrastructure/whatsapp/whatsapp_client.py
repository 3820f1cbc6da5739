from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

from app.domain.entities.reply import ReplyButton

MAX_BUTTONS = 3
MAX_BUTTON_TITLE = 20


class WhatsAppClient:
    def __init__(
        self,
        access_token: str,
        base_url: str = "https://graph.facebook.com",
        api_version: str = "v20.0",
        client: httpx.Client | None = None,
    ) -> None:
        self._access_token = access_token
        self._base_url = base_url.rstrip("/")
        self._api_version = api_version
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

    def send_text(self, phone_number_id: str, to: str, text: str) -> bool:
        payload = {
            "messaging_product": "whatsapp",
            "to": to,
            "type": "text",
            "text": {"body": text},
        }
        return self._post(phone_number_id, to, payload)

    def send_buttons(self, phone_number_id: str, to: str, body: str, buttons: Sequence[ReplyButton]) -> bool:
        payload = {
            "messaging_product": "whatsapp",
            "to": to,
            "type": "interactive",
            "interactive": {
                "type": "button",
                "body": {"text": body},
                "action": {
                    "buttons": [
                        {"type": "reply", "reply": {"id": button.id, "title": button.title[:MAX_BUTTON_TITLE]}}
                        for button in buttons[:MAX_BUTTONS]
                    ]
                },
            },
        }
        return self._post(phone_number_id, to, payload)

    def _post(self, phone_number_id: str, to: str, payload: dict[str, Any]) -> bool:
        """POST to the Cloud API. Failures are logged and reported as False, never raised."""
        url = f"{self._base_url}/{self._api_version}/{phone_number_id}/messages"
        headers = {"Authorization": f"Bearer {self._access_token}"}
        try:
            resp = self._client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            self._logger.error(
                "WhatsApp send failed",
                extra={"routing_key": phone_number_id, "sender_id": to, "error": str(e)},
            )
            return False

        if resp.status_code >= 400:
            error_message = resp.text
            error_code = None
            try:
                body = resp.json()
            except ValueError:
                body = None
            error = body.get("error") if isinstance(body, dict) else None
            if isinstance(error, dict):
                error_message = error.get("message", error_message)
                error_code = error.get("code")

            self._logger.error(
                "WhatsApp send failed",
                extra={
                    "routing_key": phone_number_id,
                    "sender_id": to,
                    "status": resp.status_code,
                    "error": f"{error_code}: {error_message}",
                },
            )
            return False
        return True

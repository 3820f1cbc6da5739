#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import time
from typing import Any

import httpx
from httpx import ConnectError


def build_payload(phone_number_id: str, sender: str, text: str | None, choice_id: str | None) -> dict[str, Any]:
    now = int(time.time())
    message: dict[str, Any] = {"from": sender, "id": f"wamid.local_{now}", "timestamp": str(now)}
    if choice_id:
        message["type"] = "interactive"
        message["interactive"] = {"type": "button_reply", "button_reply": {"id": choice_id, "title": choice_id}}
    else:
        message["type"] = "text"
        message["text"] = {"body": text or ""}
    return {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "id": "waba_local",
                "changes": [
                    {
                        "field": "messages",
                        "value": {
                            "messaging_product": "whatsapp",
                            "metadata": {"phone_number_id": phone_number_id},
                            "messages": [message],
                        },
                    }
                ],
            }
        ],
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Send a test WhatsApp webhook POST")
    parser.add_argument("--url", default="http://127.0.0.1:8001/webhook")
    parser.add_argument("--phone-number-id", default="123456789012345")
    parser.add_argument("--sender", default="381601234567")
    parser.add_argument("--text", default="Zdravo")
    parser.add_argument("--choice", default=None, help="Button reply id instead of text, e.g. zakazi_termin")
    args = parser.parse_args()

    payload = build_payload(args.phone_number_id, args.sender, args.text, args.choice)
    body = json.dumps(payload).encode("utf-8")

    try:
        resp = httpx.post(args.url, content=body, headers={"Content-Type": "application/json"}, timeout=10.0)
    except ConnectError:
        print("Connection refused. Is the FastAPI server running?")
        print("Try: uvicorn app.main:app --reload --port 8001")
        return

    print(resp.status_code)
    if resp.text:
        print(resp.text)


if __name__ == "__main__":
    main()

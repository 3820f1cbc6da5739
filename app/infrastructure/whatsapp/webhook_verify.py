from __future__ import annotations

import hmac
import logging
from typing import Mapping


logger = logging.getLogger(__name__)


def verify_get_request(params: Mapping[str, str | None], expected_token: str) -> str | None:
    """Return the challenge to echo, or None if the handshake does not match."""
    mode = params.get("hub.mode")
    token = params.get("hub.verify_token")
    challenge = params.get("hub.challenge")
    if mode != "subscribe" or not token or not expected_token:
        return None
    if not hmac.compare_digest(token.encode("utf-8"), expected_token.encode("utf-8")):
        logger.warning("Webhook verification token mismatch")
        return None
    return challenge or ""

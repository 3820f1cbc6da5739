from __future__ import annotations

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request, Response
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from app.application.dto.webhook_event import WebhookEventDTO
from app.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from app.core.config import Settings
from app.infrastructure.whatsapp.webhook_verify import verify_get_request
from app.wiring.dependencies import get_handle_incoming_message_use_case, get_settings


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/webhook")
def verify_webhook(
    hub_mode: str | None = Query(None, alias="hub.mode"),
    hub_verify_token: str | None = Query(None, alias="hub.verify_token"),
    hub_challenge: str | None = Query(None, alias="hub.challenge"),
    settings: Settings = Depends(get_settings),
):
    challenge = verify_get_request(
        {"hub.mode": hub_mode, "hub.verify_token": hub_verify_token, "hub.challenge": hub_challenge},
        settings.VERIFY_TOKEN,
    )
    if challenge is None:
        raise HTTPException(status_code=403, detail="Verification failed")
    return PlainTextResponse(challenge)


@router.post("/webhook")
async def whatsapp_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    use_case: HandleIncomingMessageUseCase = Depends(get_handle_incoming_message_use_case),
) -> Response:
    # The provider always gets 200; processing happens after the response is sent.
    body = await request.body()
    try:
        payload = json.loads(body.decode("utf-8")) if body else {}
        event = WebhookEventDTO.model_validate(payload)
    except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        logger.info("Webhook payload ignored", extra={"reason": "malformed", "error": str(e)})
        return Response(status_code=200)

    messages = event.extract_messages()
    logger.info("Webhook received", extra={"message_count": len(messages)})
    for message in messages:
        background_tasks.add_task(use_case.handle, message)
    return Response(status_code=200)

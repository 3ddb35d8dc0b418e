"""Forward a link to a Discord channel."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from relay.api.deps import get_message_relay
from relay.errors import ExternalServiceError
from relay.models.common import ErrorResponse
from relay.models.message import SendMessage, SendResult
from relay.responses import normalize
from relay.services.message_relay import MessageRelay

router = APIRouter(prefix="/api", tags=["messages"])


@router.post("/send", responses={"4XX": {"model": ErrorResponse}, "5XX": {"model": ErrorResponse}})
async def send(body: SendMessage, relay: MessageRelay = Depends(get_message_relay)) -> Response:
    try:
        await relay.relay(body.channel_id, body.url)
    except ExternalServiceError as e:
        return normalize(e)
    return normalize(SendResult())

"""Request-scoped dependencies shared by the API routers."""

from __future__ import annotations

from typing import AsyncIterator

import httpx
from fastapi import Depends

from relay.config import SecretProvider, get_secrets
from relay.services.auth_client import AuthClient
from relay.services.message_relay import MessageRelay


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """One outbound client per request, closed when the response is sent."""
    async with httpx.AsyncClient() as client:
        yield client


def get_auth_client(
    secrets: SecretProvider = Depends(get_secrets),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> AuthClient:
    return AuthClient.from_secrets(secrets, http)


def get_message_relay(
    secrets: SecretProvider = Depends(get_secrets),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> MessageRelay:
    return MessageRelay.from_secrets(secrets, http)

"""Discord message relay: post one link into a channel as the bot."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from relay.config import DISCORD_TOKEN, SecretProvider, settings
from relay.errors import ExternalServiceError

logger = logging.getLogger(__name__)


class MessageRelay:
    def __init__(self, bot_token: str, http: httpx.AsyncClient, api_base: str | None = None):
        self.bot_token = bot_token
        self.api_base = (api_base or settings.discord_api_base).rstrip("/")
        self._http = http

    @classmethod
    def from_secrets(cls, secrets: SecretProvider, http: httpx.AsyncClient) -> MessageRelay:
        return cls(bot_token=secrets.get(DISCORD_TOKEN), http=http)

    def message_url(self, channel_id: str) -> str:
        return f"{self.api_base}/channels/{quote(channel_id, safe='')}/messages"

    async def relay(self, channel_id: str, url: str) -> None:
        """Post ``url`` as the message content. Single attempt.

        Raises:
            ExternalServiceError: Discord answered outside 2xx (``status_code``
                mirrors Discord's) or could not be reached (502).
        """
        headers = {
            "Authorization": f"Bot {self.bot_token}",
            "Content-Type": "application/json",
        }
        try:
            resp = await self._http.post(
                self.message_url(channel_id), json={"content": url}, headers=headers
            )
        except httpx.RequestError as e:
            logger.error("Discord request failed: %s", e)
            raise ExternalServiceError(f"Discord request failed: {e}", status_code=502) from e

        if resp.status_code < 200 or resp.status_code >= 300:
            logger.warning("Discord API error: %s (channel=%s)", resp.status_code, channel_id)
            raise ExternalServiceError(
                f"Discord API error: {resp.status_code}", status_code=resp.status_code
            )
        logger.info("Relayed message to channel %s", channel_id)

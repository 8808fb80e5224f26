"""Discord adapter implementing the :class:`~party_bot.adapters.base.Adapter`.

Group notices are delivered as direct messages. The adapter talks to
Discord's HTTP API with :mod:`httpx` so delivery can happen from any task on
the event loop without going through the gateway client.
"""

from __future__ import annotations

from typing import Any

import httpx

from .base import Adapter


class DiscordAdapter(Adapter):
    """Adapter that sends requests directly to the Discord HTTP API."""

    api_base = "https://discord.com/api"

    def __init__(self, token: str, client: httpx.AsyncClient | None = None) -> None:
        """Store authentication ``token`` and optional HTTP ``client``."""
        self.token = token
        self.client = client or httpx.AsyncClient()

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bot {self.token}"}

    # ------------------------------------------------------------------
    async def send_message(self, channel_id: str, content: str) -> None:
        """Send a message to a channel.

        Parameters
        ----------
        channel_id:
            Identifier of the Discord channel.
        content:
            Message body to send.

        """
        url = f"{self.api_base}/channels/{channel_id}/messages"
        payload = {"content": content}
        response = await self.client.post(url, json=payload, headers=self._headers)
        response.raise_for_status()

    async def open_dm_channel(self, user_id: str) -> str:
        """Open (or reuse) the DM channel with a user.

        Returns the identifier of the channel.
        """
        url = f"{self.api_base}/users/@me/channels"
        payload = {"recipient_id": user_id}
        response = await self.client.post(url, json=payload, headers=self._headers)
        response.raise_for_status()
        data: dict[str, Any] = response.json()
        return str(data["id"])

    async def close(self) -> None:
        """Close the underlying :class:`httpx.AsyncClient`."""
        await self.client.aclose()

"""Delivery of queued player notices through a platform adapter."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import httpx

from .adapters.base import Adapter
from .core.models import Notice


class NoticeRelay:
    """Send notices to players as direct messages.

    DM channel ids are cached per recipient. Delivery is best effort: a
    failed request is logged and the notice dropped.
    """

    def __init__(self, adapter: Adapter, log: logging.Logger | None = None) -> None:
        self.adapter = adapter
        self.log = log or logging.getLogger("party.relay")
        self._channels: dict[int, str] = {}

    async def _channel_for(self, recipient_id: int) -> str:
        channel_id = self._channels.get(recipient_id)
        if channel_id is None:
            channel_id = await self.adapter.open_dm_channel(str(recipient_id))
            self._channels[recipient_id] = channel_id
        return channel_id

    async def deliver(self, notices: Iterable[Notice]) -> int:
        """Deliver ``notices`` in order and return how many were sent."""
        sent = 0
        for notice in notices:
            try:
                channel_id = await self._channel_for(notice.recipient_id)
                await self.adapter.send_message(channel_id, notice.text)
            except (httpx.HTTPError, KeyError, ValueError):
                self.log.exception(
                    "Failed to deliver %s notice to %s",
                    notice.category.value,
                    notice.recipient_id,
                )
                continue
            sent += 1
        return sent

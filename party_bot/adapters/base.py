"""Base adapter interface for platform specific implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Adapter(ABC):
    """Abstract adapter for the chat platform players are reached on."""

    @abstractmethod
    async def send_message(self, channel_id: str, content: str) -> None:
        """Send ``content`` to the specified ``channel_id``."""

    @abstractmethod
    async def open_dm_channel(self, user_id: str) -> str:
        """Open a direct message channel with ``user_id`` and return its id."""

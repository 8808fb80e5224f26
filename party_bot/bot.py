"""Discord bot exposing player groups.

Group operations only queue notices on the players involved. A background
loop drains those notices and hands them to the relay, which delivers them
as direct messages.
"""

from __future__ import annotations

from typing import Any

import discord
from discord.ext import commands, tasks

from .data.roster import Roster
from .logging_config import setup_logging
from .relay import NoticeRelay


class PartyBot(commands.Bot):
    """Small ``discord.py`` based bot used for running player groups."""

    relay_task: tasks.Loop | None

    def __init__(
        self,
        roster: Roster,
        relay: NoticeRelay,
        relay_interval: float = 5.0,
        **kwargs: Any,
    ) -> None:
        """Initialize the bot with the minimal intents required."""
        intents = kwargs.pop("intents", None) or discord.Intents.default()
        # Slash commands only; member events are needed for disconnects.
        intents.message_content = False
        intents.members = True
        super().__init__(
            command_prefix=kwargs.pop("command_prefix", "!"),
            intents=intents,
        )
        self.log = setup_logging()
        self.roster = roster
        self.relay = relay
        self.relay_interval = relay_interval
        self.relay_task = None

    async def setup_hook(self) -> None:
        """Start notice delivery and sync slash commands."""
        self.relay_task = tasks.loop(seconds=self.relay_interval, reconnect=True)(
            _flush_notices
        )
        self.relay_task.start(self)

        tree = getattr(self, "tree", None)
        if tree is not None:  # pragma: no cover - exercised in integration
            await tree.sync()

        await super().setup_hook()

    async def on_ready(self) -> None:  # pragma: no cover - requires discord
        """Log a short confirmation once the bot connected successfully."""
        await self.change_presence(activity=discord.Game(name="in a party"))
        self.log.info(
            "Logged in as %s (%s)",
            self.user,
            self.user.id if self.user else "?",
        )

    async def on_member_remove(self, member: Any) -> None:
        """A player leaving the last server shared with the bot leaves their group."""
        left = getattr(member, "guild", None)
        for guild in self.guilds:
            if guild is left:
                continue
            if guild.get_member(member.id) is not None:
                return
        self.roster.disconnect(member.id)
        await _flush_notices(self)

    async def close(self) -> None:  # pragma: no cover - requires discord
        if self.relay_task is not None:
            self.relay_task.cancel()
        await _flush_notices(self)
        await super().close()


async def _flush_notices(bot: PartyBot) -> None:
    """Background task delivering every queued notice."""
    notices = bot.roster.drain_notices()
    if not notices:
        return
    sent = await bot.relay.deliver(notices)
    bot.log.debug("Delivered %d of %d notices", sent, len(notices))


__all__ = [
    "PartyBot",
    "_flush_notices",
]

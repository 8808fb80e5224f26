from __future__ import annotations

import asyncio

from .adapters.discord import DiscordAdapter
from .bot import PartyBot
from .commands.register import register_commands
from .config import load_settings
from .data.roster import Roster
from .logging_config import setup_logging
from .relay import NoticeRelay


def main() -> int:
    log = setup_logging()
    settings = load_settings()
    if not settings.token:
        log.error(
            "DISCORD_BOT_TOKEN is not set. "
            "Export it in your environment before running."
        )
        return 2
    roster = Roster(
        distribution=settings.distribution,
        bonus_percent=settings.bonus_percent,
    )

    async def runner():
        adapter = DiscordAdapter(settings.token)
        bot = PartyBot(
            roster,
            NoticeRelay(adapter),
            relay_interval=settings.relay_interval,
        )
        register_commands(bot, roster)
        try:
            async with bot:
                await bot.start(settings.token)
        except KeyboardInterrupt:
            log.info("Shutting down...")
        finally:
            await adapter.close()
        return 0

    return asyncio.run(runner())


if __name__ == "__main__":
    raise SystemExit(main())

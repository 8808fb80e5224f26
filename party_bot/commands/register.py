"""Registration of slash commands for the bot."""

from __future__ import annotations

from typing import Any

import discord
from discord.ext import commands

from ..core.models import Member, PlayerClass
from ..data.roster import Roster


def _player(roster: Roster, user: Any) -> Member:
    """Register the Discord ``user`` with the roster and return the player."""
    name = getattr(user, "display_name", None) or str(user.id)
    return roster.register(user.id, name)


def register_commands(bot: commands.Bot, roster: Roster) -> None:
    """Register bot commands with optional compatibility shims."""
    tree = bot.tree
    choices = getattr(
        discord.app_commands, "choices", lambda **_kwargs: (lambda func: func)
    )

    @tree.command(name="party_class", description="Choose your combat class")
    @discord.app_commands.describe(player_class="Your class")
    @choices(
        player_class=[
            discord.app_commands.Choice(name=cl.value.title(), value=cl.value)
            for cl in PlayerClass
        ]
    )
    async def party_class(
        interaction: discord.Interaction,
        player_class: discord.app_commands.Choice[str],
    ) -> None:
        member = _player(roster, interaction.user)
        if member.grouped:
            await interaction.response.send_message(
                "Leave your group before changing class.", ephemeral=True
            )
            return
        member.player_class = PlayerClass(player_class.value)
        await interaction.response.send_message(
            f"You are now a {player_class.value}.", ephemeral=True
        )

    @tree.command(name="party_invite", description="Invite a player to your group")
    @discord.app_commands.describe(player="Player to invite")
    async def party_invite(
        interaction: discord.Interaction, player: discord.Member
    ) -> None:
        inviter = _player(roster, interaction.user)
        invitee = _player(roster, player)
        err = roster.invite(inviter.discord_id, invitee.discord_id)
        if err:
            await interaction.response.send_message(err, ephemeral=True)
        else:
            await interaction.response.send_message(
                f"{invitee.name} joined your group.", ephemeral=True
            )

    @tree.command(name="party_leave", description="Leave your group")
    async def party_leave(interaction: discord.Interaction) -> None:
        err = roster.leave(interaction.user.id)
        await interaction.response.send_message(
            err or "You left your group.", ephemeral=True
        )

    @tree.command(name="party_say", description="Talk to your group")
    @discord.app_commands.describe(text="Message for your group")
    async def party_say(interaction: discord.Interaction, text: str) -> None:
        err = roster.say(interaction.user.id, text)
        await interaction.response.send_message(err or "Sent.", ephemeral=True)

    @tree.command(name="party_info", description="Show your group")
    async def party_info(interaction: discord.Interaction) -> None:
        member = roster.get(interaction.user.id)
        group = member.group if member else None
        if group is None:
            await interaction.response.send_message(
                "You are not in a group. Use `/party_invite`.", ephemeral=True
            )
            return
        embed = discord.Embed(
            title="Your Group",
            description=f"Members: {len(group)}",
        )
        for m in group.members:
            embed.add_field(
                name=m.name,
                value=f"Class: {m.player_class.value}\nExperience: {m.experience}",
                inline=False,
            )
        if group.contains_all_classes():
            embed.set_footer(text="Every class is present: experience bonus active.")
        await interaction.response.send_message(embed=embed, ephemeral=True)

    @tree.command(
        name="party_award",
        description="Award experience to a player and their group (server manager)",
    )
    @discord.app_commands.describe(player="Reward source", amount="Experience")
    async def party_award(
        interaction: discord.Interaction, player: discord.Member, amount: int
    ) -> None:
        if not interaction.user.guild_permissions.manage_guild:
            await interaction.response.send_message(
                "Only a server manager can award experience.", ephemeral=True
            )
            return
        source = _player(roster, player)
        err = roster.award(source.discord_id, amount)
        await interaction.response.send_message(
            err or f"Awarded {amount} experience via {source.name}.", ephemeral=True
        )

"""In-memory registry of connected players and their groups."""

from __future__ import annotations

import logging

from ..core.distribution import DistributionPolicy, policy_for
from ..core.group import Group
from ..core.models import Member, Notice, PlayerClass


class Roster:
    """Tracks connected players and runs the group workflows for them.

    Operations return ``None`` on success or a message explaining why the
    request was refused. Nothing here is persisted; players are forgotten
    when they disconnect.
    """

    def __init__(
        self,
        distribution: str = "all_class_bonus",
        bonus_percent: int = 10,
        log: logging.Logger | None = None,
    ) -> None:
        self.log = log or logging.getLogger("party.roster")
        self.distribution = distribution
        self.bonus_percent = bonus_percent
        # Fail early on a misconfigured policy name.
        policy_for(distribution, bonus_percent)
        self.members: dict[int, Member] = {}

    def _new_policy(self) -> DistributionPolicy:
        return policy_for(self.distribution, self.bonus_percent)

    # ------------------------------------------------------------------
    # Players
    # ------------------------------------------------------------------
    def register(
        self, discord_id: int, name: str, player_class: PlayerClass | None = None
    ) -> Member:
        member = self.members.get(discord_id)
        if member is None:
            member = Member(discord_id=discord_id, name=name)
            self.members[discord_id] = member
            self.log.debug("Registered player %s (%s).", name, discord_id)
        member.name = name
        if player_class is not None and player_class is not member.player_class:
            if member.grouped:
                # the group counts classes; a grouped player keeps theirs
                self.log.debug(
                    "Kept class of %s: already in group %s.", name, member.group.id
                )
            else:
                member.player_class = player_class
        return member

    def get(self, discord_id: int) -> Member | None:
        return self.members.get(discord_id)

    def disconnect(self, discord_id: int) -> None:
        """Forget a player, leaving their group first."""
        member = self.members.pop(discord_id, None)
        if member is None:
            return
        if member.group is not None:
            member.group.remove(member)
        self.log.debug("Player %s disconnected.", member.name)

    # ------------------------------------------------------------------
    # Group operations
    # ------------------------------------------------------------------
    def invite(self, inviter_id: int, invitee_id: int) -> str | None:
        inviter = self.members.get(inviter_id)
        if inviter is None:
            return f"Player {inviter_id} not found."
        invitee = self.members.get(invitee_id)
        if invitee is None:
            return f"Player {invitee_id} not found."
        if inviter is invitee:
            return "You cannot invite yourself."

        group = inviter.group
        if group is None:
            group = Group(inviter, policy=self._new_policy())
        if not group.add(invitee):
            return f"{invitee.name} is already in a group."
        return None

    def leave(self, discord_id: int) -> str | None:
        member = self.members.get(discord_id)
        if member is None or member.group is None:
            return "You are not in a group."
        member.group.remove(member)
        return None

    def say(self, discord_id: int, text: str) -> str | None:
        member = self.members.get(discord_id)
        if member is None or member.group is None:
            return "You are not in a group."
        if not text.strip():
            return "Say something."
        member.group.broadcast(member, text.strip())
        return None

    def award(self, source_id: int, amount: int) -> str | None:
        source = self.members.get(source_id)
        if source is None:
            return f"Player {source_id} not found."
        if amount < 0:
            return "Experience must not be negative."
        if source.group is not None:
            source.group.share_experience(source, amount)
        else:
            source.give_experience(amount)
        return None

    def groups(self) -> list[Group]:
        """Return every group with at least one connected member."""
        seen: dict[str, Group] = {}
        for member in self.members.values():
            group = member.group
            if group is not None and len(group):
                seen.setdefault(group.id, group)
        return list(seen.values())

    def drain_notices(self) -> list[Notice]:
        notices: list[Notice] = []
        for member in self.members.values():
            notices.extend(member.drain())
        return notices

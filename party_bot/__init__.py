"""Core package for party_bot.

This module exposes the group model and the player types it works with so
that consumers of the package can simply import them from ``party_bot``.
"""

from .core.distribution import AllClassBonus, DistributionPolicy, FullShare
from .core.group import Group
from .core.models import Member, MessageType, Notice, PlayerClass
from .data.roster import Roster

__all__ = [
    "AllClassBonus",
    "DistributionPolicy",
    "FullShare",
    "Group",
    "Member",
    "MessageType",
    "Notice",
    "PlayerClass",
    "Roster",
]

"""Data models for party_bot's players and the notices sent to them.

The models are implemented using :mod:`pydantic` so that they provide
runtime validation and convenient serialisation to and from dictionaries.
A :class:`Member` stands in for a connected player session; the group only
ever talks to it through :meth:`Member.send_message` and
:meth:`Member.give_experience`.
"""

from __future__ import annotations

import datetime
import enum
import uuid
from datetime import UTC
from typing import Any

from pydantic import BaseModel, Field


class PlayerClass(str, enum.Enum):
    """Combat role of a player."""

    PEASANT = "peasant"
    WARRIOR = "warrior"
    ROGUE = "rogue"
    WIZARD = "wizard"
    PRIEST = "priest"
    MONK = "monk"


# Every class except the unclassed peasant.
COMBAT_CLASSES: tuple[PlayerClass, ...] = (
    PlayerClass.MONK,
    PlayerClass.PRIEST,
    PlayerClass.ROGUE,
    PlayerClass.WARRIOR,
    PlayerClass.WIZARD,
)


class MessageType(str, enum.Enum):
    SYSTEM = "system"
    GROUP = "group"


class Notice(BaseModel):
    """A one-way message queued for a single player."""

    recipient_id: int
    text: str
    category: MessageType = MessageType.SYSTEM
    created_at: datetime.datetime = Field(
        default_factory=lambda: datetime.datetime.now(tz=UTC)
    )


class Member(BaseModel):
    """Represents a connected player who can join a group.

    Attributes
    ----------
    id:
        Internal unique identifier for the player. Defaults to a random
        UUID4 string.
    discord_id:
        The Discord user ID the player is connected as.
    name:
        Display name used in group notifications.
    player_class:
        Combat role, counted by the group for the all-class bonus.
    experience:
        Total experience awarded so far.
    group:
        The group the player currently belongs to. Only a group writes it.
    grouped:
        Mirrors ``group is not None``; also written only by a group.
    outbox:
        Notices waiting to be delivered to the player.

    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    discord_id: int
    name: str
    player_class: PlayerClass = PlayerClass.PEASANT
    experience: int = 0
    group: Any = Field(default=None, exclude=True, repr=False)
    grouped: bool = False
    outbox: list[Notice] = Field(default_factory=list, repr=False)

    def send_message(
        self, text: str, category: MessageType = MessageType.SYSTEM
    ) -> None:
        """Queue ``text`` for delivery. Never blocks and never raises."""
        self.outbox.append(
            Notice(recipient_id=self.discord_id, text=text, category=category)
        )

    def give_experience(self, amount: int) -> None:
        self.experience += amount

    def drain(self) -> list[Notice]:
        """Return the queued notices and empty the outbox."""
        notices, self.outbox = self.outbox, []
        return notices

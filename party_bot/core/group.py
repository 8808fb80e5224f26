"""Player groups: membership, class bookkeeping and experience sharing."""

from __future__ import annotations

import datetime
import logging
import threading
import uuid
from datetime import UTC

from .distribution import AllClassBonus, DistributionPolicy
from .models import COMBAT_CLASSES, Member, MessageType, PlayerClass


class Group:
    """A party of players sharing notifications and experience.

    A group is founded with one member and never rests at a single member:
    whenever a removal leaves one player behind, that player is removed as
    well and the group ends up empty.

    The group is the only writer of a member's ``group`` and ``grouped``
    fields. All mutations hold a per-group lock.
    """

    def __init__(
        self,
        founder: Member,
        policy: DistributionPolicy | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.id = uuid.uuid4().hex
        self.log = log or logging.getLogger("party.group")
        self.members: list[Member] = []
        self.class_counts: dict[PlayerClass, int] = {cl: 0 for cl in PlayerClass}
        self.max_members = 0
        # Full experience to everyone, with a bonus when every class is present.
        self.policy = policy or AllClassBonus()
        self._lock = threading.RLock()

        self.log.info("Creating new group with %s as founder.", founder.name)
        self.add(founder)
        self.created_at = datetime.datetime.now(tz=UTC)

    def __len__(self) -> int:
        return len(self.members)

    def __contains__(self, member: object) -> bool:
        return isinstance(member, Member) and self._index(member) is not None

    def __repr__(self) -> str:
        names = ", ".join(m.name for m in self.members)
        return f"<Group {self.id[:8]} [{names}]>"

    @property
    def count(self) -> int:
        return len(self.members)

    def _index(self, member: Member) -> int | None:
        for i, m in enumerate(self.members):
            if m.id == member.id:
                return i
        return None

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------
    def add(self, member: Member) -> bool:
        """Add ``member`` to the group.

        Players already in a group (this one or another) are refused: the
        candidate and the current members are told why and ``False`` is
        returned. A group still holding only its founder is abandoned when
        that happens.
        """
        with self._lock:
            if member.grouped:
                member.send_message("You're already in a group.")
                for m in self.members:
                    m.send_message(f"{member.name} is in another group.")
                self.log.debug(
                    "Refused %s in group %s: already grouped.", member.name, self.id
                )
                if self.count == 1:
                    self.remove(self.members[0])
                return False

            for m in self.members:
                m.send_message(f"{member.name} has joined your group.")

            self.members.append(member)
            member.group = self
            member.grouped = True
            self.class_counts[member.player_class] += 1
            self.max_members = max(self.max_members, self.count)

            member.send_message("You've joined a group.")
            return True

    def remove(self, member: Member) -> None:
        """Remove ``member``, disbanding the group if one player is left."""
        with self._lock:
            if member not in self:
                self.log.debug("%s is not in group %s.", member.name, self.id)
                return
            target: Member | None = member
            while target is not None:
                target = self._remove_one(target)
            if not self.members:
                self.log.debug("Group %s disbanded.", self.id)

    def _remove_one(self, member: Member) -> Member | None:
        """Remove a single member and return the lone survivor, if any."""
        del self.members[self._index(member)]
        member.group = None
        member.grouped = False
        self.class_counts[member.player_class] -= 1

        # Only talk about it if this has ever been a real group for the players.
        if self.max_members > 1:
            for m in self.members:
                m.send_message(f"{member.name} has left your group.")
            member.send_message("You've left a group.")

        if self.count == 1:
            return self.members[0]
        return None

    def contains_all_classes(self) -> bool:
        return all(self.class_counts[cl] > 0 for cl in COMBAT_CLASSES)

    # ------------------------------------------------------------------
    # Messaging and rewards
    # ------------------------------------------------------------------
    def broadcast(self, sender: Member, text: str) -> bool:
        """Send group chat from ``sender`` to every member, sender included."""
        with self._lock:
            if sender not in self:
                return False
            for m in self.members:
                m.send_message(f"[Party] {sender.name}: {text}", MessageType.GROUP)
            return True

    def share_experience(self, source: Member, amount: int) -> None:
        """Distribute ``amount`` experience across the group's members."""
        if amount < 0:
            self.log.warning(
                "Ignoring negative experience %d for group %s.", amount, self.id
            )
            return
        with self._lock:
            share = self.policy.share(self, source, amount)
            for m in self.members:
                m.give_experience(share[m.id])

"""Experience distribution policies for groups."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .models import Member

if TYPE_CHECKING:
    from .group import Group


class DistributionPolicy(ABC):
    """Computes each member's share of an experience reward."""

    name: str = ""

    @abstractmethod
    def share(self, group: Group, source: Member, amount: int) -> dict[str, int]:
        """Return a mapping of member id to the experience that member gets.

        ``source`` is the member the reward originated from. The built-in
        policies ignore it.
        """


class FullShare(DistributionPolicy):
    """Every member receives the whole amount."""

    name = "full_share"

    def share(self, group: Group, source: Member, amount: int) -> dict[str, int]:
        return {member.id: amount for member in group.members}


class AllClassBonus(FullShare):
    """Full share, boosted when every combat class is represented."""

    name = "all_class_bonus"

    def __init__(self, bonus_percent: int = 10) -> None:
        self.bonus_percent = bonus_percent

    def share(self, group: Group, source: Member, amount: int) -> dict[str, int]:
        if group.contains_all_classes():
            amount = amount * (100 + self.bonus_percent) // 100
        return super().share(group, source, amount)


def policy_for(name: str, bonus_percent: int = 10) -> DistributionPolicy:
    """Build the policy registered under ``name``."""
    if name == FullShare.name:
        return FullShare()
    if name == AllClassBonus.name:
        return AllClassBonus(bonus_percent)
    raise ValueError(f"Unknown distribution policy: {name!r}")

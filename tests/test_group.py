"""Tests for :class:`party_bot.core.group.Group`."""

import itertools
import logging
import threading

from party_bot.core.distribution import FullShare
from party_bot.core.group import Group
from party_bot.core.models import COMBAT_CLASSES, Member, MessageType, PlayerClass


_ids = itertools.count(1)


def make_member(name: str, player_class: PlayerClass = PlayerClass.WARRIOR) -> Member:
    return Member(discord_id=next(_ids), name=name, player_class=player_class)


def texts(member: Member) -> list[str]:
    return [n.text for n in member.outbox]


def full_party() -> tuple[Group, list[Member]]:
    members = [make_member(cl.value, cl) for cl in COMBAT_CLASSES]
    group = Group(members[0])
    for m in members[1:]:
        assert group.add(m) is True
    return group, members


def test_founding_group() -> None:
    founder = make_member("Alice")
    group = Group(founder)

    assert group.count == 1
    assert len(group) == 1
    assert group.members == [founder]
    assert group.class_counts[PlayerClass.WARRIOR] == 1
    assert all(v == 0 for cl, v in group.class_counts.items() if cl != PlayerClass.WARRIOR)
    assert set(group.class_counts) == set(PlayerClass)
    assert founder.group is group
    assert founder.grouped is True
    assert group.max_members == 1
    assert group.created_at.tzinfo is not None
    assert texts(founder) == ["You've joined a group."]


def test_founding_logs_founder(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="party.group"):
        Group(make_member("Alice"))
    assert "Creating new group with Alice as founder." in caplog.text


def test_add_ungrouped_member() -> None:
    alice = make_member("Alice")
    bob = make_member("Bob", PlayerClass.PRIEST)
    group = Group(alice)
    alice.drain()

    assert group.add(bob) is True
    assert group.count == 2
    assert group.class_counts[PlayerClass.PRIEST] == 1
    assert group.max_members == 2
    assert bob.group is group and bob.grouped
    assert texts(alice) == ["Bob has joined your group."]
    # the joiner only sees the confirmation, not their own join notice
    assert texts(bob) == ["You've joined a group."]


def test_add_grouped_member_is_refused() -> None:
    alice, bob, carol = make_member("Alice"), make_member("Bob"), make_member("Carol")
    group = Group(alice)
    group.add(bob)
    other = Group(carol)
    for m in (alice, bob, carol):
        m.drain()

    assert group.add(carol) is False
    assert group.members == [alice, bob]
    assert group.class_counts[PlayerClass.WARRIOR] == 2
    assert carol.group is other
    assert texts(carol) == ["You're already in a group."]
    assert texts(alice) == ["Carol is in another group."]
    assert texts(bob) == ["Carol is in another group."]


def test_failed_add_abandons_lone_founder() -> None:
    alice, carol, dave = make_member("Alice"), make_member("Carol"), make_member("Dave")
    Group(carol).add(dave)
    group = Group(alice)
    alice.drain()

    assert group.add(carol) is False
    assert group.count == 0
    assert alice.group is None
    assert alice.grouped is False
    assert group.class_counts[PlayerClass.WARRIOR] == 0
    # a group that never had two members stays quiet about the removal
    assert texts(alice) == ["Carol is in another group."]


def test_add_same_member_twice() -> None:
    alice, bob = make_member("Alice"), make_member("Bob")
    group = Group(alice)
    group.add(bob)

    assert group.add(bob) is False
    assert group.members == [alice, bob]


def test_remove_member() -> None:
    members = [make_member(n) for n in ("Alice", "Bob", "Carol")]
    group = Group(members[0])
    group.add(members[1])
    group.add(members[2])
    for m in members:
        m.drain()

    group.remove(members[2])

    assert group.count == 2
    assert group.class_counts[PlayerClass.WARRIOR] == 2
    assert members[2].group is None and not members[2].grouped
    assert texts(members[0]) == ["Carol has left your group."]
    assert texts(members[1]) == ["Carol has left your group."]
    assert texts(members[2]) == ["You've left a group."]


def test_remove_down_to_one_disbands() -> None:
    alice = make_member("Alice")
    bob = make_member("Bob", PlayerClass.ROGUE)
    group = Group(alice)
    group.add(bob)
    alice.drain()
    bob.drain()

    group.remove(bob)

    assert group.count == 0
    assert alice.group is None and bob.group is None
    assert group.class_counts[PlayerClass.WARRIOR] == 0
    assert group.class_counts[PlayerClass.ROGUE] == 0
    assert texts(alice) == ["Bob has left your group.", "You've left a group."]
    assert texts(bob) == ["You've left a group."]


def test_remove_stranger_is_noop() -> None:
    alice, bob, stranger = make_member("Alice"), make_member("Bob"), make_member("Eve")
    group = Group(alice)
    group.add(bob)
    elsewhere = Group(stranger)
    for m in (alice, bob, stranger):
        m.drain()

    group.remove(stranger)

    assert group.members == [alice, bob]
    assert group.class_counts[PlayerClass.WARRIOR] == 2
    assert stranger.group is elsewhere
    assert not alice.outbox and not bob.outbox and not stranger.outbox


def test_founder_removed_without_messages() -> None:
    alice = make_member("Alice")
    group = Group(alice)
    alice.drain()

    group.remove(alice)

    assert group.count == 0
    assert alice.outbox == []


def test_contains_all_classes() -> None:
    group, members = full_party()
    assert group.contains_all_classes() is True

    group.add(make_member("Pat", PlayerClass.PEASANT))
    assert group.contains_all_classes() is True

    group.remove(members[-1])
    assert group.contains_all_classes() is False


def test_peasants_do_not_count_as_a_class() -> None:
    group = Group(make_member("Pat", PlayerClass.PEASANT))
    group.add(make_member("Sam", PlayerClass.PEASANT))
    assert group.class_counts[PlayerClass.PEASANT] == 2
    assert group.contains_all_classes() is False


def test_share_experience_with_bonus() -> None:
    group, members = full_party()
    group.share_experience(members[0], 1000)
    assert [m.experience for m in members] == [1100] * 5


def test_share_experience_without_bonus() -> None:
    alice, bob = make_member("Alice"), make_member("Bob")
    group = Group(alice)
    group.add(bob)

    group.share_experience(alice, 1000)

    assert alice.experience == 1000
    assert bob.experience == 1000


def test_share_experience_full_share_policy_ignores_classes() -> None:
    members = [make_member(cl.value, cl) for cl in COMBAT_CLASSES]
    group = Group(members[0], policy=FullShare())
    for m in members[1:]:
        group.add(m)

    group.share_experience(members[2], 100)

    assert [m.experience for m in members] == [100] * 5


def test_share_negative_experience_is_ignored(caplog) -> None:
    alice, bob = make_member("Alice"), make_member("Bob")
    group = Group(alice)
    group.add(bob)

    with caplog.at_level(logging.WARNING, logger="party.group"):
        group.share_experience(alice, -5)

    assert alice.experience == 0 and bob.experience == 0
    assert "negative experience" in caplog.text


def test_broadcast() -> None:
    alice, bob, eve = make_member("Alice"), make_member("Bob"), make_member("Eve")
    group = Group(alice)
    group.add(bob)
    alice.drain()
    bob.drain()

    assert group.broadcast(alice, "hello") is True
    assert group.broadcast(eve, "let me in") is False

    for m in (alice, bob):
        (notice,) = m.drain()
        assert notice.text == "[Party] Alice: hello"
        assert notice.category is MessageType.GROUP
    assert eve.outbox == []


def test_injected_logger_is_used() -> None:
    log = logging.getLogger("test.injected")
    group = Group(make_member("Alice"), log=log)
    assert group.log is log


def test_concurrent_adds_keep_counts_consistent() -> None:
    group = Group(make_member("Founder"))
    recruits = [make_member(f"Recruit{i}", COMBAT_CLASSES[i % 5]) for i in range(40)]

    threads = [threading.Thread(target=group.add, args=(m,)) for m in recruits]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert group.count == 41
    assert sum(group.class_counts.values()) == 41
    assert len({m.id for m in group.members}) == 41


def test_scenario_join_refuse_and_disband() -> None:
    a = make_member("A", PlayerClass.WARRIOR)
    b = make_member("B", PlayerClass.ROGUE)
    a2 = make_member("A2", PlayerClass.WIZARD)
    c = make_member("C", PlayerClass.MONK)
    Group(a2).add(c)

    group = Group(a)
    assert group.add(b) is True
    assert group.count == 2
    a.drain()
    b.drain()

    assert group.add(a2) is False
    assert group.count == 2
    assert texts(a) == ["A2 is in another group."]
    assert texts(b) == ["A2 is in another group."]

    group.remove(b)
    assert group.count == 0


def test_scenario_full_party_bonus() -> None:
    group, members = full_party()
    assert group.count == 5
    assert group.contains_all_classes()

    group.share_experience(members[0], 100)

    assert all(m.experience == 110 for m in members)

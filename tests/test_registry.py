from __future__ import annotations

from raffle_draw.ids import IdFactory
from raffle_draw.registry import Participant, Registry


def test_add_trims_name_and_email():
    reg = Registry()
    p = reg.add("  Alice  ", "  alice@example.com ")
    assert p is not None
    assert p.name == "Alice"
    assert p.email == "alice@example.com"
    assert reg.participants == (p,)


def test_blank_name_is_ignored():
    reg = Registry()
    assert reg.add("   ") is None
    assert reg.add("") is None
    assert len(reg) == 0


def test_blank_email_becomes_none():
    reg = Registry()
    assert reg.add("Bob", "   ").email is None


def test_same_name_allowed_on_manual_add():
    reg = Registry()
    a = reg.add("Sam")
    b = reg.add("Sam")
    assert a.id != b.id
    assert [p.name for p in reg] == ["Sam", "Sam"]


def test_ids_are_never_reused():
    reg = Registry()
    first = reg.add("A")
    assert reg.remove(first.id)
    second = reg.add("A")
    assert second.id != first.id
    reg.reset()
    third = reg.add("A")
    assert third.id not in {first.id, second.id}


def test_remove_unknown_id_is_noop():
    reg = Registry()
    reg.add("A")
    before = reg.participants
    assert reg.remove("p-unknown") is False
    assert reg.participants == before


def test_snapshot_is_unaffected_by_later_mutation():
    reg = Registry()
    a = reg.add("A")
    b = reg.add("B")
    snap = reg.snapshot()
    reg.remove(a.id)
    reg.add("C")
    assert snap == (a, b)


def test_extend_appends_batch_in_order():
    ids = IdFactory()
    reg = Registry(ids)
    reg.add("A")
    batch = [Participant(ids.batch(), "B"), Participant(ids.batch(), "C")]
    assert reg.extend(batch) == batch
    assert [p.name for p in reg] == ["A", "B", "C"]
    assert batch[0].id in reg
    assert "p-missing" not in reg


def test_id_prefixes():
    ids = IdFactory()
    assert ids.manual().startswith("p-")
    assert ids.batch().startswith("batch-")

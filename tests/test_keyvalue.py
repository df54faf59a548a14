# ruff: noqa: S101
from courier.keyvalue import KeyValueSet


def test_add_assigns_increasing_ids():
    rows = KeyValueSet()
    first = rows.add()
    second = rows.add()
    assert (first.id, second.id) == (0, 1)
    assert first.key == "" and first.value == ""


def test_ids_are_not_reused_after_remove():
    rows = KeyValueSet()
    rows.add()
    middle = rows.add()
    rows.remove(middle.id)
    assert rows.add().id == 2
    assert [entry.id for entry in rows] == [0, 2]


def test_set_key_and_value_by_id_after_earlier_row_removed():
    rows = KeyValueSet([("a", "1"), ("b", "2"), ("c", "3")])
    rows.remove(0)
    rows.set_key(2, "C")
    rows.set_value(2, "33")
    assert rows.pairs() == [("b", "2"), ("C", "33")]


def test_unknown_ids_are_ignored():
    rows = KeyValueSet([("a", "1")])
    rows.remove(42)
    rows.set_key(42, "x")
    rows.set_value(42, "y")
    assert rows.pairs() == [("a", "1")]
    assert rows.get(42) is None


def test_active_pairs_skip_empty_keys_but_keep_order():
    rows = KeyValueSet([("b", "2"), ("", "ignored"), ("a", "1")])
    assert rows.active_pairs() == [("b", "2"), ("a", "1")]
    assert len(rows) == 3


def test_reset_keeps_id_counter_running():
    rows = KeyValueSet([("a", "1"), ("b", "2")])
    rows.reset([("x", "9")])
    assert rows.pairs() == [("x", "9")]
    assert [entry.id for entry in rows] == [2]

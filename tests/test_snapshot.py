"""Tests for current-session / waiting-queue derivation."""

from operator_client.snapshot import entry_label, move_waiting_item, split_queue


def test_empty_cabinet_has_no_session():
    assert split_queue([]) == (None, [])
    assert split_queue(None) == (None, [])


def test_single_entry_is_current_session():
    only = {"id": 1, "players": ["Alice"]}
    assert split_queue([only]) == (only, [])


def test_rest_is_waiting_in_order():
    items = [{"id": i} for i in (4, 2, 9)]
    current, waiting = split_queue(items)
    assert current["id"] == 4
    assert [w["id"] for w in waiting] == [2, 9]


def test_move_waiting_item_forward_and_back():
    waiting = [{"id": i} for i in (1, 2, 3, 4)]
    assert [w["id"] for w in move_waiting_item(waiting, 3, 0)] == [4, 1, 2, 3]
    assert [w["id"] for w in move_waiting_item(waiting, 0, 2)] == [2, 3, 1, 4]
    # source list untouched
    assert [w["id"] for w in waiting] == [1, 2, 3, 4]


def test_entry_label():
    assert entry_label({"players": ["Bob", "Cara"]}) == "Bob & Cara"
    assert entry_label(None) == "(empty)"

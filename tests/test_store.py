from __future__ import annotations

import pytest

from momo_order.models import NameConfig, Order
from momo_order.store import OrderBook

ANN = Order(name="Ann", meat_momos=2)
BOB = Order(name="Bob", veggie_momos=3, wants_soy_sauce=False)
CID = Order(name="Cid", meat_momos=1, veggie_momos=1)


@pytest.fixture
def saved() -> list[tuple[Order, ...]]:
    return []


@pytest.fixture
def book(saved: list[tuple[Order, ...]]) -> OrderBook:
    return OrderBook([ANN, BOB], on_orders_change=saved.append)


def test_seeded_with_restored_orders(book: OrderBook) -> None:
    assert book.orders == (ANN, BOB)
    assert book.history.current_index == 0
    assert not book.can_undo


def test_add_records_and_persists(book: OrderBook, saved: list[tuple[Order, ...]]) -> None:
    book.add_order(CID)

    assert book.orders == (ANN, BOB, CID)
    assert book.history.current_index == 1
    assert saved == [(ANN, BOB, CID)]


def test_update_replaces_whole_order(book: OrderBook) -> None:
    book.update_order(1, CID)

    assert book.orders == (ANN, CID)


def test_delete_removes_order(book: OrderBook) -> None:
    book.delete_order(0)

    assert book.orders == (BOB,)


def test_duplicate_is_a_recorded_mutation(book: OrderBook) -> None:
    copy = book.duplicate_order(0)

    assert copy == ANN
    assert book.orders == (ANN, BOB, ANN)
    assert book.can_undo
    book.undo()
    assert book.orders == (ANN, BOB)


def test_clear_is_undoable(book: OrderBook) -> None:
    book.clear_orders()
    assert book.orders == ()

    assert book.undo()
    assert book.orders == (ANN, BOB)


def test_undo_and_redo_persist_the_visible_list(book: OrderBook, saved: list[tuple[Order, ...]]) -> None:
    book.add_order(CID)
    book.undo()
    book.redo()

    assert saved == [(ANN, BOB, CID), (ANN, BOB), (ANN, BOB, CID)]


def test_undo_and_redo_report_noop(book: OrderBook, saved: list[tuple[Order, ...]]) -> None:
    assert not book.undo()
    assert not book.redo()
    assert saved == []


def test_new_change_after_undo_drops_redo(book: OrderBook) -> None:
    book.add_order(CID)
    book.undo()
    book.delete_order(0)

    assert not book.can_redo
    assert book.orders == (BOB,)


@pytest.mark.parametrize("index", (-1, 2, 10))
def test_out_of_range_index_raises(book: OrderBook, index: int) -> None:
    with pytest.raises(IndexError):
        book.delete_order(index)
    with pytest.raises(IndexError):
        book.start_edit(index)


def test_submit_adds_when_not_editing(book: OrderBook) -> None:
    book.submit_order(CID)

    assert book.orders == (ANN, BOB, CID)


def test_submit_replaces_edited_order(book: OrderBook) -> None:
    assert book.start_edit(0) == ANN

    book.submit_order(CID)

    assert book.orders == (CID, BOB)
    assert book.editing_index is None


def test_cancel_edit(book: OrderBook) -> None:
    assert not book.cancel_edit()
    book.start_edit(1)

    assert book.cancel_edit()
    assert book.editing_index is None


def test_undo_cancels_edit(book: OrderBook) -> None:
    book.add_order(CID)
    book.start_edit(2)

    book.undo()

    assert book.editing_index is None


def test_deleting_an_earlier_order_shifts_edit_index(book: OrderBook) -> None:
    book.start_edit(1)

    book.delete_order(0)

    assert book.editing_index == 0
    book.submit_order(CID)
    assert book.orders == (CID,)


def test_deleting_the_edited_order_cancels_edit(book: OrderBook) -> None:
    book.start_edit(1)

    book.delete_order(1)

    assert book.editing_index is None


def test_name_config_changes_are_not_history() -> None:
    configs_saved: list[tuple[NameConfig, ...]] = []
    book = OrderBook(name_configs=[NameConfig("Ramon")], on_name_configs_change=configs_saved.append)

    assert book.add_name_config("  Paavo ", default_soy_sauce=False)
    assert book.update_name_preference("Ramon", False)
    assert book.remove_name_config("Paavo")

    assert book.name_configs == (NameConfig("Ramon", False),)
    assert len(configs_saved) == 3
    assert not book.can_undo


def test_name_config_rejects_blank_and_duplicate_names() -> None:
    book = OrderBook(name_configs=[NameConfig("Ramon")])

    assert not book.add_name_config("   ")
    assert not book.add_name_config("Ramon")
    assert not book.remove_name_config("Nobody")
    assert not book.update_name_preference("Nobody", True)
    assert book.name_config_for("Ramon") == NameConfig("Ramon", True)
    assert book.name_config_for("Nobody") is None

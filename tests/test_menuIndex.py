from decimal import Decimal

import pytest

from menuIndex import MenuIndex


def test_insert_then_search_returns_entry():
    index = MenuIndex()
    index.insert(1, "Espresso", 350.0)
    entry = index.search(1)
    assert entry.name == "Espresso"
    assert entry.price == Decimal("350.00")


def test_search_missing_returns_none():
    assert MenuIndex().search(42) is None


def test_reinsert_updates_in_place():
    index = MenuIndex()
    first = index.insert(1, "Espresso", 350)
    index.insert(1, "Double Espresso", "420.50")
    assert len(index) == 1
    assert index.search(1) is first
    assert first.name == "Double Espresso"
    assert first.price == Decimal("420.50")


def test_delete():
    index = MenuIndex()
    index.insert(1, "Espresso", 350)
    assert index.delete(1) is True
    assert index.search(1) is None
    assert index.delete(1) is False
    assert len(index) == 0


def test_collisions_are_chained():
    # Capacity 1 forces every key into the same bucket
    index = MenuIndex(capacity=1)
    for item_id in range(1, 6):
        index.insert(item_id, f"Item {item_id}", item_id)
    assert index.chain_lengths() == [5]
    assert index.delete(3)
    assert index.search(3) is None
    assert [e.item_id for e in index.all_entries()] == [1, 2, 4, 5]
    assert index.delete(5)  # head of the chain
    assert index.delete(1)  # tail of the chain
    assert [e.item_id for e in index.all_entries()] == [2, 4]


def test_negative_ids_hash_into_range():
    index = MenuIndex(capacity=7)
    index.insert(-15, "Secret Menu", 1)
    assert index.search(-15).name == "Secret Menu"


def test_all_entries_sorted_and_non_mutating():
    index = MenuIndex(capacity=3)
    for item_id in [9, 2, 7, 4, 1]:
        index.insert(item_id, str(item_id), 1)
    assert [e.item_id for e in index.all_entries()] == [1, 2, 4, 7, 9]
    assert len(index) == 5
    assert 7 in index


def test_invalid_construction_and_price():
    with pytest.raises(ValueError):
        MenuIndex(capacity=0)
    with pytest.raises(ValueError):
        MenuIndex().insert(1, "Refund", -1)


@pytest.mark.parametrize("price", ["Infinity", "-Infinity", "NaN", "sNaN"])
def test_non_finite_price_rejected(price):
    index = MenuIndex()
    with pytest.raises(ValueError):
        index.insert(1, "Gold", price)
    assert len(index) == 0

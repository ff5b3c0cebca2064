from decimal import Decimal, ROUND_HALF_UP

import pytest

from cafeErrors import InsufficientStock, ItemNotFound


def test_single_order_scenario(cafe):
    cafe.place_order(1, "Fatima", [(1, 2)])
    bill = cafe.process_next_order()
    assert bill.order_id == 1
    assert bill.customer == "Fatima"
    assert bill.items == ["Espresso x2"]
    assert bill.subtotal == Decimal("700.00")
    assert bill.total == Decimal("756.00")
    assert cafe.find_inventory(1).stock == 48


def test_unknown_item_rejected_and_nothing_queued(cafe):
    with pytest.raises(ItemNotFound) as excinfo:
        cafe.place_order(1, "Kamran", [(1, 1), (99, 1)])
    assert excinfo.value.item_id == 99
    assert cafe.pending_orders() == 0
    assert cafe.process_next_order() is None


def test_insufficient_stock_rejected(cafe):
    with pytest.raises(InsufficientStock) as excinfo:
        cafe.place_order(1, "Greedy", [(5, 16)], priority=0)
    assert excinfo.value.item_id == 5
    assert excinfo.value.requested == 16
    assert excinfo.value.available == 15
    assert cafe.pending_orders() == 0


def test_menu_item_without_inventory_is_insufficient(cafe):
    cafe.insert_menu_item(6, "Tea", 150)
    with pytest.raises(InsufficientStock) as excinfo:
        cafe.place_order(1, "Sana", [(6, 1)])
    assert excinfo.value.available is None


def test_non_positive_quantity_rejected(cafe):
    with pytest.raises(ValueError):
        cafe.place_order(1, "Zero", [(1, 0)])
    assert cafe.pending_orders() == 0


def test_priority_orders_processed_first(cafe):
    cafe.place_order(101, "Fatima", [(1, 2), (4, 1)])
    cafe.place_order(102, "Hassan", [(2, 1), (3, 1)], priority=0)
    cafe.place_order(103, "Iram", [(5, 2)], priority=1)
    cafe.place_order(104, "Javed", [(1, 1), (2, 1)])
    cafe.place_order(105, "Layla", [(3, 1)], priority=0)

    processed = []
    while True:
        bill = cafe.process_next_order()
        if bill is None:
            break
        processed.append(bill.order_id)
    assert processed == [102, 105, 103, 101, 104]


def test_orders_stamped_by_injected_clock(cafe, clock):
    clock.now = 12.5
    order = cafe.place_order(1, "Omar", [(2, 1)], priority=3)
    assert order.created_at == 12.5
    assert order.is_priority
    bill = cafe.process_next_order()
    assert bill.created_at == 12.5
    assert bill.is_priority


def test_total_is_rounded_subtotal_with_tax(cafe):
    cafe.insert_menu_item(7, "Biscotti", "1.15")
    cafe.set_inventory(7, "Biscotti", 100, 10)
    cafe.place_order(1, "Rounding", [(7, 3)])
    bill = cafe.process_next_order()
    assert bill.subtotal == Decimal("3.45")
    # 3.45 * 0.08 = 0.276
    assert bill.tax == Decimal("0.28")
    assert bill.total == (bill.subtotal * Decimal("1.08")).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def test_bill_uses_prices_at_processing_time(cafe):
    cafe.place_order(1, "Late", [(1, 1)])
    cafe.insert_menu_item(1, "Espresso", 400)
    bill = cafe.process_next_order()
    assert bill.subtotal == Decimal("400.00")


def test_stock_clamped_at_zero_without_revalidation(cafe):
    cafe.place_order(1, "First", [(5, 10)])
    cafe.place_order(2, "Second", [(5, 10)])
    cafe.process_next_order()
    assert cafe.find_inventory(5).stock == 5
    bill = cafe.process_next_order()
    assert bill is not None
    assert cafe.find_inventory(5).stock == 0


def test_deducts_each_line(cafe):
    cafe.place_order(1, "Multi", [(2, 3), (3, 4), (2, 1)])
    cafe.process_next_order()
    assert cafe.find_inventory(2).stock == 36
    assert cafe.find_inventory(3).stock == 26


def test_low_stock_alerts(cafe):
    assert cafe.low_stock_alerts() == []
    cafe.place_order(1, "Muffin Fan", [(4, 15)])
    cafe.process_next_order()
    low = cafe.low_stock()
    assert [item.name for item in low] == ["Muffins"]
    assert low[0].stock == 5


def test_book_table_per_table_trees(cafe):
    assert cafe.book_table(1, 540, 600, "Ayesha")
    assert not cafe.book_table(1, 590, 630, "Bilal")
    assert cafe.book_table(1, 630, 690, "Danish")
    # Another table is independent
    assert cafe.book_table(2, 590, 630, "Bilal")
    assert set(cafe.tables) == {1, 2}
    assert [r.customer for r in cafe.overlaps(1, 580, 640)] in (["Ayesha", "Danish"], ["Danish", "Ayesha"])
    assert cafe.overlaps(3, 0, 1000) == []


def test_menu_and_inventory_facade(cafe):
    assert [item.item_id for item in cafe.list_menu_items()] == [1, 2, 3, 4, 5]
    assert cafe.remove_menu_item(5)
    assert not cafe.remove_menu_item(5)
    assert cafe.find_menu_item(5) is None
    cafe.remove_inventory(4)
    assert cafe.find_inventory(4) is None
    assert [item.item_id for item in cafe.list_inventory()] == [1, 2, 3, 5]
    with pytest.raises(ValueError):
        cafe.set_inventory(8, "Sugar", -1, 0)


def test_set_inventory_rejects_negative_threshold(cafe):
    with pytest.raises(ValueError):
        cafe.set_inventory(8, "Sugar", 5, -1)
    assert cafe.find_inventory(8) is None

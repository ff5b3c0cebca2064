import logging
import time
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, List, Optional

import cafeStore
from cafeConfig import (CafeConfig, Bill, InventoryEntry, Order, OrderLine, Reservation,
                        SAMPLE_INVENTORY, SAMPLE_MENU)
from cafeErrors import InsufficientStock, ItemNotFound, PersistenceFailure
from inventoryTree import InventoryTree
from menuIndex import MenuIndex
from orderQueues import OrderQueue, PriorityOrderHeap
from reservationTree import ReservationTree

logger = logging.getLogger(__name__)

CENTS = Decimal('0.01')


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


class OrderDispatcher:
    """
    Wires the menu index, inventory tree, order queues and per-table
    reservation trees together.

    `clock` is the time source used to stamp orders; it defaults to
    time.monotonic, and the simulation passes its own clock instead.
    """

    def __init__(self, config: Optional[CafeConfig] = None, clock: Callable[[], float] = time.monotonic):
        self.cfg = config or CafeConfig()
        self.clock = clock
        self.tax_rate = Decimal(str(self.cfg.tax_rate))

        self.menu = MenuIndex(self.cfg.menu_capacity)
        self.inventory = InventoryTree()
        self.normal_queue = OrderQueue()
        self.priority_heap = PriorityOrderHeap()
        # table id -> that table's reservations, created on first booking
        self.tables: Dict[int, ReservationTree] = {}

    # ==========================
    # 1. MENU
    # ==========================
    def insert_menu_item(self, item_id, name, price):
        return self.menu.insert(item_id, name, price)

    def find_menu_item(self, item_id):
        return self.menu.search(item_id)

    def remove_menu_item(self, item_id) -> bool:
        return self.menu.delete(item_id)

    def list_menu_items(self):
        return self.menu.all_entries()

    # ==========================
    # 2. INVENTORY
    # ==========================
    def set_inventory(self, item_id, name, stock, threshold):
        entry = InventoryEntry(item_id, name, stock, threshold)
        self.inventory.insert(item_id, entry)
        return entry

    def find_inventory(self, item_id):
        return self.inventory.search(item_id)

    def remove_inventory(self, item_id):
        self.inventory.delete(item_id)

    def list_inventory(self):
        return self.inventory.inorder()

    def low_stock_alerts(self) -> List[InventoryEntry]:
        return self.inventory.low_stock_items()

    low_stock = low_stock_alerts

    # ==========================
    # 3. ORDERS
    # ==========================
    def place_order(self, order_id, customer, lines, priority=None) -> Order:
        """
        Validate every line against the menu and inventory, then queue the
        order: on the priority heap when a priority is given, otherwise FIFO.
        Raises ItemNotFound / InsufficientStock without queueing anything.
        """
        order_lines = tuple(
            line if isinstance(line, OrderLine) else OrderLine(*line) for line in lines
        )
        for line in order_lines:
            if line.quantity <= 0:
                raise ValueError(f"Quantity must be positive for item {line.item_id}")
            menu_item = self.menu.search(line.item_id)
            if menu_item is None:
                logger.debug(f"Order {order_id} rejected: item {line.item_id} not on menu")
                raise ItemNotFound(line.item_id)
            stock_item = self.inventory.search(line.item_id)
            if stock_item is None or stock_item.stock < line.quantity:
                available = stock_item.stock if stock_item else None
                logger.debug(f"Order {order_id} rejected: {menu_item.name} stock {available} < {line.quantity}")
                raise InsufficientStock(line.item_id, line.quantity, available, menu_item.name)

        order = Order(order_id, customer, order_lines, priority is not None, self.clock())
        if priority is None:
            self.normal_queue.enqueue(order)
        else:
            self.priority_heap.push(order, priority)
        logger.debug(f"Order {order_id} for {customer} queued "
                     f"({'priority ' + str(priority) if priority is not None else 'normal'})")
        return order

    def pending_orders(self) -> int:
        return self.priority_heap.size() + self.normal_queue.size()

    def calculate_bill(self, order: Order) -> Bill:
        subtotal = Decimal(0)
        items = []
        for line in order.lines:
            menu_item = self.menu.search(line.item_id)
            if menu_item is None:
                # Removed from the menu after the order was placed
                raise ItemNotFound(line.item_id)
            subtotal += menu_item.price * line.quantity
            items.append(f"{menu_item.name} x{line.quantity}")
        subtotal = round_money(subtotal)
        tax = round_money(subtotal * self.tax_rate)
        return Bill(order.order_id, order.customer, items, subtotal, tax, subtotal + tax,
                    order.is_priority, order.created_at)

    def deduct_inventory(self, order: Order):
        # No re-validation here: stock that ran out since placement clamps to zero
        for line in order.lines:
            item = self.inventory.search(line.item_id)
            if item is None:
                continue
            item.stock = max(0, item.stock - line.quantity)
            self.inventory.insert(line.item_id, item)

    def process_next_order(self) -> Optional[Bill]:
        """Bill and fulfil the next order, priority orders first. None if idle."""
        if not self.priority_heap.is_empty():
            order = self.priority_heap.pop()
        elif not self.normal_queue.is_empty():
            order = self.normal_queue.dequeue()
        else:
            return None
        bill = self.calculate_bill(order)
        self.deduct_inventory(order)
        logger.info(f"Processed order {bill.order_id} for {bill.customer}: total {bill.total}")
        return bill

    process_next = process_next_order

    # ==========================
    # 4. RESERVATIONS
    # ==========================
    def book_table(self, table_id, start, end, customer) -> bool:
        reservation = Reservation(table_id, start, end, customer)
        tree = self.tables.get(table_id)
        if tree is None:
            tree = self.tables[table_id] = ReservationTree()
        booked = tree.book(reservation)
        logger.debug(f"Table {table_id} [{start}, {end}) for {customer}: {'booked' if booked else 'conflict'}")
        return booked

    book = book_table

    def overlaps(self, table_id, start, end) -> List[Reservation]:
        tree = self.tables.get(table_id)
        if tree is None:
            return []
        return tree.find_overlaps(start, end)

    # ==========================
    # 5. DATA
    # ==========================
    def load_sample_data(self):
        for item_id, name, price in SAMPLE_MENU:
            self.insert_menu_item(item_id, name, price)
        for item_id, name, stock, threshold in SAMPLE_INVENTORY:
            self.set_inventory(item_id, name, stock, threshold)

    def save_data(self):
        try:
            cafeStore.save_menu(self.menu, self.cfg.menu_csv)
            cafeStore.save_inventory(self.inventory, self.cfg.inventory_csv)
        except PersistenceFailure as e:
            logger.error(f"Save failed: {e}")
            raise

    def load_data(self):
        try:
            cafeStore.load_menu(self.menu, self.cfg.menu_csv)
            cafeStore.load_inventory(self.inventory, self.cfg.inventory_csv)
        except PersistenceFailure as e:
            logger.error(f"Load failed: {e}")
            raise

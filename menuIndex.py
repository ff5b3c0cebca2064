from decimal import Decimal
from typing import List, Optional

from cafeConfig import MenuEntry


class _ChainNode:
    __slots__ = ("entry", "next")

    def __init__(self, entry, next=None):
        self.entry = entry
        self.next = next


class MenuIndex:
    """
    Fixed-capacity hash table from menu item id to MenuEntry.
    Collisions are resolved by chaining; there is no resizing, so lookups
    stay O(1) on average only while the load factor is low.
    """

    def __init__(self, capacity: int = 127):
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self.buckets = [None] * capacity
        self._size = 0

    def _bucket(self, item_id):
        return abs(hash(item_id)) % self.capacity

    def insert(self, item_id: int, name: str, price) -> MenuEntry:
        """Insert a new entry, or update name/price in place if the id exists."""
        price = Decimal(str(price))
        if not price.is_finite() or price < 0:
            raise ValueError(f"Price must be a finite non-negative amount: {price}")
        idx = self._bucket(item_id)
        node = self.buckets[idx]
        while node is not None:
            if node.entry.item_id == item_id:
                node.entry.name = name
                node.entry.price = price
                return node.entry
            node = node.next
        entry = MenuEntry(item_id, name, price)
        self.buckets[idx] = _ChainNode(entry, self.buckets[idx])
        self._size += 1
        return entry

    def search(self, item_id: int) -> Optional[MenuEntry]:
        node = self.buckets[self._bucket(item_id)]
        while node is not None:
            if node.entry.item_id == item_id:
                return node.entry
            node = node.next
        return None

    def delete(self, item_id: int) -> bool:
        idx = self._bucket(item_id)
        prev = None
        node = self.buckets[idx]
        while node is not None:
            if node.entry.item_id == item_id:
                if prev is None:
                    self.buckets[idx] = node.next
                else:
                    prev.next = node.next
                self._size -= 1
                return True
            prev, node = node, node.next
        return False

    def all_entries(self) -> List[MenuEntry]:
        """All entries sorted by id, for stable listing."""
        entries = []
        for head in self.buckets:
            node = head
            while node is not None:
                entries.append(node.entry)
                node = node.next
        entries.sort(key=lambda e: e.item_id)
        return entries

    def chain_lengths(self) -> List[int]:
        lengths = []
        for head in self.buckets:
            count = 0
            node = head
            while node is not None:
                count += 1
                node = node.next
            lengths.append(count)
        return lengths

    def __len__(self):
        return self._size

    def __contains__(self, item_id):
        return self.search(item_id) is not None

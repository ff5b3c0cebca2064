from dataclasses import dataclass, field
from typing import List, Optional

from cafeConfig import Order


# ==========================
# 1. NORMAL ORDERS (FIFO)
# ==========================
class _QueueNode:
    __slots__ = ("order", "next")

    def __init__(self, order):
        self.order = order
        self.next = None


class OrderQueue:
    """Singly linked FIFO queue with head/tail references."""

    def __init__(self):
        self.head = None
        self.tail = None
        self._size = 0

    def enqueue(self, order: Order):
        node = _QueueNode(order)
        if self.tail is None:
            self.head = self.tail = node
        else:
            self.tail.next = node
            self.tail = node
        self._size += 1

    def dequeue(self) -> Optional[Order]:
        if self.head is None:
            return None
        order = self.head.order
        self.head = self.head.next
        if self.head is None:
            self.tail = None
        self._size -= 1
        return order

    def peek(self) -> Optional[Order]:
        return self.head.order if self.head else None

    def is_empty(self) -> bool:
        return self.head is None

    def size(self) -> int:
        return self._size

    def __len__(self):
        return self._size


# ==========================
# 2. PRIORITY ORDERS (MIN-HEAP)
# ==========================
@dataclass(order=True)
class HeapEntry:
    priority: int
    # Tie-breaker: equal priorities pop in push order
    sequence: int
    order: Order = field(compare=False)


class PriorityOrderHeap:
    """
    Binary min-heap of orders keyed by (priority, push sequence).
    Lower priority values are more urgent.
    """

    def __init__(self):
        self.heap: List[HeapEntry] = []
        self._sequence = 0

    def push(self, order: Order, priority: int):
        self.heap.append(HeapEntry(priority, self._sequence, order))
        self._sequence += 1
        self._sift_up(len(self.heap) - 1)

    def pop(self) -> Optional[Order]:
        if not self.heap:
            return None
        top = self.heap[0]
        last = self.heap.pop()
        if self.heap:
            self.heap[0] = last
            self._sift_down(0)
        return top.order

    def peek(self) -> Optional[Order]:
        return self.heap[0].order if self.heap else None

    def _sift_up(self, idx):
        heap = self.heap
        while idx > 0:
            parent = (idx - 1) // 2
            if not heap[idx] < heap[parent]:
                break
            heap[idx], heap[parent] = heap[parent], heap[idx]
            idx = parent

    def _sift_down(self, idx):
        heap = self.heap
        n = len(heap)
        while True:
            left, right = 2 * idx + 1, 2 * idx + 2
            smallest = idx
            if left < n and heap[left] < heap[smallest]:
                smallest = left
            if right < n and heap[right] < heap[smallest]:
                smallest = right
            if smallest == idx:
                return
            heap[idx], heap[smallest] = heap[smallest], heap[idx]
            idx = smallest

    def is_empty(self) -> bool:
        return not self.heap

    def size(self) -> int:
        return len(self.heap)

    def __len__(self):
        return len(self.heap)

from typing import List

from cafeConfig import Reservation


class IntervalNode:
    __slots__ = ("reservation", "start", "end", "max_end", "left", "right")

    def __init__(self, reservation: Reservation):
        self.reservation = reservation
        self.start = reservation.start
        self.end = reservation.end
        self.max_end = reservation.end  # Largest end in this subtree
        self.left = None
        self.right = None


class ReservationTree:
    """
    Interval tree of one table's reservations, ordered by start time and
    augmented with each subtree's maximum end.

    The tree is not height-balanced: strictly increasing start times
    degrade it to a linked list. All walks are iterative for that reason.
    """

    def __init__(self):
        self.root = None
        self._size = 0

    def book(self, reservation: Reservation) -> bool:
        """Insert the reservation unless it overlaps a stored one."""
        if self.has_overlap(reservation.start, reservation.end):
            return False
        self._insert(reservation)
        return True

    def _insert(self, reservation):
        new_node = IntervalNode(reservation)
        self._size += 1
        if self.root is None:
            self.root = new_node
            return
        node = self.root
        while True:
            # Every node on the path is an ancestor of the new one
            if reservation.end > node.max_end:
                node.max_end = reservation.end
            if reservation.start < node.start:
                if node.left is None:
                    node.left = new_node
                    return
                node = node.left
            else:
                # Equal starts go right
                if node.right is None:
                    node.right = new_node
                    return
                node = node.right

    def has_overlap(self, start, end) -> bool:
        node = self.root
        while node is not None:
            if start < node.end and node.start < end:
                return True
            if node.left is not None and node.left.max_end > start:
                # Anything in the right subtree starts too late if the left one misses
                node = node.left
            else:
                node = node.right
        return False

    def find_overlaps(self, start, end) -> List[Reservation]:
        """All stored reservations overlapping [start, end)."""
        found = []
        stack = [self.root] if self.root else []
        while stack:
            node = stack.pop()
            if start < node.end and node.start < end:
                found.append(node.reservation)
            if node.right is not None and node.start < end:
                stack.append(node.right)
            if node.left is not None and node.left.max_end > start:
                stack.append(node.left)
        return found

    def reservations(self) -> List[Reservation]:
        result = []
        stack = []
        node = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            result.append(node.reservation)
            node = node.right
        return result

    def __len__(self):
        return self._size

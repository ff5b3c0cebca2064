from typing import List, Optional


class AVLNode:
    __slots__ = ("key", "value", "left", "right", "height")

    def __init__(self, key, value):
        self.key = key
        self.value = value
        self.left = None
        self.right = None
        self.height = 1


def _height(node):
    return node.height if node else 0


def _balance_factor(node):
    return _height(node.left) - _height(node.right) if node else 0


def _update_height(node):
    node.height = 1 + max(_height(node.left), _height(node.right))


class InventoryTree:
    """
    AVL tree keyed by inventory item id.

    Every insert/delete rebalances each ancestor on the way back up, so the
    height stays O(log n) and in-order traversal is strictly ascending.
    """

    def __init__(self):
        self.root = None
        self._size = 0

    # ==========================
    # ROTATIONS
    # ==========================
    def _rotate_right(self, y):
        x = y.left
        y.left = x.right
        x.right = y
        _update_height(y)
        _update_height(x)
        return x

    def _rotate_left(self, x):
        y = x.right
        x.right = y.left
        y.left = x
        _update_height(x)
        _update_height(y)
        return y

    def _rebalance(self, node):
        _update_height(node)
        bf = _balance_factor(node)
        if bf > 1:
            # Left-right case
            if _balance_factor(node.left) < 0:
                node.left = self._rotate_left(node.left)
            return self._rotate_right(node)
        if bf < -1:
            # Right-left case
            if _balance_factor(node.right) > 0:
                node.right = self._rotate_right(node.right)
            return self._rotate_left(node)
        return node

    # ==========================
    # INSERT / SEARCH / DELETE
    # ==========================
    def insert(self, key, value):
        """Insert a key, or overwrite its value if already present."""
        self.root = self._insert(self.root, key, value)

    def _insert(self, node, key, value):
        if node is None:
            self._size += 1
            return AVLNode(key, value)
        if key < node.key:
            node.left = self._insert(node.left, key, value)
        elif key > node.key:
            node.right = self._insert(node.right, key, value)
        else:
            node.value = value
            return node
        return self._rebalance(node)

    def search(self, key) -> Optional[object]:
        node = self.root
        while node is not None:
            if key == node.key:
                return node.value
            node = node.left if key < node.key else node.right
        return None

    def delete(self, key):
        """Remove a key. Deleting an absent key is a no-op."""
        self.root = self._delete(self.root, key)

    def _delete(self, node, key):
        if node is None:
            return None
        if key < node.key:
            node.left = self._delete(node.left, key)
        elif key > node.key:
            node.right = self._delete(node.right, key)
        else:
            if node.left is None:
                self._size -= 1
                return node.right
            if node.right is None:
                self._size -= 1
                return node.left
            # Two children: replace with in-order successor, then remove it
            successor = node.right
            while successor.left is not None:
                successor = successor.left
            node.key, node.value = successor.key, successor.value
            node.right = self._delete(node.right, successor.key)
        return self._rebalance(node)

    # ==========================
    # TRAVERSAL
    # ==========================
    def inorder(self) -> List[object]:
        result = []
        stack = []
        node = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            result.append(node.value)
            node = node.right
        return result

    def keys(self) -> List[object]:
        result = []
        self._collect_keys(self.root, result)
        return result

    def _collect_keys(self, node, out):
        if node is None:
            return
        self._collect_keys(node.left, out)
        out.append(node.key)
        self._collect_keys(node.right, out)

    def low_stock_items(self) -> List[object]:
        """Entries at or below their reorder threshold, ascending by id."""
        return [item for item in self.inorder() if item.stock <= item.reorder_threshold]

    def height(self) -> int:
        return _height(self.root)

    def __len__(self):
        return self._size

    def __contains__(self, key):
        return self.search(key) is not None

class CafeError(Exception):
    """Base class for every error raised by the cafe core."""


class ItemNotFound(CafeError):
    def __init__(self, item_id):
        self.item_id = item_id
        super().__init__(f"Menu item not found: {item_id}")


class InsufficientStock(CafeError):
    def __init__(self, item_id, requested, available=None, name=None):
        self.item_id = item_id
        self.requested = requested
        self.available = available  # None when there is no inventory entry at all
        label = name if name else item_id
        if available is None:
            msg = f"Insufficient stock for item: {label} (not stocked)"
        else:
            msg = f"Insufficient stock for item: {label} (requested {requested}, available {available})"
        super().__init__(msg)


class PersistenceFailure(CafeError):
    """Save/load of a CSV file failed. The in-memory structures are untouched."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")

"""
CSV persistence for the menu index and inventory tree.

menu.csv:       id,name,price              (price with two decimals)
inventory.csv:  id,name,stock,threshold
"""

import csv
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from pathlib import Path

from cafeConfig import InventoryEntry
from cafeErrors import PersistenceFailure

logger = logging.getLogger(__name__)

MENU_HEADER = ["id", "name", "price"]
INVENTORY_HEADER = ["id", "name", "stock", "threshold"]
CENTS = Decimal("0.01")


def _clean_name(name):
    return name.replace(",", " ")


def _write_rows(path, header, rows):
    # Rows are fully rendered before the file is opened, so a bad value
    # never leaves a truncated file behind
    try:
        with open(path, 'w', newline='') as f:
            writer = csv.writer(f, lineterminator="\n", quoting=csv.QUOTE_NONE, quotechar=None)
            writer.writerow(header)
            writer.writerows(rows)
    except (OSError, csv.Error) as e:
        raise PersistenceFailure(path, getattr(e, 'strerror', None) or str(e)) from e


def save_menu(index, path):
    try:
        rows = [[entry.item_id, _clean_name(entry.name), entry.price.quantize(CENTS, rounding=ROUND_HALF_UP)]
                for entry in index.all_entries()]
    except InvalidOperation as e:
        raise PersistenceFailure(path, f"unwritable price: {e!r}") from e
    _write_rows(path, MENU_HEADER, rows)
    logger.info(f"Saved {len(rows)} menu items to {path}")


def save_inventory(tree, path):
    rows = [[item.item_id, _clean_name(item.name), item.stock, item.reorder_threshold]
            for item in tree.inorder()]
    _write_rows(path, INVENTORY_HEADER, rows)
    logger.info(f"Saved {len(rows)} inventory items to {path}")


def _read_rows(path, num_fields):
    """Yield (line_no, fields) for every data row; header skipped."""
    try:
        with open(path, 'r', newline='') as f:
            rows = list(csv.reader(f, quoting=csv.QUOTE_NONE))
    except (OSError, csv.Error) as e:
        raise PersistenceFailure(path, getattr(e, 'strerror', None) or str(e)) from e
    for line_no, row in enumerate(rows[1:], start=2):
        if len(row) < num_fields:
            continue
        # Anything past the last column stays part of it
        fields = row[:num_fields - 1] + [",".join(row[num_fields - 1:])]
        yield line_no, [part.strip() for part in fields]


def load_menu(index, path):
    """Load menu rows into the index. A missing file is a no-op."""
    if not Path(path).exists():
        logger.debug(f"No menu file at {path}, nothing to load")
        return 0
    loaded = 0
    for line_no, (item_id, name, price) in _read_rows(path, 3):
        try:
            index.insert(int(item_id), name, Decimal(price))
        except (ValueError, InvalidOperation) as e:
            raise PersistenceFailure(path, f"line {line_no}: {e}") from e
        loaded += 1
    logger.info(f"Loaded {loaded} menu items from {path}")
    return loaded


def load_inventory(tree, path):
    """Load inventory rows into the tree. A missing file is a no-op."""
    if not Path(path).exists():
        logger.debug(f"No inventory file at {path}, nothing to load")
        return 0
    loaded = 0
    for line_no, (item_id, name, stock, threshold) in _read_rows(path, 4):
        try:
            key = int(item_id)
            # InventoryEntry rejects negative stock/threshold
            tree.insert(key, InventoryEntry(key, name, int(stock), int(threshold)))
        except ValueError as e:
            raise PersistenceFailure(path, f"line {line_no}: {e}") from e
        loaded += 1
    logger.info(f"Loaded {loaded} inventory items from {path}")
    return loaded

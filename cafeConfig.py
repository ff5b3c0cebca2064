import random
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple


# --- A. Configuration Class ---
@dataclass
class CafeConfig:
    """Central configuration for cafe operations."""
    random_seed: int = 42
    # Debug flag - set to True to enable debug logging and state dumps
    debug_mode: bool = False
    debug_interval: float = 60.0  # Dump simulation state every N minutes

    # 1. Core structures
    menu_capacity: int = 127           # Buckets in the menu hash index (fixed)
    tax_rate: float = 0.08

    # Persistence
    menu_csv: str = "menu.csv"
    inventory_csv: str = "inventory.csv"

    # 2. Store hours
    opening_time: float = 7.0   # 7 AM
    closing_time: float = 19.0  # 7 PM
    last_order_time: float = closing_time - 0.5
    peak_hours: List[Tuple[float, float]] = field(default_factory=lambda: [(8, 10), (12, 14)])

    # 3. Arrivals (per hour -> converted to inter-arrival minutes)
    lambda_orders: float = 30.0
    peak_lambda_orders: float = 60.0
    lambda_reservations: float = 4.0

    # 4. Orders
    prob_priority: float = 0.15
    priority_levels: List[int] = field(default_factory=lambda: [0, 1, 2])  # 0 = most urgent
    max_lines_per_order: int = 3
    order_quantities: List[int] = field(default_factory=lambda: [1, 2, 3, 4])
    quantity_weights: List[float] = field(default_factory=lambda: [0.5, 0.3, 0.15, 0.05])

    # 5. Staffing & timing (minutes)
    num_baristas: int = 2
    mean_service_time: float = 2.0     # Per order line

    # 6. Reservations
    num_tables: int = 6
    reservation_durations: List[int] = field(default_factory=lambda: [30, 45, 60, 90])
    reservation_slot: int = 15         # Reservations start on slot boundaries
    max_booking_lead: int = 240        # Book up to N minutes ahead

    # 7. Inventory
    restock_interval: float = 60.0
    auto_restock: bool = True
    restock_quantity: int = 40

    def get_inter_arrival(self, rate_per_hr):
        if rate_per_hr <= 0: return float('inf')
        return random.expovariate(rate_per_hr / 60.0)

    def is_peak_hour(self, hour_float: float) -> bool:
        """True if the store-local hour falls inside any peak window."""
        if not self.peak_hours:
            return False
        return any(start <= hour_float < end for start, end in self.peak_hours)

    def order_rate_for_hour(self, hour_float: float) -> float:
        if self.is_peak_hour(hour_float):
            return self.peak_lambda_orders
        return self.lambda_orders


# --- B. Domain Objects ---
@dataclass
class MenuEntry:
    item_id: int
    name: str
    price: Decimal


@dataclass
class InventoryEntry:
    item_id: int
    name: str
    stock: int
    reorder_threshold: int

    def __post_init__(self):
        if self.stock < 0 or self.reorder_threshold < 0:
            raise ValueError(f"Stock and threshold must be non-negative: "
                             f"stock={self.stock}, threshold={self.reorder_threshold}")

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.reorder_threshold


@dataclass(frozen=True)
class OrderLine:
    item_id: int
    quantity: int


@dataclass
class Order:
    order_id: int
    customer: str
    lines: Tuple[OrderLine, ...]
    is_priority: bool = False
    created_at: float = 0.0


@dataclass(frozen=True)
class Reservation:
    table_id: int
    start: int
    end: int
    customer: str

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Reservation must start before it ends: [{self.start}, {self.end})")

    def overlaps(self, start, end) -> bool:
        # Half-open: touching endpoints do not overlap
        return self.start < end and start < self.end


@dataclass
class Bill:
    order_id: int
    customer: str
    items: List[str]
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    is_priority: bool = False
    created_at: Optional[float] = None


# Sample data for demos; menu ids align with inventory ids
SAMPLE_MENU = [
    (1, "Espresso", "350.00"),
    (2, "Cappuccino", "450.00"),
    (3, "Latte", "500.00"),
    (4, "Blueberry Muffin", "300.00"),
    (5, "Chocolate Croissant", "320.00"),
]

SAMPLE_INVENTORY = [
    (1, "Espresso Beans", 50, 10),
    (2, "Milk", 40, 8),
    (3, "Latte Mix", 30, 5),
    (4, "Muffins", 20, 5),
    (5, "Croissants", 15, 5),
]

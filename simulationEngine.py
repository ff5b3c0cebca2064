import heapq
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


# --- 1. Event Definitions ---
class EventType(Enum):
    ORDER_ARRIVAL = auto()        # Customer places an order at the counter/app
    SERVICE_DONE = auto()         # Barista finished preparing an order
    RESERVATION_REQUEST = auto()  # Someone asks for a table
    RESTOCK_CHECK = auto()        # Periodic low-stock sweep


@dataclass(order=True)
class Event:
    time: float
    # Tie-breaker so simultaneous events run in scheduling order
    id: int
    type: EventType = field(compare=False)
    payload: Any = field(default=None, compare=False)


# --- 2. The Base Engine ---
class SimulationEngine:
    def __init__(self):
        self.clock = 0.0
        self.event_list = []  # The Min-Heap
        self.event_count = 0  # Unique ID generator

    def schedule(self, delay: float, event_type: EventType, payload=None):
        """Add an event to the future."""
        timestamp = self.clock + delay
        self.event_count += 1
        heapq.heappush(self.event_list, Event(timestamp, self.event_count, event_type, payload))

    def run(self, max_time: float):
        while self.event_list and self.event_list[0].time <= max_time:
            # 1. Pop earliest event
            current_event = heapq.heappop(self.event_list)

            # 2. Advance Time
            self.clock = current_event.time

            # 3. Process
            self.handle_event(current_event)
        self.end()

    def handle_event(self, event):
        raise NotImplementedError("Subclasses must implement handle_event")

    def end(self):
        """Hook called once the run stops."""

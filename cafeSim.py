import logging
import random

from cafeConfig import CafeConfig
from cafeErrors import InsufficientStock, ItemNotFound
from orderDispatcher import OrderDispatcher
from simulationEngine import EventType, SimulationEngine
from statsRecorder import Statistics

logger = logging.getLogger(__name__)


class CafeSim(SimulationEngine):
    """
    Simulated business day. Orders arrive at random, go through the
    dispatcher's validation and queues, and baristas pull them priority
    first. The dispatcher is stamped with the simulation clock.
    """

    def __init__(self, config: CafeConfig, dispatcher: OrderDispatcher = None):
        super().__init__()
        self.cfg = config
        random.seed(self.cfg.random_seed)

        if dispatcher is None:
            dispatcher = OrderDispatcher(config)
        dispatcher.clock = lambda: self.clock
        self.dispatcher = dispatcher

        # --- Counters ---
        self.order_counter = 0
        self.reservation_counter = 0

        # --- Resources ---
        self.busy_baristas = 0

        # --- Stats ---
        self.stats = Statistics(config)

        # --- Debug ---
        self.last_debug_time = 0.0

    def start(self):
        """Seed the first arrival of every recurring event."""
        self.schedule_next_order()
        self.schedule_next_reservation()
        self.schedule(self.cfg.restock_interval, EventType.RESTOCK_CHECK)

    # ==========================
    # DEBUG FUNCTION
    # ==========================
    def debug_print_state(self):
        if not self.cfg.debug_mode:
            return
        if self.clock - self.last_debug_time < self.cfg.debug_interval:
            return
        self.last_debug_time = self.clock

        d = self.dispatcher
        logger.debug(f"Time = {self.clock:.2f} min ({self.clock/60:.2f} h) | "
                     f"normal queue {d.normal_queue.size()}, priority heap {d.priority_heap.size()}, "
                     f"baristas {self.busy_baristas}/{self.cfg.num_baristas}, "
                     f"tables booked {sum(len(t) for t in d.tables.values())}, "
                     f"low stock {[item.name for item in d.low_stock_alerts()]}")

    def handle_event(self, evt):
        self.debug_print_state()

        if evt.type == EventType.ORDER_ARRIVAL:
            self.process_order_arrival()
        elif evt.type == EventType.SERVICE_DONE:
            self.process_service_done(evt.payload)
        elif evt.type == EventType.RESERVATION_REQUEST:
            self.process_reservation_request()
        elif evt.type == EventType.RESTOCK_CHECK:
            self.process_restock_check()

    def current_hour(self):
        return self.clock / 60.0 + self.cfg.opening_time

    # ==========================
    # 1. ORDER ARRIVALS
    # ==========================
    def random_order_lines(self):
        menu_ids = [entry.item_id for entry in self.dispatcher.list_menu_items()]
        if not menu_ids:
            return []
        num_lines = random.randint(1, min(self.cfg.max_lines_per_order, len(menu_ids)))
        item_ids = random.sample(menu_ids, num_lines)
        return [(item_id, random.choices(self.cfg.order_quantities, weights=self.cfg.quantity_weights)[0])
                for item_id in item_ids]

    def process_order_arrival(self):
        self.schedule_next_order()

        self.order_counter += 1
        lines = self.random_order_lines()
        if not lines:
            return
        priority = None
        if random.random() < self.cfg.prob_priority:
            priority = random.choice(self.cfg.priority_levels)

        try:
            self.dispatcher.place_order(self.order_counter, f"Customer {self.order_counter}", lines, priority)
        except ItemNotFound:
            self.stats.record_rejected('item_not_found')
            return
        except InsufficientStock:
            self.stats.record_rejected('insufficient_stock')
            return
        self.stats.record_placed(priority is not None)
        self.try_start_service()

    # ==========================
    # 2. SERVICE (Baristas)
    # ==========================
    def try_start_service(self):
        while self.busy_baristas < self.cfg.num_baristas and self.dispatcher.pending_orders():
            bill = self.dispatcher.process_next_order()
            self.busy_baristas += 1
            self.stats.record_processed(bill, self.clock)
            duration = sum(random.expovariate(1.0 / self.cfg.mean_service_time) for _ in bill.items)
            self.stats.record_usage(duration)
            self.schedule(duration, EventType.SERVICE_DONE, bill)

    def process_service_done(self, bill):
        self.busy_baristas -= 1
        self.try_start_service()  # "Next!"

    # ==========================
    # 3. RESERVATIONS
    # ==========================
    def process_reservation_request(self):
        self.schedule_next_reservation()

        self.reservation_counter += 1
        slot = self.cfg.reservation_slot
        now = int(self.cfg.opening_time * 60 + self.clock)
        lead = random.randint(0, self.cfg.max_booking_lead // slot) * slot
        start = (now // slot + 1) * slot + lead
        end = start + random.choice(self.cfg.reservation_durations)
        table_id = random.randint(1, self.cfg.num_tables)

        booked = self.dispatcher.book_table(table_id, start, end, f"Guest {self.reservation_counter}")
        self.stats.record_booking(booked)

    # ==========================
    # 4. INVENTORY
    # ==========================
    def process_restock_check(self):
        if self.current_hour() + self.cfg.restock_interval / 60 < self.cfg.closing_time:
            self.schedule(self.cfg.restock_interval, EventType.RESTOCK_CHECK)

        low = self.dispatcher.low_stock_alerts()
        if not low:
            return
        self.stats.record_low_stock(low)
        for item in low:
            logger.info(f"[ALERT] {item.name} stock={item.stock} threshold={item.reorder_threshold}")
            if self.cfg.auto_restock:
                self.dispatcher.set_inventory(item.item_id, item.name,
                                              item.stock + self.cfg.restock_quantity,
                                              item.reorder_threshold)
                self.stats.record_restock()

    # --- Utility ---
    def schedule_next_order(self):
        hour = self.current_hour()
        if hour > self.cfg.last_order_time:
            return  # No more orders after last order time
        delay = self.cfg.get_inter_arrival(self.cfg.order_rate_for_hour(hour))
        if hour + delay / 60 >= self.cfg.last_order_time:
            return
        self.schedule(delay, EventType.ORDER_ARRIVAL)

    def schedule_next_reservation(self):
        hour = self.current_hour()
        delay = self.cfg.get_inter_arrival(self.cfg.lambda_reservations)
        if hour + delay / 60 >= self.cfg.closing_time:
            return
        self.schedule(delay, EventType.RESERVATION_REQUEST)

    def end(self):
        self.stats.record_time(self.clock)
        # Orders still waiting when the run stopped
        self.stats.record_queue_length('Normal queue', self.dispatcher.normal_queue.size())
        self.stats.record_queue_length('Priority heap', self.dispatcher.priority_heap.size())

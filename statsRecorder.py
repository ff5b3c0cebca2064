import numpy as np
from tabulate import tabulate


class Statistics:
    def __init__(self, config):
        self.cfg = config
        self.time = 0.0

        # --- Order Counters ---
        self.orders_placed = {'normal': 0, 'priority': 0}
        self.orders_processed = {'normal': 0, 'priority': 0}
        self.orders_rejected = {
            'item_not_found': 0,
            'insufficient_stock': 0,
        }

        # --- Financial Counters ---
        self.total_subtotal = 0.0
        self.total_tax = 0.0
        self.total_revenue = 0.0  # Subtotal + tax
        self.bill_totals = []

        # --- Time Tracking (lists for distributions) ---
        # Minutes between placement and a barista picking the order up
        self.wait_times = {'normal': [], 'priority': []}

        # --- Reservations ---
        self.bookings = {'accepted': 0, 'conflict': 0}

        # --- Inventory ---
        self.low_stock_alerts = 0
        self.restocks = 0
        self.low_stock_items = {}

        self.queue_lengths = {}
        self.busy_minutes_baristas = 0.0

    @staticmethod
    def _kind(is_priority):
        return 'priority' if is_priority else 'normal'

    def record_placed(self, is_priority):
        self.orders_placed[self._kind(is_priority)] += 1

    def record_rejected(self, reason):
        self.orders_rejected[reason] += 1

    def record_processed(self, bill, current_time):
        kind = self._kind(bill.is_priority)
        self.orders_processed[kind] += 1
        self.total_subtotal += float(bill.subtotal)
        self.total_tax += float(bill.tax)
        self.total_revenue += float(bill.total)
        self.bill_totals.append(float(bill.total))
        if bill.created_at is not None:
            self.wait_times[kind].append(current_time - bill.created_at)

    def record_booking(self, accepted):
        self.bookings['accepted' if accepted else 'conflict'] += 1

    def record_low_stock(self, items):
        self.low_stock_alerts += len(items)
        for item in items:
            self.low_stock_items[item.name] = item.stock

    def record_restock(self):
        self.restocks += 1

    def record_usage(self, duration):
        self.busy_minutes_baristas += duration

    def record_queue_length(self, queue_name, length):
        self.queue_lengths[queue_name] = length

    def record_time(self, time):
        self.time = time

    def generate_report(self, sim_duration):
        report = {}

        # A. Throughput
        report['orders_placed_total'] = sum(self.orders_placed.values())
        report['orders_placed_breakdown'] = self.orders_placed
        report['orders_processed_total'] = sum(self.orders_processed.values())
        report['orders_processed_breakdown'] = self.orders_processed
        report['orders_rejected_total'] = sum(self.orders_rejected.values())
        report['orders_rejected_breakdown'] = self.orders_rejected

        report['queue_lengths'] = sum(self.queue_lengths.values())
        report['queue_breakdown'] = self.queue_lengths

        # B. Wait Times (Avg + Tail)
        for kind, times in self.wait_times.items():
            if not times:
                report[f'wait_{kind}_avg'] = 0.0
                report[f'wait_{kind}_p90'] = 0.0
            else:
                report[f'wait_{kind}_avg'] = float(np.mean(times))
                report[f'wait_{kind}_p90'] = float(np.percentile(times, 90))

        # C. Utilization (Busy Time / (Duration * Capacity))
        available = sim_duration * self.cfg.num_baristas
        report['util_BARISTA'] = self.busy_minutes_baristas / available if available > 0 else 0.0

        # D. Money
        report['total_subtotal'] = round(self.total_subtotal, 2)
        report['total_tax'] = round(self.total_tax, 2)
        report['total_revenue'] = round(self.total_revenue, 2)
        report['avg_bill'] = float(np.mean(self.bill_totals)) if self.bill_totals else 0.0

        # E. Reservations & Inventory
        report['bookings_accepted'] = self.bookings['accepted']
        report['bookings_conflict'] = self.bookings['conflict']
        report['low_stock_alerts'] = self.low_stock_alerts
        report['low_stock_items'] = self.low_stock_items
        report['restocks'] = self.restocks
        report['time_simulated'] = self.time
        return report

    def print_table_report(self, report):
        table_data = []

        # Sorted so the table is easier to scan
        for key, value in sorted(report.items()):
            if isinstance(value, float):
                formatted_value = f"{value:.4f}"
            elif isinstance(value, dict):
                # e.g. {'normal': 10, ...} -> "normal: 10, ..."
                formatted_value = ", ".join([f"{k}: {v}" for k, v in value.items()])
            else:
                formatted_value = str(value)
            table_data.append([key, formatted_value])

        print("\n" + "="*40)
        print("      CAFE SIMULATION REPORT")
        print("="*40)
        print(tabulate(table_data, headers=["Metric", "Value"], tablefmt="grid"))

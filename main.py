import logging

from cafeConfig import CafeConfig
from cafeErrors import CafeError
from cafeSim import CafeSim
from orderDispatcher import OrderDispatcher


def hhmm(minutes):
    return f"{minutes // 60}:{minutes % 60:02d}"


def run_demo(config):
    cafe = OrderDispatcher(config)
    cafe.load_sample_data()

    print("=== MENU ===")
    for item in cafe.list_menu_items():
        print(f"{item.item_id:02d} | {item.name:<22} Rs {item.price:.2f}")

    print("\n=== RESERVATIONS ===")
    for start, end, customer in [(9*60, 10*60, "Ayesha"), (9*60+50, 10*60+30, "Bilal"),
                                 (10*60+30, 11*60+30, "Danish")]:
        booked = cafe.book_table(1, start, end, customer)
        print(f"Book T1 {hhmm(start)}-{hhmm(end)} -> {'OK' if booked else 'Conflict'}")

    print("\n=== PLACE ORDERS ===")
    orders = [
        (101, "Fatima", [(1, 2), (4, 1)], None),
        (102, "Hassan", [(2, 1), (3, 1)], 0),   # VIP
        (103, "Iram", [(5, 2)], 1),
        (104, "Javed", [(1, 1), (2, 1)], None),
        (105, "Kamran", [(9, 1)], None),        # not on the menu
    ]
    for order_id, customer, lines, priority in orders:
        try:
            cafe.place_order(order_id, customer, lines, priority)
            print(f"Order #{order_id} ({customer}) queued")
        except CafeError as e:
            print(f"Order #{order_id} ({customer}) rejected: {e}")

    print("\n=== PROCESSING ORDERS (Priority first) ===")
    while True:
        bill = cafe.process_next_order()
        if bill is None:
            break
        print(f"Bill for Order #{bill.order_id} ({bill.customer})")
        for item in bill.items:
            print(f"  - {item}")
        print(f"Subtotal: Rs {bill.subtotal}")
        print(f"TOTAL (incl. tax): Rs {bill.total}")
        print("-" * 32)

    print("\n=== LOW STOCK ALERTS ===")
    for item in cafe.low_stock_alerts():
        print(f"[ALERT] {item.name} stock={item.stock} threshold={item.reorder_threshold}")

    try:
        cafe.save_data()
        print("Data saved.")
    except CafeError as e:
        print(f"Save failed: {e}")


def run_scenario(config):
    sim = CafeSim(config)
    sim.dispatcher.load_sample_data()
    sim.start()

    print("\nStarting Simulation...")
    duration = (config.closing_time - config.opening_time) * 60
    sim.run(duration)

    report = sim.stats.generate_report(duration)
    sim.stats.print_table_report(report)


if __name__ == "__main__":
    config = CafeConfig()
    # config.debug_mode = True  # Log placements, bookings and periodic state
    logging.basicConfig(level=logging.DEBUG if config.debug_mode else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_demo(config)
    run_scenario(config)

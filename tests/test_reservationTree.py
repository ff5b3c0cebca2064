import random

import pytest

from cafeConfig import Reservation
from reservationTree import ReservationTree


def res(start, end, customer="Guest", table_id=1):
    return Reservation(table_id, start, end, customer)


def check_max_end(node):
    if node is None:
        return float('-inf')
    expected = max(node.end, check_max_end(node.left), check_max_end(node.right))
    assert node.max_end == expected
    return expected


def test_booking_scenario():
    tree = ReservationTree()
    assert tree.book(res(540, 600, "Ayesha"))
    assert not tree.book(res(590, 630, "Bilal"))
    assert tree.book(res(630, 690, "Danish"))
    assert [r.customer for r in tree.reservations()] == ["Ayesha", "Danish"]


def test_rejected_booking_leaves_tree_unchanged():
    tree = ReservationTree()
    tree.book(res(100, 200))
    before = tree.reservations()
    assert not tree.book(res(150, 160))
    assert tree.reservations() == before
    assert len(tree) == 1


def test_touching_endpoints_do_not_overlap():
    tree = ReservationTree()
    assert tree.book(res(100, 200))
    assert tree.book(res(200, 300))
    assert tree.book(res(50, 100))
    assert tree.find_overlaps(200, 201) == [res(200, 300)]


def test_find_overlaps_collects_all():
    tree = ReservationTree()
    for start in [500, 100, 300, 700, 0, 900]:
        tree.book(res(start, start + 60))
    found = sorted(r.start for r in tree.find_overlaps(50, 320))
    assert found == [0, 100, 300]
    assert tree.find_overlaps(1000, 1100) == []


def test_left_subtree_with_long_interval_is_found():
    tree = ReservationTree()
    tree.book(res(500, 510))
    tree.book(res(100, 400))
    tree.book(res(600, 610))
    assert not tree.book(res(350, 360))
    assert [r.start for r in tree.find_overlaps(350, 360)] == [100]


def test_random_bookings_never_overlap():
    rng = random.Random(5)
    tree = ReservationTree()
    for _ in range(500):
        start = rng.randint(0, 2000)
        candidate = res(start, start + rng.randint(1, 90))
        expected = not any(candidate.overlaps(r.start, r.end) for r in tree.reservations())
        assert tree.book(candidate) == expected
        check_max_end(tree.root)
    accepted = sorted(tree.reservations(), key=lambda r: r.start)
    for a, b in zip(accepted, accepted[1:]):
        assert a.end <= b.start


def test_increasing_starts_do_not_hit_recursion_limit():
    tree = ReservationTree()
    for start in range(0, 1500 * 10, 10):
        assert tree.book(res(start, start + 10))
    assert len(tree) == 1500
    assert len(tree.find_overlaps(0, 15000)) == 1500


def test_reservation_requires_start_before_end():
    with pytest.raises(ValueError):
        res(100, 100)

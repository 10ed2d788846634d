import logging
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from orders.models import Order
from orders.services import lifecycle


def _order(pk, table, status=Order.STATUS_PENDING, payment=Order.PAYMENT_PENDING,
           total="0.00", created=None, completed=None):
    now = timezone.now()
    return Order(
        pk=pk,
        table_number=table,
        status=status,
        payment_status=payment,
        total=Decimal(total),
        created_at=created or now,
        updated_at=created or now,
        completed_at=completed,
    )


def test_no_orders_means_every_table_free_and_zero_stats():
    occupancy = lifecycle.derive_table_occupancy([], 20)

    assert [t.table_number for t in occupancy] == list(range(1, 21))
    assert not any(t.occupied for t in occupancy)

    stats = lifecycle.compute_stats([])
    assert stats.active == 0
    assert stats.payment_pending == 0
    assert stats.total_revenue == Decimal("0.00")
    assert stats.today_revenue == Decimal("0.00")


def test_table_is_occupied_only_while_order_not_completed():
    orders = [
        _order(1, 3, Order.STATUS_PREPARING),
        _order(2, 7, Order.STATUS_COMPLETED, Order.PAYMENT_PAID),
    ]

    occupancy = {t.table_number: t for t in lifecycle.derive_table_occupancy(orders, 20)}

    assert occupancy[3].occupied and occupancy[3].order_id == 1
    assert not occupancy[7].occupied
    assert sum(t.occupied for t in occupancy.values()) == 1


def test_duplicate_active_orders_pick_newest_and_warn(caplog):
    now = timezone.now()
    orders = [
        _order(1, 4, created=now - timedelta(minutes=10)),
        _order(2, 4, Order.STATUS_READY, created=now),
    ]

    with caplog.at_level(logging.WARNING, logger="orders.services.lifecycle"):
        occupancy = lifecycle.derive_table_occupancy(orders, 20)

    assert occupancy[3].order_id == 2
    assert "2 active orders" in caplog.text


def test_orders_for_tables_beyond_count_are_ignored():
    occupancy = lifecycle.derive_table_occupancy([_order(1, 25)], 20)
    assert len(occupancy) == 20
    assert not any(t.occupied for t in occupancy)


def test_compute_stats_counts_and_revenue():
    today = timezone.now()
    last_week = today - timedelta(days=7)
    orders = [
        _order(1, 1, Order.STATUS_PENDING),
        _order(2, 2, Order.STATUS_PREPARING),
        _order(3, 3, Order.STATUS_READY),
        _order(4, 4, Order.STATUS_DELIVERED),
        _order(5, 5, Order.STATUS_DELIVERED),
        _order(6, 6, Order.STATUS_COMPLETED, Order.PAYMENT_PAID, "250.00", created=today),
        _order(7, 7, Order.STATUS_COMPLETED, Order.PAYMENT_PAID, "100.00", created=last_week),
        _order(8, 8, Order.STATUS_COMPLETED, Order.PAYMENT_PENDING, "80.00"),
    ]

    stats = lifecycle.compute_stats(orders, today=timezone.localdate())

    assert stats.active == 5
    assert (stats.pending, stats.preparing, stats.ready, stats.delivered) == (1, 1, 1, 2)
    assert stats.payment_pending == 2
    assert stats.total_revenue == Decimal("350.00")
    assert stats.today_revenue == Decimal("250.00")
    assert stats.as_dict()["total_revenue"] == "350.00"


def test_filter_orders_all_means_active():
    orders = [
        _order(1, 1, Order.STATUS_PENDING),
        _order(2, 2, Order.STATUS_READY),
        _order(3, 3, Order.STATUS_COMPLETED, Order.PAYMENT_PAID),
    ]

    assert [o.pk for o in lifecycle.filter_orders(orders, "all")] == [1, 2]
    assert [o.pk for o in lifecycle.filter_orders(orders, None)] == [1, 2]
    assert [o.pk for o in lifecycle.filter_orders(orders, "ready")] == [2]
    assert [o.pk for o in lifecycle.filter_orders(orders, "completed")] == [3]


def test_recently_completed_window():
    now = timezone.now()
    orders = [
        _order(1, 1, Order.STATUS_COMPLETED, Order.PAYMENT_PAID, completed=now - timedelta(hours=3)),
        _order(2, 2, Order.STATUS_COMPLETED, Order.PAYMENT_PAID, completed=now - timedelta(days=3)),
        _order(3, 3, Order.STATUS_COMPLETED, Order.PAYMENT_PAID, completed=now - timedelta(minutes=5)),
        _order(4, 4, Order.STATUS_DELIVERED),
    ]

    recent = lifecycle.recently_completed(orders, days=2, now=now)

    assert [o.pk for o in recent] == [3, 1]


def test_current_table_order_is_latest_active():
    now = timezone.now()
    orders = [
        _order(1, 9, Order.STATUS_COMPLETED, Order.PAYMENT_PAID, created=now),
        _order(2, 9, Order.STATUS_PENDING, created=now - timedelta(minutes=1)),
    ]

    assert lifecycle.current_table_order(orders, 9).pk == 2
    assert lifecycle.current_table_order(orders, 10) is None


@pytest.mark.django_db
def test_load_table_order_reads_latest_non_completed():
    from tests.factories import OrderFactory

    OrderFactory(table_number=6, status=Order.STATUS_COMPLETED, payment_status=Order.PAYMENT_PAID)
    active = OrderFactory(table_number=6, status=Order.STATUS_READY)

    assert lifecycle.load_table_order(6).pk == active.pk
    assert lifecycle.load_table_order(8) is None

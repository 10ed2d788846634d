"""
Order lifecycle: staff writes (status, payment) and the derived views the
dashboards render (active orders, table occupancy, revenue stats).

Writes are persisted first; live views learn about them from the change
broadcast and reload everything. The derived-view helpers are pure functions
over a list of orders so the same code serves REST, WebSocket snapshots and
the in-process store.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Iterable, List, Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from core.db import persistence_guard
from core.exceptions import InvalidTransition, NotFound, ValidationError
from core.tables import table_count as configured_table_count

from ..models import Order, OrderStatusHistory
from ..signals import order_paid, order_status_changed

logger = logging.getLogger(__name__)

STATUS_VALUES = [value for value, _ in Order.STATUS_CHOICES]
PAYMENT_METHODS = [value for value, _ in Order.PAYMENT_METHOD_CHOICES]
FILTER_ALL = "all"


def strict_transitions() -> bool:
    return bool(getattr(settings, "ORDERS_STRICT_TRANSITIONS", False))


# --- Reads -------------------------------------------------------------------

def orders_queryset():
    """Orders joined with their items and menu items, newest first."""
    return Order.objects.prefetch_related("items__menu_item").order_by("-created_at", "-id")


def load_orders() -> List[Order]:
    with persistence_guard("orders load"):
        return list(orders_queryset())


def load_table_order(table_number: int) -> Optional[Order]:
    """The latest non-completed order for a table, or None."""
    with persistence_guard("table order load"):
        return (
            orders_queryset()
            .filter(table_number=table_number)
            .exclude(status=Order.STATUS_COMPLETED)
            .first()
        )


def get_order(order_id) -> Order:
    try:
        return orders_queryset().get(pk=order_id)
    except (Order.DoesNotExist, ValueError, TypeError):
        raise NotFound("Order not found.")


def _lock_order(order_id) -> Order:
    try:
        return Order.objects.select_for_update().get(pk=order_id)
    except (Order.DoesNotExist, ValueError, TypeError):
        raise NotFound("Order not found.")


# --- Writes ------------------------------------------------------------------

def advance_status(order_id, new_status: str) -> Order:
    """
    Set an order's status. Any status may follow any other unless
    ORDERS_STRICT_TRANSITIONS is on, in which case only the next linear
    step is accepted. Moving to ``completed`` stamps ``completed_at``.
    """
    if new_status not in STATUS_VALUES:
        raise ValidationError(f"Unknown status '{new_status}'.", field="status")

    with persistence_guard("order status update"):
        with transaction.atomic():
            order = _lock_order(order_id)
            previous = order.status
            if strict_transitions() and order.next_status() != new_status:
                raise InvalidTransition(
                    f"Order #{order.pk} cannot move from {previous} to {new_status}.",
                    field="status",
                )

            order.status = new_status
            fields = ["status", "updated_at"]
            if new_status == Order.STATUS_COMPLETED:
                order.completed_at = timezone.now()
                fields.append("completed_at")
            order.save(update_fields=fields)

            OrderStatusHistory.objects.create(
                order=order,
                previous_status=previous,
                new_status=new_status,
                previous_payment_status=order.payment_status,
                new_payment_status=order.payment_status,
            )
            transaction.on_commit(lambda: order_status_changed.send(
                sender=Order, order=order, previous_status=previous, new_status=new_status,
            ))

    logger.info("Order %s status %s -> %s", order.pk, previous, new_status)
    return order


def record_payment(order_id, method: str) -> Order:
    """
    Mark a delivered order as paid and completed in one write.

    Only a ``delivered`` order whose payment is still pending can be paid;
    anything else raises InvalidTransition and nothing is written.
    """
    if method not in PAYMENT_METHODS:
        raise ValidationError(f"Unknown payment method '{method}'.", field="payment_method")

    with persistence_guard("order payment"):
        with transaction.atomic():
            order = _lock_order(order_id)
            if not order.awaiting_payment:
                raise InvalidTransition(
                    f"Order #{order.pk} is {order.status}/{order.payment_status}; "
                    "only delivered orders with pending payment can be paid.",
                    field="payment_status",
                )

            previous = order.status
            now = timezone.now()
            order.payment_status = Order.PAYMENT_PAID
            order.payment_method = method
            order.status = Order.STATUS_COMPLETED
            order.completed_at = now
            order.updated_at = now
            order.save(update_fields=[
                "payment_status", "payment_method", "status", "completed_at", "updated_at",
            ])

            OrderStatusHistory.objects.create(
                order=order,
                previous_status=previous,
                new_status=order.status,
                previous_payment_status=Order.PAYMENT_PENDING,
                new_payment_status=Order.PAYMENT_PAID,
                note=f"paid by {method}",
            )
            transaction.on_commit(lambda: order_paid.send(
                sender=Order, order=order, payment_method=method,
            ))

    logger.info("Order %s paid (%s), total=%s", order.pk, method, order.total)
    return order


# --- Derived views -----------------------------------------------------------

@dataclass
class TableOccupancy:
    table_number: int
    occupied: bool
    order: Optional[Order] = None

    @property
    def order_id(self) -> Optional[int]:
        return self.order.pk if self.order is not None else None


@dataclass
class OrderStats:
    active: int = 0
    pending: int = 0
    preparing: int = 0
    ready: int = 0
    delivered: int = 0
    payment_pending: int = 0
    total_revenue: Decimal = Decimal("0.00")
    today_revenue: Decimal = Decimal("0.00")

    def as_dict(self) -> dict:
        data = asdict(self)
        data["total_revenue"] = str(self.total_revenue)
        data["today_revenue"] = str(self.today_revenue)
        return data


def active_orders(orders: Iterable[Order]) -> List[Order]:
    return [o for o in orders if o.status != Order.STATUS_COMPLETED]


def filter_orders(orders: Iterable[Order], status_filter: Optional[str] = FILTER_ALL) -> List[Order]:
    """Staff dashboard filter: ``all`` means every active order."""
    if not status_filter or status_filter == FILTER_ALL:
        return active_orders(orders)
    if status_filter not in STATUS_VALUES:
        raise ValidationError(f"Unknown status '{status_filter}'.", field="status")
    return [o for o in orders if o.status == status_filter]


def _newest_first(orders: Iterable[Order]) -> List[Order]:
    return sorted(orders, key=lambda o: (o.created_at, o.pk or 0), reverse=True)


def current_table_order(orders: Iterable[Order], table_number: int) -> Optional[Order]:
    """The most recent non-completed order for a table, if any."""
    matches = _newest_first(
        o for o in orders if o.table_number == table_number and o.status != Order.STATUS_COMPLETED
    )
    return matches[0] if matches else None


def derive_table_occupancy(orders: Iterable[Order], table_count: Optional[int] = None) -> List[TableOccupancy]:
    """
    Occupancy for tables 1..N: a table is occupied while it has an order
    that is not completed. Several active orders on one table is tolerated;
    the newest wins and a warning is logged.
    """
    count = configured_table_count() if table_count is None else table_count
    by_table: dict[int, List[Order]] = {}
    for order in active_orders(orders):
        by_table.setdefault(order.table_number, []).append(order)

    result = []
    for number in range(1, count + 1):
        candidates = _newest_first(by_table.get(number, []))
        if len(candidates) > 1:
            logger.warning(
                "Table %s has %d active orders (%s); showing #%s",
                number, len(candidates), [o.pk for o in candidates], candidates[0].pk,
            )
        order = candidates[0] if candidates else None
        result.append(TableOccupancy(table_number=number, occupied=order is not None, order=order))
    return result


def compute_stats(orders: Iterable[Order], today=None) -> OrderStats:
    """Dashboard counters and revenue totals over the given orders."""
    today = today or timezone.localdate()
    stats = OrderStats()
    for order in orders:
        if order.status != Order.STATUS_COMPLETED:
            stats.active += 1
            if order.status in (
                Order.STATUS_PENDING, Order.STATUS_PREPARING, Order.STATUS_READY, Order.STATUS_DELIVERED,
            ):
                setattr(stats, order.status, getattr(stats, order.status) + 1)
        if order.status == Order.STATUS_DELIVERED and order.payment_status == Order.PAYMENT_PENDING:
            stats.payment_pending += 1
        if order.payment_status == Order.PAYMENT_PAID:
            stats.total_revenue += order.total
            if timezone.localtime(order.created_at).date() == today:
                stats.today_revenue += order.total
    return stats


def recently_completed(orders: Iterable[Order], days: Optional[int] = None, now=None) -> List[Order]:
    """Completed orders finished within the last ``days`` days, newest first."""
    if days is None:
        days = int(getattr(settings, "ORDERS_RECENT_COMPLETED_DAYS", 2))
    cutoff = (now or timezone.now()) - timedelta(days=days)
    done = [
        o for o in orders
        if o.status == Order.STATUS_COMPLETED and (o.completed_at or o.updated_at) >= cutoff
    ]
    return sorted(done, key=lambda o: o.completed_at or o.updated_at, reverse=True)

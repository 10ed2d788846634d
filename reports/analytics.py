# reports/analytics.py
"""
Analytics summary over the order history: today's revenue, average value of
completed orders, paid sales per hour today and sales by menu category.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List

from django.utils import timezone

from orders.models import Order

UNCATEGORIZED = "Uncategorized"
CENTS = Decimal("0.01")


@dataclass
class CategorySales:
    name: str
    revenue: Decimal = Decimal("0.00")
    quantity: int = 0


@dataclass
class AnalyticsSummary:
    date: object
    today_orders: int = 0
    today_revenue: Decimal = Decimal("0.00")
    completed_orders: int = 0
    average_order_value: Decimal = Decimal("0.00")
    hourly: List[dict] = field(default_factory=list)
    categories: List[CategorySales] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "today_orders": self.today_orders,
            "today_revenue": str(self.today_revenue),
            "completed_orders": self.completed_orders,
            "average_order_value": str(self.average_order_value),
            "hourly": [
                {"hour": row["hour"], "orders": row["orders"], "revenue": str(row["revenue"])}
                for row in self.hourly
            ],
            "categories": [
                {"name": c.name, "revenue": str(c.revenue), "quantity": c.quantity}
                for c in self.categories
            ],
        }


def hourly_sales(orders: Iterable[Order], day) -> List[dict]:
    """Paid orders created on ``day``, bucketed by local hour; empty hours omitted."""
    buckets: Dict[int, dict] = {}
    for order in orders:
        created = timezone.localtime(order.created_at)
        if created.date() != day or order.payment_status != Order.PAYMENT_PAID:
            continue
        row = buckets.setdefault(created.hour, {"hour": created.hour, "orders": 0, "revenue": Decimal("0.00")})
        row["orders"] += 1
        row["revenue"] += order.total
    return [buckets[hour] for hour in sorted(buckets)]


def category_sales(orders: Iterable[Order]) -> List[CategorySales]:
    """Line revenue and quantity per menu category, highest revenue first."""
    by_category: Dict[str, CategorySales] = {}
    for order in orders:
        for item in order.items.all():
            name = item.menu_item.category if item.menu_item is not None else UNCATEGORIZED
            entry = by_category.setdefault(name, CategorySales(name=name))
            entry.revenue += item.line_total
            entry.quantity += item.quantity
    return sorted(by_category.values(), key=lambda c: (-c.revenue, c.name))


def summarize(orders: Iterable[Order], today=None) -> AnalyticsSummary:
    orders = list(orders)
    today = today or timezone.localdate()
    todays = [o for o in orders if timezone.localtime(o.created_at).date() == today]
    completed = [o for o in orders if o.status == Order.STATUS_COMPLETED]

    summary = AnalyticsSummary(date=today)
    summary.today_orders = len(todays)
    summary.today_revenue = sum(
        (o.total for o in todays if o.payment_status == Order.PAYMENT_PAID), Decimal("0.00")
    )
    summary.completed_orders = len(completed)
    if completed:
        total = sum((o.total for o in completed), Decimal("0.00"))
        summary.average_order_value = (total / len(completed)).quantize(CENTS, rounding=ROUND_HALF_UP)
    summary.hourly = hourly_sales(todays, today)
    summary.categories = category_sales(orders)
    return summary

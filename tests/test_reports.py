from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from orders.models import Order
from reports.analytics import category_sales, hourly_sales, summarize
from tests.factories import MenuItemFactory, OrderFactory, OrderItemFactory


def _today_at(hour):
    return timezone.make_aware(datetime.combine(timezone.localdate(), datetime.min.time())) + timedelta(hours=hour)


@pytest.mark.django_db
def test_summary_today_revenue_and_average():
    OrderFactory(status=Order.STATUS_COMPLETED, payment_status=Order.PAYMENT_PAID,
                 total=Decimal("100.00"), created_at=_today_at(12))
    OrderFactory(status=Order.STATUS_COMPLETED, payment_status=Order.PAYMENT_PAID,
                 total=Decimal("201.00"), created_at=_today_at(12) - timedelta(days=3))
    OrderFactory(status=Order.STATUS_PENDING, total=Decimal("50.00"), created_at=_today_at(13))

    summary = summarize(Order.objects.prefetch_related("items__menu_item"))

    assert summary.today_orders == 2
    assert summary.today_revenue == Decimal("100.00")
    assert summary.completed_orders == 2
    assert summary.average_order_value == Decimal("150.50")


@pytest.mark.django_db
def test_hourly_sales_only_counts_paid_orders_of_the_day():
    day = timezone.localdate()
    OrderFactory(payment_status=Order.PAYMENT_PAID, status=Order.STATUS_COMPLETED,
                 total=Decimal("10.00"), created_at=_today_at(9))
    OrderFactory(payment_status=Order.PAYMENT_PAID, status=Order.STATUS_COMPLETED,
                 total=Decimal("15.00"), created_at=_today_at(9) + timedelta(minutes=30))
    OrderFactory(payment_status=Order.PAYMENT_PENDING, total=Decimal("99.00"), created_at=_today_at(11))

    rows = hourly_sales(Order.objects.all(), day)

    assert rows == [{"hour": 9, "orders": 2, "revenue": Decimal("25.00")}]


@pytest.mark.django_db
def test_category_sales_uses_line_prices():
    starter = MenuItemFactory(category="Starters", price=Decimal("100.00"))
    bread = MenuItemFactory(category="Breads", price=Decimal("50.00"))
    order = OrderFactory()
    OrderItemFactory(order=order, menu_item=starter, quantity=2)
    OrderItemFactory(order=order, menu_item=bread, quantity=1)
    OrderItemFactory(order=order, menu_item=None, item_name="Gone", price=Decimal("30.00"))

    rows = category_sales(Order.objects.prefetch_related("items__menu_item"))

    assert [(r.name, r.revenue, r.quantity) for r in rows] == [
        ("Starters", Decimal("200.00"), 2),
        ("Breads", Decimal("50.00"), 1),
        ("Uncategorized", Decimal("30.00"), 1),
    ]


@pytest.mark.django_db
def test_analytics_endpoint(api_client):
    OrderFactory(status=Order.STATUS_COMPLETED, payment_status=Order.PAYMENT_PAID, total=Decimal("80.00"))

    body = api_client.get("/api/reports/analytics/").json()

    assert body["today_revenue"] == "80.00"
    assert body["average_order_value"] == "80.00"
    assert body["completed_orders"] == 1
    assert body["date"] == timezone.localdate().isoformat()


@pytest.mark.django_db
def test_analytics_with_no_orders(api_client):
    body = api_client.get("/api/reports/analytics/").json()

    assert body["today_revenue"] == "0.00"
    assert body["average_order_value"] == "0.00"
    assert body["hourly"] == []
    assert body["categories"] == []

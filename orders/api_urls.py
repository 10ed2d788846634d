# orders/api_urls.py
from __future__ import annotations

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .api_views import CartViewSet, OrderViewSet, TableViewSet

router = DefaultRouter()
router.register(r"cart", CartViewSet, basename="cart")
router.register(r"orders", OrderViewSet, basename="order")
router.register(r"tables", TableViewSet, basename="table")

urlpatterns = [
    path("", include(router.urls)),
]

# Cart endpoints (session held, nothing persisted until submit):
# GET    /api/cart/                       - Current cart (rows, count, total)
# POST   /api/cart/add_item/              - Add {menu_item_id, quantity}
# POST   /api/cart/remove_item/           - Remove one row {cart_id}
# POST   /api/cart/clear/                 - Empty the cart
# POST   /api/cart/submit/                - Submit {table_number} -> order
#
# Order endpoints:
# GET    /api/orders/                     - All orders (status, payment_status, table_number filters)
# GET    /api/orders/{id}/                - One order with items
# POST   /api/orders/{id}/update_status/  - Set status
# POST   /api/orders/{id}/record_payment/ - Record payment {payment_method}
# GET    /api/orders/active/              - Active orders (?status=all|pending|...)
# GET    /api/orders/stats/               - Dashboard counters and revenue
# GET    /api/orders/recently_completed/  - Completed in the last 2 days
#
# Table endpoints:
# GET    /api/tables/                     - Occupancy and menu URL per table
# GET    /api/tables/{n}/                 - One table with its current order
# GET    /api/tables/{n}/order/           - Current order or null

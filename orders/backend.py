"""
The persistence collaborator behind RestaurantStore. All methods are
synchronous ORM calls; the store runs them off the event loop.
"""
from __future__ import annotations

from typing import List, Optional

from menu.models import MenuItem
from menu.services import menu_queryset

from .cart import Cart
from .models import Order
from .services import lifecycle
from .services.submission import submit_order


class DjangoBackend:
    def load_menu_items(self) -> List[MenuItem]:
        return list(menu_queryset())

    def load_orders(self) -> List[Order]:
        return lifecycle.load_orders()

    def load_table_order(self, table_number: int) -> Optional[Order]:
        return lifecycle.load_table_order(table_number)

    def submit_order(self, cart: Cart, table_number) -> Optional[Order]:
        return submit_order(cart, table_number)

    def advance_status(self, order_id, status: str) -> Order:
        return lifecycle.advance_status(order_id, status)

    def record_payment(self, order_id, method: str) -> Order:
        return lifecycle.record_payment(order_id, method)

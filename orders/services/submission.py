from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction

from core.db import persistence_guard
from core.exceptions import ValidationError
from core.tables import parse_table_number
from menu.models import MenuItem

from ..cart import Cart
from ..models import Order, OrderItem

logger = logging.getLogger(__name__)


def submit_order(cart: Cart, table_number) -> Optional[Order]:
    """Turn the cart into an order for ``table_number``.

    Does nothing and returns None when the cart is empty or no table is
    given. Otherwise the order and one line per distinct menu item and unit
    price (quantity = number of rows) are written in a single transaction, so
    ``sum(price * quantity) == total`` always holds. The cart is cleared only
    after the write commits; on failure it is left untouched.
    """
    if not cart or table_number in (None, ""):
        logger.debug("Order submit skipped (items=%d, table=%r)", len(cart), table_number)
        return None

    table = parse_table_number(table_number)
    lines = cart.grouped()
    total = cart.total()

    with persistence_guard("order submit"):
        with transaction.atomic():
            existing = MenuItem.objects.in_bulk([line["menu_item_id"] for line in lines])
            missing = [line["name"] for line in lines if line["menu_item_id"] not in existing]
            if missing:
                raise ValidationError(
                    f"No longer on the menu: {', '.join(missing)}.",
                    field="items",
                )

            order = Order.objects.create(
                table_number=table,
                status=Order.STATUS_PENDING,
                payment_status=Order.PAYMENT_PENDING,
                total=total,
            )
            for line in lines:
                OrderItem.objects.create(
                    order=order,
                    menu_item=existing[line["menu_item_id"]],
                    item_name=line["name"],
                    quantity=line["quantity"],
                    price=line["price"],
                )

    cart.clear()
    logger.info(
        "Order %s submitted for table %s: %d line(s), total=%s",
        order.pk, table, len(lines), total,
    )
    return order

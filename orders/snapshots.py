"""JSON payloads pushed to live views after every reload."""
from __future__ import annotations

from core.tables import menu_url, table_count

from .serializers import OrderSerializer, TableSerializer
from .services import lifecycle


def staff_snapshot(state) -> dict:
    orders = list(state.orders)
    return {
        "type": "snapshot",
        "orders": OrderSerializer(lifecycle.active_orders(orders), many=True).data,
        "recently_completed": OrderSerializer(lifecycle.recently_completed(orders), many=True).data,
        "stats": lifecycle.compute_stats(orders).as_dict(),
        "tables": TableSerializer(
            lifecycle.derive_table_occupancy(orders, table_count()), many=True
        ).data,
        "error": state.error,
    }


def table_snapshot(state, table_number: int) -> dict:
    order = state.current_table_order
    return {
        "type": "snapshot",
        "table_number": table_number,
        "menu_url": menu_url(table_number),
        "order": OrderSerializer(order).data if order is not None else None,
        "error": state.error,
    }

# orders/store.py
"""
Per-view restaurant state: an immutable snapshot, a pure reducer and a store
that dispatches actions and runs the async effects (loads and staff writes)
against an injected backend.

Read failures are logged and leave the previous snapshot in place. Write
failures propagate to the caller and leave state unchanged.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from channels.db import database_sync_to_async
from django.db import DatabaseError

from core.exceptions import PersistenceError

logger = logging.getLogger(__name__)

SET_MENU_ITEMS = "SET_MENU_ITEMS"
SET_ORDERS = "SET_ORDERS"
SET_LOADING = "SET_LOADING"
SET_CURRENT_TABLE_ORDER = "SET_CURRENT_TABLE_ORDER"
SET_ERROR = "SET_ERROR"


@dataclass(frozen=True)
class RestaurantState:
    menu_items: Tuple[Any, ...] = ()
    orders: Tuple[Any, ...] = ()
    current_table_order: Optional[Any] = None
    loading: bool = True
    error: Optional[str] = None


Action = Dict[str, Any]


def reduce(state: RestaurantState, action: Action) -> RestaurantState:
    kind = action.get("type")
    payload = action.get("payload")

    if kind == SET_MENU_ITEMS:
        return replace(state, menu_items=tuple(payload or ()))
    if kind == SET_ORDERS:
        return replace(state, orders=tuple(payload or ()), error=None)
    if kind == SET_LOADING:
        return replace(state, loading=bool(payload))
    if kind == SET_CURRENT_TABLE_ORDER:
        return replace(state, current_table_order=payload)
    if kind == SET_ERROR:
        return replace(state, error=payload)
    return state


class RestaurantStore:
    """
    One store per live view. ``table_number`` scopes the view to a single
    table (customer feed); without it the store tracks every order (staff).
    """

    def __init__(self, backend=None, *, table_number: Optional[int] = None):
        if backend is None:
            from .backend import DjangoBackend

            backend = DjangoBackend()
        self.backend = backend
        self.table_number = table_number
        self.state = RestaurantState()
        self._listeners: List[Callable[[RestaurantState], None]] = []

    def dispatch(self, action: Action) -> RestaurantState:
        self.state = reduce(self.state, action)
        for listener in list(self._listeners):
            listener(self.state)
        return self.state

    def subscribe(self, listener: Callable[[RestaurantState], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _call(self, method: str, *args):
        return await database_sync_to_async(getattr(self.backend, method))(*args)

    async def _read(self, method: str, *args):
        try:
            return True, await self._call(method, *args)
        except (PersistenceError, DatabaseError) as exc:
            logger.warning("Reload %s failed, keeping last snapshot: %s", method, exc)
            self.dispatch({"type": SET_ERROR, "payload": str(exc)})
            return False, None

    # --- loads ---------------------------------------------------------------

    async def load_menu_items(self) -> None:
        ok, items = await self._read("load_menu_items")
        if ok:
            self.dispatch({"type": SET_MENU_ITEMS, "payload": items})

    async def load_orders(self) -> None:
        try:
            ok, orders = await self._read("load_orders")
            if ok:
                self.dispatch({"type": SET_ORDERS, "payload": orders})
        finally:
            self.dispatch({"type": SET_LOADING, "payload": False})

    async def load_table_order(self, table_number: int) -> None:
        ok, order = await self._read("load_table_order", table_number)
        if ok:
            self.dispatch({"type": SET_CURRENT_TABLE_ORDER, "payload": order})

    async def refresh(self) -> RestaurantState:
        """Full reload of the order snapshot this view renders."""
        await self.load_orders()
        if self.table_number is not None:
            await self.load_table_order(self.table_number)
        return self.state

    # --- writes --------------------------------------------------------------
    # Each successful write is followed by a full reload, never a local patch.

    async def submit_order(self, cart, table_number):
        order = await self._call("submit_order", cart, table_number)
        if order is not None:
            await self.load_table_order(order.table_number)
            await self.load_orders()
        return order

    async def advance_status(self, order_id, status: str):
        order = await self._call("advance_status", order_id, status)
        await self.refresh()
        return order

    async def record_payment(self, order_id, method: str):
        order = await self._call("record_payment", order_id, method)
        await self.refresh()
        return order

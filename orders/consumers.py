from __future__ import annotations

import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.conf import settings

from core.exceptions import SubscriptionError, ValidationError
from core.tables import parse_table_number

from .snapshots import staff_snapshot, table_snapshot
from .store import RestaurantStore
from .sync import SyncBridge

logger = logging.getLogger(__name__)


class LiveOrdersConsumer(AsyncJsonWebsocketConsumer):
    """
    Base live view: owns a RestaurantStore and a SyncBridge for the life of
    the socket and pushes a JSON snapshot after connect and every reload.
    Clients may send ``{"action": "refresh"}`` to request a reload.
    """

    store_factory = RestaurantStore
    # None: no poll timer
    poll_interval = None

    def __init__(self, *args, store_factory=None, poll_interval=None, **kwargs):
        super().__init__(*args, **kwargs)
        if store_factory is not None:
            self.store_factory = store_factory
        if poll_interval is not None:
            self.poll_interval = poll_interval
        self.store = None
        self.bridge = None

    def create_store(self):
        return self.store_factory()

    def build_snapshot(self, state) -> dict:
        raise NotImplementedError

    async def connect(self):
        self.store = self.create_store()
        self.bridge = SyncBridge(
            self.store,
            self.channel_layer,
            self.channel_name,
            poll_interval=self.poll_interval,
            on_reload=self.push_snapshot,
        )
        await self.accept()
        try:
            await self.bridge.start()
        except SubscriptionError as exc:
            await self.send_json({"type": "error", "message": exc.message})

    async def disconnect(self, close_code):
        if self.bridge is not None:
            await self.bridge.stop()

    async def receive_json(self, content, **kwargs):
        if isinstance(content, dict) and content.get("action") == "refresh":
            self.bridge.notify()

    async def table_changed(self, event):
        # event = {"type": "table.changed", "data": {...}}; any change reloads everything
        self.bridge.notify()

    async def push_snapshot(self, state):
        payload = await database_sync_to_async(self.build_snapshot)(state)
        await self.send_json(payload)


class StaffDashboardConsumer(LiveOrdersConsumer):
    """All orders, stats and table occupancy; polls as a fallback."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.poll_interval is None:
            self.poll_interval = float(getattr(settings, "ORDERS_POLL_INTERVAL", 5))

    def build_snapshot(self, state) -> dict:
        return staff_snapshot(state)


class TableOrderConsumer(LiveOrdersConsumer):
    """
    One table's current order for the customer view. There is no poll
    fallback here, so a lost subscription leaves the view stale.
    """

    async def connect(self):
        try:
            self.table_number = parse_table_number(
                self.scope["url_route"]["kwargs"].get("table_number")
            )
        except ValidationError as exc:
            logger.info("Rejected table feed: %s", exc.message)
            await self.close(code=4400)
            return
        await super().connect()

    def create_store(self):
        return self.store_factory(table_number=self.table_number)

    def build_snapshot(self, state) -> dict:
        return table_snapshot(state, self.table_number)

from __future__ import annotations

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer

from orders.services.lifecycle import load_orders

from .analytics import summarize
from .receivers import REPORTS_GROUP


def _analytics_snapshot(topic=None) -> dict:
    return {"type": "analytics", "topic": topic, "summary": summarize(load_orders()).as_dict()}


class AnalyticsConsumer(AsyncJsonWebsocketConsumer):
    """
    Read-only analytics feed. Sends the summary on connect and again after
    every committed status change or payment broadcast to group "reports":
      {"type": "analytics", "topic": null|"order_status"|"order_paid", "summary": {...}}
    """

    async def connect(self):
        await self.channel_layer.group_add(REPORTS_GROUP, self.channel_name)
        await self.accept()
        await self.send_json(await database_sync_to_async(_analytics_snapshot)())

    async def disconnect(self, code):
        await self.channel_layer.group_discard(REPORTS_GROUP, self.channel_name)

    async def analytics_changed(self, event: dict):
        # event: {"type": "analytics.changed", "data": {"topic": ..., ...}}
        topic = event.get("data", {}).get("topic")
        await self.send_json(await database_sync_to_async(_analytics_snapshot)(topic))

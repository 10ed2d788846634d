from __future__ import annotations

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Order, OrderItem

logger = logging.getLogger(__name__)

ORDERS_GROUP = "orders"
ORDER_ITEMS_GROUP = "order_items"


def _send(group: str, event: dict) -> None:
    layer = get_channel_layer()
    if layer is None:
        return
    try:
        async_to_sync(layer.group_send)(group, {"type": "table.changed", "data": event})
    except Exception:
        # Broadcast failures must not break saves; live views still poll
        logger.warning("Change broadcast to %s failed: %s", group, event, exc_info=True)


def _broadcast_on_commit(group: str, event: dict) -> None:
    transaction.on_commit(lambda: _send(group, event))


@receiver(post_save, sender=Order)
def order_saved(sender, instance: Order, created: bool, **kwargs):
    _broadcast_on_commit(ORDERS_GROUP, {
        "table": "orders",
        "event": "insert" if created else "update",
        "id": instance.pk,
        "table_number": instance.table_number,
    })


@receiver(post_delete, sender=Order)
def order_deleted(sender, instance: Order, **kwargs):
    _broadcast_on_commit(ORDERS_GROUP, {
        "table": "orders",
        "event": "delete",
        "id": instance.pk,
        "table_number": instance.table_number,
    })


@receiver(post_save, sender=OrderItem)
def order_item_saved(sender, instance: OrderItem, created: bool, **kwargs):
    _broadcast_on_commit(ORDER_ITEMS_GROUP, {
        "table": "order_items",
        "event": "insert" if created else "update",
        "id": instance.pk,
        "order_id": instance.order_id,
    })


@receiver(post_delete, sender=OrderItem)
def order_item_deleted(sender, instance: OrderItem, **kwargs):
    _broadcast_on_commit(ORDER_ITEMS_GROUP, {
        "table": "order_items",
        "event": "delete",
        "id": instance.pk,
        "order_id": instance.order_id,
    })

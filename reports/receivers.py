from __future__ import annotations

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.dispatch import receiver

from orders.signals import order_paid, order_status_changed

logger = logging.getLogger(__name__)

REPORTS_GROUP = "reports"


def _broadcast(topic: str, data: dict) -> None:
    layer = get_channel_layer()
    if layer is None:
        return
    try:
        async_to_sync(layer.group_send)(
            REPORTS_GROUP,
            {"type": "analytics.changed", "data": {"topic": topic, **data}},
        )
    except Exception:
        # The write already committed; live analytics catch up on the next event
        logger.warning("Analytics broadcast %s failed: %s", topic, data, exc_info=True)


@receiver(order_status_changed)
def on_order_status_changed(sender, order=None, previous_status=None, new_status=None, **kwargs):
    _broadcast("order_status", {
        "order_id": order.pk,
        "previous_status": previous_status,
        "new_status": new_status,
    })


@receiver(order_paid)
def on_order_paid(sender, order=None, payment_method=None, **kwargs):
    _broadcast("order_paid", {"order_id": order.pk, "payment_method": payment_method})

from decimal import Decimal
from unittest import mock

import pytest
from asgiref.sync import async_to_sync
from channels.db import database_sync_to_async
from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator

from orders.models import Order
from orders.services import lifecycle
from reports.consumers import AnalyticsConsumer
from reports.receivers import REPORTS_GROUP
from tests.factories import OrderFactory


def _reports_channel():
    layer = get_channel_layer()
    channel = async_to_sync(layer.new_channel)()
    async_to_sync(layer.group_add)(REPORTS_GROUP, channel)
    return layer, channel


@pytest.mark.django_db
def test_payment_is_published_to_the_reports_group(django_capture_on_commit_callbacks):
    order = OrderFactory(status=Order.STATUS_DELIVERED, total=Decimal("90.00"))
    layer, channel = _reports_channel()

    with django_capture_on_commit_callbacks(execute=True):
        lifecycle.record_payment(order.pk, Order.METHOD_CASH)

    message = async_to_sync(layer.receive)(channel)
    assert message["type"] == "analytics.changed"
    assert message["data"] == {"topic": "order_paid", "order_id": order.pk, "payment_method": "cash"}


@pytest.mark.django_db
def test_status_change_is_published_to_the_reports_group(django_capture_on_commit_callbacks):
    order = OrderFactory()
    layer, channel = _reports_channel()

    with django_capture_on_commit_callbacks(execute=True):
        lifecycle.advance_status(order.pk, Order.STATUS_PREPARING)

    message = async_to_sync(layer.receive)(channel)
    assert message["data"] == {
        "topic": "order_status",
        "order_id": order.pk,
        "previous_status": "pending",
        "new_status": "preparing",
    }


@pytest.mark.django_db
def test_nothing_reaches_the_reports_group_before_commit():
    order = OrderFactory()
    with mock.patch("reports.receivers._broadcast") as broadcast:
        lifecycle.advance_status(order.pk, Order.STATUS_PREPARING)
    broadcast.assert_not_called()


@pytest.mark.django_db
def test_broadcast_failure_is_logged_not_raised(django_capture_on_commit_callbacks):
    order = OrderFactory()
    layer = mock.Mock()
    layer.group_send = mock.AsyncMock(side_effect=RuntimeError("layer down"))

    with mock.patch("reports.receivers.get_channel_layer", return_value=layer), \
            mock.patch("reports.receivers.logger") as logger:
        with django_capture_on_commit_callbacks(execute=True):
            lifecycle.advance_status(order.pk, Order.STATUS_PREPARING)

    order.refresh_from_db()
    assert order.status == Order.STATUS_PREPARING
    logger.warning.assert_called_once()


@pytest.mark.django_db(transaction=True)
def test_analytics_feed_pushes_summary_after_payment():
    order = OrderFactory(status=Order.STATUS_DELIVERED, total=Decimal("90.00"))

    async def scenario():
        communicator = WebsocketCommunicator(AnalyticsConsumer.as_asgi(), "/ws/reports/")
        connected, _ = await communicator.connect()
        assert connected
        first = await communicator.receive_json_from(timeout=3)

        await database_sync_to_async(lifecycle.record_payment)(order.pk, Order.METHOD_ONLINE)
        update = await communicator.receive_json_from(timeout=3)
        await communicator.disconnect()
        return first, update

    first, update = async_to_sync(scenario)()

    assert first["type"] == "analytics"
    assert first["topic"] is None
    assert first["summary"]["today_revenue"] == "0.00"

    assert update["topic"] == "order_paid"
    assert update["summary"]["today_revenue"] == "90.00"
    assert update["summary"]["completed_orders"] == 1

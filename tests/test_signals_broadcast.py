from unittest import mock

import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from orders.models import Order
from orders.signals_orders import ORDER_ITEMS_GROUP, ORDERS_GROUP
from tests.factories import OrderFactory, OrderItemFactory


@pytest.mark.django_db
def test_order_changes_are_published_to_the_orders_group(django_capture_on_commit_callbacks):
    layer = get_channel_layer()
    channel = async_to_sync(layer.new_channel)()
    async_to_sync(layer.group_add)(ORDERS_GROUP, channel)

    with django_capture_on_commit_callbacks(execute=True):
        order = OrderFactory(table_number=5)

    message = async_to_sync(layer.receive)(channel)
    assert message["type"] == "table.changed"
    assert message["data"] == {"table": "orders", "event": "insert", "id": order.pk, "table_number": 5}


@pytest.mark.django_db
def test_nothing_is_published_before_commit():
    with mock.patch("orders.signals_orders._send") as send:
        OrderFactory()
    send.assert_not_called()


@pytest.mark.django_db
def test_update_delete_and_item_events(django_capture_on_commit_callbacks):
    order = OrderFactory()

    with mock.patch("orders.signals_orders._send") as send:
        with django_capture_on_commit_callbacks(execute=True):
            item = OrderItemFactory(order=order)
            order.status = Order.STATUS_READY
            order.save()
            item.delete()

    events = [(call.args[0], call.args[1]["table"], call.args[1]["event"]) for call in send.call_args_list]
    assert (ORDER_ITEMS_GROUP, "order_items", "insert") in events
    assert (ORDERS_GROUP, "orders", "update") in events
    assert (ORDER_ITEMS_GROUP, "order_items", "delete") in events


@pytest.mark.django_db
def test_broadcast_failure_does_not_break_the_save(django_capture_on_commit_callbacks):
    layer = mock.Mock()
    layer.group_send = mock.AsyncMock(side_effect=ConnectionError("redis down"))

    with mock.patch("orders.signals_orders.get_channel_layer", return_value=layer):
        with django_capture_on_commit_callbacks(execute=True):
            order = OrderFactory()

    assert Order.objects.filter(pk=order.pk).exists()
    layer.group_send.assert_awaited()

from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync
from channels.db import database_sync_to_async
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from django.urls import path

from orders.cart import Cart
from orders.consumers import StaffDashboardConsumer, TableOrderConsumer
from orders.models import Order
from orders.services import lifecycle
from orders.services.submission import submit_order
from tests.factories import MenuItemFactory, OrderFactory


def _table_app():
    return URLRouter([
        path("ws/tables/<int:table_number>/", TableOrderConsumer.as_asgi()),
    ])


@pytest.mark.django_db(transaction=True)
def test_staff_feed_snapshot_then_reload_on_status_change():
    order = OrderFactory(table_number=3, status=Order.STATUS_DELIVERED, total=Decimal("90.00"))

    async def scenario():
        communicator = WebsocketCommunicator(
            StaffDashboardConsumer.as_asgi(poll_interval=60), "/ws/staff/"
        )
        connected, _ = await communicator.connect()
        assert connected
        first = await communicator.receive_json_from(timeout=3)

        await database_sync_to_async(lifecycle.record_payment)(order.pk, "online")
        second = await communicator.receive_json_from(timeout=3)
        await communicator.disconnect()
        return first, second

    first, second = async_to_sync(scenario)()

    assert first["type"] == "snapshot"
    assert [o["id"] for o in first["orders"]] == [order.pk]
    assert first["stats"]["payment_pending"] == 1
    assert [t["table_number"] for t in first["tables"] if t["occupied"]] == [3]

    assert second["orders"] == []
    assert second["stats"]["total_revenue"] == "90.00"
    assert [o["id"] for o in second["recently_completed"]] == [order.pk]
    assert not any(t["occupied"] for t in second["tables"])


@pytest.mark.django_db(transaction=True)
def test_table_feed_follows_its_own_order():
    item = MenuItemFactory(price=Decimal("100.00"))

    async def scenario():
        communicator = WebsocketCommunicator(_table_app(), "/ws/tables/5/")
        connected, _ = await communicator.connect()
        assert connected
        first = await communicator.receive_json_from(timeout=3)

        cart = Cart()
        cart.add(item, quantity=2)
        await database_sync_to_async(submit_order)(cart, 5)
        update = await communicator.receive_json_from(timeout=3)
        await communicator.disconnect()
        return first, update

    first, update = async_to_sync(scenario)()

    assert first["table_number"] == 5
    assert first["order"] is None
    assert first["menu_url"].endswith("/menu?table=5")
    assert update["order"]["table_number"] == 5
    assert update["order"]["total"] == "200.00"


@pytest.mark.django_db(transaction=True)
def test_refresh_request_reloads():
    async def scenario():
        communicator = WebsocketCommunicator(_table_app(), "/ws/tables/2/")
        await communicator.connect()
        await communicator.receive_json_from(timeout=3)
        await communicator.send_json_to({"action": "refresh"})
        again = await communicator.receive_json_from(timeout=3)
        await communicator.disconnect()
        return again

    assert async_to_sync(scenario)()["type"] == "snapshot"


@pytest.mark.django_db
def test_table_feed_rejects_unknown_table():
    async def scenario():
        communicator = WebsocketCommunicator(_table_app(), "/ws/tables/0/")
        connected, code = await communicator.connect()
        await communicator.disconnect()
        return connected, code

    connected, code = async_to_sync(scenario)()

    assert connected is False
    assert code == 4400

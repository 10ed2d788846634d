import factory
from decimal import Decimal

from orders import models as order_models
from .menu import MenuItemFactory


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = order_models.Order

    table_number = factory.Sequence(lambda n: n % 20 + 1)
    status = order_models.Order.STATUS_PENDING
    payment_status = order_models.Order.PAYMENT_PENDING
    total = Decimal("0.00")


class OrderItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = order_models.OrderItem

    order = factory.SubFactory(OrderFactory)
    menu_item = factory.SubFactory(MenuItemFactory)
    item_name = factory.SelfAttribute("menu_item.name")
    quantity = 1
    price = factory.SelfAttribute("menu_item.price")

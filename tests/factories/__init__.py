from .menu import MenuItemFactory, MenuItemRatingFactory
from .orders import OrderFactory, OrderItemFactory

__all__ = [
    "MenuItemFactory",
    "MenuItemRatingFactory",
    "OrderFactory",
    "OrderItemFactory",
]

# orders/cart.py
"""
The customer's cart. Each row is one unit of a menu item with its own
``cart_id``; adding three of a dish adds three rows. The cart lives in the
Django session and is never written to the orders tables.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

from django.http import HttpRequest

logger = logging.getLogger(__name__)

SESSION_KEY = "cart_v1"


def _new_cart_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class CartItem:
    menu_item_id: int
    name: str
    price: Decimal
    category: str = ""
    type: str = ""
    prep_time: int = 0
    cart_id: str = field(default_factory=_new_cart_id)

    @classmethod
    def from_menu_item(cls, item) -> "CartItem":
        return cls(
            menu_item_id=item.pk,
            name=item.name,
            price=Decimal(item.price),
            category=item.category,
            type=item.type,
            prep_time=item.prep_time,
        )

    def to_session(self) -> Dict[str, Any]:
        data = asdict(self)
        data["price"] = str(self.price)
        return data

    @classmethod
    def from_session(cls, data: Dict[str, Any]) -> "CartItem":
        return cls(
            menu_item_id=int(data["menu_item_id"]),
            name=str(data.get("name", "")),
            price=Decimal(str(data.get("price", "0"))),
            category=str(data.get("category", "")),
            type=str(data.get("type", "")),
            prep_time=int(data.get("prep_time") or 0),
            cart_id=str(data.get("cart_id") or _new_cart_id()),
        )


class Cart:
    """An ordered list of one-unit rows."""

    def __init__(self, items: Optional[Iterable[CartItem]] = None):
        self._items: List[CartItem] = list(items or [])

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    @property
    def items(self) -> List[CartItem]:
        return list(self._items)

    def add(self, item, quantity: int = 1) -> List[CartItem]:
        """Append ``quantity`` rows for ``item`` (a MenuItem or CartItem)."""
        if quantity < 1:
            return []
        template = item if isinstance(item, CartItem) else CartItem.from_menu_item(item)
        rows = [
            CartItem(
                menu_item_id=template.menu_item_id,
                name=template.name,
                price=template.price,
                category=template.category,
                type=template.type,
                prep_time=template.prep_time,
            )
            for _ in range(quantity)
        ]
        self._items.extend(rows)
        return rows

    def remove(self, cart_id: str) -> bool:
        """Remove the row with ``cart_id``; False when no row matched."""
        for idx, row in enumerate(self._items):
            if row.cart_id == cart_id:
                del self._items[idx]
                return True
        return False

    def clear(self) -> None:
        self._items.clear()

    def total(self) -> Decimal:
        return sum((row.price for row in self._items), Decimal("0.00"))

    def grouped(self) -> List[Dict[str, Any]]:
        """
        Rows aggregated per menu item and unit price, in first-added order.
        Rows added before and after a price change stay separate lines.
        """
        groups: Dict[Tuple[int, Decimal], Dict[str, Any]] = {}
        for row in self._items:
            key = (row.menu_item_id, row.price)
            group = groups.get(key)
            if group is None:
                groups[key] = {
                    "menu_item_id": row.menu_item_id,
                    "name": row.name,
                    "price": row.price,
                    "quantity": 1,
                }
            else:
                group["quantity"] += 1
        return list(groups.values())

    def to_session(self) -> List[Dict[str, Any]]:
        return [row.to_session() for row in self._items]

    @classmethod
    def from_session(cls, data: Any) -> "Cart":
        rows: List[CartItem] = []
        for raw in data or []:
            try:
                rows.append(CartItem.from_session(raw))
            except (KeyError, TypeError, ValueError, ArithmeticError):
                logger.warning("Dropping malformed cart row from session: %r", raw)
        return cls(rows)


class SessionCart:
    """Load / save a Cart on the request's session."""

    def __init__(self, request: HttpRequest):
        self.session = request.session
        self.cart = Cart.from_session(self.session.get(SESSION_KEY))

    def save(self) -> None:
        self.session[SESSION_KEY] = self.cart.to_session()
        self.session.modified = True

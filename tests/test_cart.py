from decimal import Decimal

import pytest

from orders.cart import Cart, CartItem


def _row(menu_item_id=1, price="100.00", name="Dosa"):
    return CartItem(menu_item_id=menu_item_id, name=name, price=Decimal(price))


def test_add_creates_one_row_per_unit_with_unique_cart_ids():
    cart = Cart()
    rows = cart.add(_row(), quantity=3)

    assert len(cart) == 3
    assert len({r.cart_id for r in rows}) == 3
    assert cart.total() == Decimal("300.00")


def test_remove_drops_exactly_one_matching_row():
    cart = Cart()
    first, second = cart.add(_row(), quantity=2)

    assert cart.remove(first.cart_id) is True
    assert [r.cart_id for r in cart] == [second.cart_id]
    assert cart.remove("missing") is False
    assert len(cart) == 1


@pytest.mark.parametrize("ops", [
    [("add", 1, "100.00"), ("add", 2, "150.00"), ("remove", 0)],
    [("add", 1, "10.50"), ("add", 1, "10.50"), ("add", 3, "0.00"), ("remove", 1), ("remove", 0)],
    [("add", 1, "99.99"), ("clear",), ("add", 2, "1.01")],
])
def test_length_and_total_always_match_rows(ops):
    cart = Cart()
    for op in ops:
        if op[0] == "add":
            cart.add(_row(menu_item_id=op[1], price=op[2]))
        elif op[0] == "remove":
            rows = cart.items
            if rows:
                cart.remove(rows[op[1] % len(rows)].cart_id)
        else:
            cart.clear()
        assert len(cart) == len(cart.items)
        assert cart.total() == sum((r.price for r in cart.items), Decimal("0.00"))


def test_clear_empties_cart_and_zeroes_total():
    cart = Cart()
    cart.add(_row(), quantity=4)
    cart.clear()

    assert len(cart) == 0
    assert not cart
    assert cart.total() == Decimal("0.00")


def test_grouped_aggregates_rows_per_menu_item():
    cart = Cart()
    cart.add(_row(1, "100.00", "Dosa"), quantity=2)
    cart.add(_row(2, "50.00", "Chai"))

    assert cart.grouped() == [
        {"menu_item_id": 1, "name": "Dosa", "price": Decimal("100.00"), "quantity": 2},
        {"menu_item_id": 2, "name": "Chai", "price": Decimal("50.00"), "quantity": 1},
    ]


def test_grouped_splits_rows_of_one_item_at_different_prices():
    cart = Cart()
    cart.add(_row(1, "100.00", "Dosa"), quantity=2)
    cart.add(_row(1, "120.00", "Dosa"))

    assert cart.grouped() == [
        {"menu_item_id": 1, "name": "Dosa", "price": Decimal("100.00"), "quantity": 2},
        {"menu_item_id": 1, "name": "Dosa", "price": Decimal("120.00"), "quantity": 1},
    ]


def test_session_round_trip_keeps_cart_ids_and_prices():
    cart = Cart()
    cart.add(_row(price="12.34"), quantity=2)

    restored = Cart.from_session(cart.to_session())

    assert [r.cart_id for r in restored] == [r.cart_id for r in cart]
    assert restored.total() == Decimal("24.68")


def test_malformed_session_rows_are_dropped():
    restored = Cart.from_session([{"name": "no id"}, _row().to_session()])
    assert len(restored) == 1

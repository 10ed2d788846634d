from rest_framework import serializers

from core.tables import menu_url
from menu.serializers import MenuItemSnapshotSerializer

from .models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    """
    An order line joined with its menu item. ``price`` is the unit price
    charged at order time, not the current menu price.
    """
    menu_item = MenuItemSnapshotSerializer(read_only=True, allow_null=True)
    name = serializers.CharField(source="display_name", read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "menu_item", "name", "quantity", "price", "line_total"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id", "table_number", "status", "payment_status", "payment_method",
            "total", "created_at", "updated_at", "completed_at", "items",
        ]
        read_only_fields = fields


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)


class PaymentSerializer(serializers.Serializer):
    payment_method = serializers.ChoiceField(choices=Order.PAYMENT_METHOD_CHOICES)


# --- Cart --------------------------------------------------------------------

class CartRowSerializer(serializers.Serializer):
    cart_id = serializers.CharField(read_only=True)
    menu_item_id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    category = serializers.CharField(read_only=True)
    type = serializers.CharField(read_only=True)
    prep_time = serializers.IntegerField(read_only=True)


class CartSerializer(serializers.Serializer):
    """Session cart: rows, row count and total."""

    @staticmethod
    def payload(cart) -> dict:
        return {
            "items": CartRowSerializer(cart.items, many=True).data,
            "count": len(cart),
            "total": str(cart.total()),
        }


class CartAddSerializer(serializers.Serializer):
    menu_item_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1, max_value=50, default=1)


class CartRemoveSerializer(serializers.Serializer):
    cart_id = serializers.CharField(max_length=64)


class SubmitOrderSerializer(serializers.Serializer):
    # Range is checked by core.tables.parse_table_number
    table_number = serializers.CharField(required=False, allow_blank=True, allow_null=True)


# --- Tables ------------------------------------------------------------------

class TableSerializer(serializers.Serializer):
    table_number = serializers.IntegerField()
    occupied = serializers.BooleanField()
    order_id = serializers.IntegerField(allow_null=True)
    menu_url = serializers.SerializerMethodField()

    def get_menu_url(self, obj):
        return menu_url(obj.table_number, self.context.get("origin"))

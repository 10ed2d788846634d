from rest_framework import serializers

from .models import CATEGORIES, MenuItem, MenuItemRating


class MenuItemSerializer(serializers.ModelSerializer):
    """
    Menu item as read by customers and edited by staff.
    """
    average_rating = serializers.DecimalField(
        source="rating_average", max_digits=3, decimal_places=2, read_only=True
    )
    image = serializers.URLField(required=False, allow_null=True, allow_blank=True, max_length=500)

    class Meta:
        model = MenuItem
        fields = [
            "id", "name", "description", "price", "category", "type",
            "available", "prep_time", "image",
            "average_rating", "rating_count",
            "created_at", "updated_at",
        ]
        read_only_fields = ["id", "average_rating", "rating_count", "created_at", "updated_at"]

    def validate_name(self, value):
        if not value or not value.strip():
            raise serializers.ValidationError("Name is required.")
        return value.strip()

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative.")
        return value

    def validate_prep_time(self, value):
        if value is None or value < 1:
            raise serializers.ValidationError("Preparation time must be at least 1 minute.")
        return value

    def validate_image(self, value):
        return value or None


class MenuItemSnapshotSerializer(serializers.ModelSerializer):
    """Compact item shape embedded in order lines and cart rows."""

    class Meta:
        model = MenuItem
        fields = ["id", "name", "price", "category", "type", "prep_time", "image"]
        read_only_fields = fields


class MenuItemRatingSerializer(serializers.ModelSerializer):
    class Meta:
        model = MenuItemRating
        fields = ["id", "menu_item", "rating", "comment", "created_at"]
        read_only_fields = ["id", "menu_item", "created_at"]

    def validate_rating(self, value):
        if not 1 <= value <= 5:
            raise serializers.ValidationError("Rating must be between 1 and 5.")
        return value


class MenuCategoriesSerializer(serializers.Serializer):
    categories = serializers.ListField(child=serializers.CharField())
    types = serializers.ListField(child=serializers.CharField())

    @classmethod
    def payload(cls):
        return cls({
            "categories": list(CATEGORIES),
            "types": [value for value, _ in MenuItem.TYPE_CHOICES],
        }).data

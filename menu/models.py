from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models, transaction
from django.db.models import Avg, Count
from django.utils import timezone
from django.utils.html import strip_tags


# Fixed category list shown in the menu filter and the staff menu editor
CATEGORY_CHOICES = [
    (name, name) for name in [
        "Sandvich",
        "Salads",
        "Burgers",
        "Bakes & Meals",
        "Choice of Pasta",
        "Pizza",
        "Extra Toppings",
        "Hearth Stone Special",
        "Soups",
        "Starters",
        "Main Course",
        "Noodles",
        "Rice",
        "Chats",
        "Subziyan",
        "Dals",
        "Breads",
        "Rice / Pulao / Biryanis / Raitas",
        "Dessert",
        "Meal For One (North Indian)",
        "South-Indian",
        "Dosas",
        "Uttapam",
        "Sweets",
        "Extra",
        "Fresh Juices",
        "Smoothies & Mocktails",
        "Ice Cream",
        "Sundaes",
        "Tea & Coffee",
        "Beverages",
    ]
]
CATEGORIES = [value for value, _ in CATEGORY_CHOICES]


class MenuItem(models.Model):
    """
    A dish or drink on the menu. Created, edited and deleted by staff; read by
    every customer view. Orders keep their own copy of the price, so editing
    an item never changes historical totals.
    """
    TYPE_VEG = "veg"
    TYPE_NON_VEG = "non-veg"
    TYPE_CHOICES = [
        (TYPE_VEG, "Veg"),
        (TYPE_NON_VEG, "Non-veg"),
    ]

    DEFAULT_PREP_TIME = 15

    name = models.CharField(
        max_length=200,
        help_text="Item name (HTML tags will be stripped)",
    )
    description = models.TextField(
        blank=True,
        max_length=1000,
        help_text="Item description (HTML tags will be stripped)",
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[
            MinValueValidator(Decimal("0.00")),
            MaxValueValidator(Decimal("99999.99")),
        ],
        help_text="Unit price (0.00 - 99999.99)",
    )
    category = models.CharField(
        max_length=64,
        choices=CATEGORY_CHOICES,
        db_index=True,
    )
    type = models.CharField(
        max_length=8,
        choices=TYPE_CHOICES,
        default=TYPE_VEG,
        help_text="Veg / non-veg marker",
    )
    available = models.BooleanField(
        default=True,
        db_index=True,
        help_text="Unavailable items are hidden from the customer menu",
    )
    prep_time = models.PositiveIntegerField(
        default=DEFAULT_PREP_TIME,
        validators=[MinValueValidator(1), MaxValueValidator(480)],
        help_text="Preparation time in minutes",
    )
    image = models.URLField(
        max_length=500,
        blank=True,
        null=True,
        help_text="Optional image URL",
    )

    rating_average = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(0), MaxValueValidator(5)],
        help_text="Average customer rating (0.00-5.00)",
    )
    rating_count = models.PositiveIntegerField(
        default=0,
        help_text="Number of ratings received",
    )

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "menu_items"
        verbose_name = "Menu Item"
        verbose_name_plural = "Menu Items"
        ordering = ["category", "name"]
        indexes = [
            models.Index(fields=["available", "category"], name="menu_items_avail_cat_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="menu_item_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(prep_time__gte=1),
                name="menu_item_prep_time_positive",
            ),
        ]

    def clean(self):
        super().clean()

        if self.name:
            self.name = strip_tags(self.name).strip()
            if not self.name:
                raise ValidationError({"name": "Item name cannot be empty after removing HTML tags."})

        if self.description:
            self.description = strip_tags(self.description).strip()

        if self.image == "":
            self.image = None

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.name

    @transaction.atomic
    def refresh_rating(self, save: bool = True) -> None:
        """Recompute rating_average / rating_count from stored ratings."""
        agg = self.ratings.aggregate(avg=Avg("rating"), count=Count("id"))
        avg = agg["avg"] or 0
        self.rating_average = Decimal(str(avg)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        self.rating_count = agg["count"] or 0
        if save:
            super().save(update_fields=["rating_average", "rating_count", "updated_at"])


class MenuItemRating(models.Model):
    """One customer's 1-5 star rating of a menu item."""

    menu_item = models.ForeignKey(
        MenuItem,
        on_delete=models.CASCADE,
        related_name="ratings",
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    comment = models.TextField(blank=True, max_length=500)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "menu_item_ratings"
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rating__gte=1) & models.Q(rating__lte=5),
                name="menu_item_rating_range",
            ),
        ]

    def clean(self):
        super().clean()
        if self.comment:
            self.comment = strip_tags(self.comment).strip()

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.menu_item_id}: {self.rating}/5"

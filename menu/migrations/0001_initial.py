import decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import menu.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(help_text="Item name (HTML tags will be stripped)", max_length=200)),
                ("description", models.TextField(blank=True, help_text="Item description (HTML tags will be stripped)", max_length=1000)),
                ("price", models.DecimalField(
                    decimal_places=2,
                    help_text="Unit price (0.00 - 99999.99)",
                    max_digits=10,
                    validators=[
                        django.core.validators.MinValueValidator(decimal.Decimal("0.00")),
                        django.core.validators.MaxValueValidator(decimal.Decimal("99999.99")),
                    ],
                )),
                ("category", models.CharField(choices=menu.models.CATEGORY_CHOICES, db_index=True, max_length=64)),
                ("type", models.CharField(choices=[("veg", "Veg"), ("non-veg", "Non-veg")], default="veg", help_text="Veg / non-veg marker", max_length=8)),
                ("available", models.BooleanField(db_index=True, default=True, help_text="Unavailable items are hidden from the customer menu")),
                ("prep_time", models.PositiveIntegerField(
                    default=15,
                    help_text="Preparation time in minutes",
                    validators=[
                        django.core.validators.MinValueValidator(1),
                        django.core.validators.MaxValueValidator(480),
                    ],
                )),
                ("image", models.URLField(blank=True, help_text="Optional image URL", max_length=500, null=True)),
                ("rating_average", models.DecimalField(
                    decimal_places=2,
                    default=decimal.Decimal("0.00"),
                    help_text="Average customer rating (0.00-5.00)",
                    max_digits=3,
                    validators=[
                        django.core.validators.MinValueValidator(0),
                        django.core.validators.MaxValueValidator(5),
                    ],
                )),
                ("rating_count", models.PositiveIntegerField(default=0, help_text="Number of ratings received")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Menu Item",
                "verbose_name_plural": "Menu Items",
                "db_table": "menu_items",
                "ordering": ["category", "name"],
                "indexes": [models.Index(fields=["available", "category"], name="menu_items_avail_cat_idx")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(price__gte=0), name="menu_item_price_non_negative"),
                    models.CheckConstraint(condition=models.Q(prep_time__gte=1), name="menu_item_prep_time_positive"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MenuItemRating",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("rating", models.PositiveSmallIntegerField(validators=[
                    django.core.validators.MinValueValidator(1),
                    django.core.validators.MaxValueValidator(5),
                ])),
                ("comment", models.TextField(blank=True, max_length=500)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("menu_item", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="ratings", to="menu.menuitem")),
            ],
            options={
                "db_table": "menu_item_ratings",
                "ordering": ["-created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("rating__gte", 1), ("rating__lte", 5)),
                        name="menu_item_rating_range",
                    ),
                ],
            },
        ),
    ]

import decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import orders.models


STATUS_CHOICES = [
    ("pending", "Pending"),
    ("preparing", "Preparing"),
    ("ready", "Ready"),
    ("delivered", "Delivered"),
    ("completed", "Completed"),
]
PAYMENT_STATUS_CHOICES = [("pending", "Pending"), ("paid", "Paid")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("menu", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("table_number", models.PositiveSmallIntegerField(
                    db_index=True,
                    help_text="Table the order was placed from",
                    validators=[
                        django.core.validators.MinValueValidator(1),
                        orders.models.validate_table_number,
                    ],
                )),
                ("status", models.CharField(choices=STATUS_CHOICES, db_index=True, default="pending", max_length=16)),
                ("payment_status", models.CharField(choices=PAYMENT_STATUS_CHOICES, db_index=True, default="pending", max_length=16)),
                ("payment_method", models.CharField(
                    blank=True,
                    choices=[("cash", "Cash"), ("online", "Online")],
                    help_text="Set when payment is recorded",
                    max_length=16,
                    null=True,
                )),
                ("total", models.DecimalField(
                    decimal_places=2,
                    default=decimal.Decimal("0.00"),
                    help_text="Sum of line items at submission",
                    max_digits=10,
                    validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.00"))],
                )),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "orders",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["table_number", "status"], name="orders_table_status_idx")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(total__gte=0), name="order_total_non_negative"),
                    models.CheckConstraint(condition=models.Q(table_number__gte=1), name="order_table_number_positive"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("item_name", models.CharField(blank=True, max_length=200)),
                ("quantity", models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ("price", models.DecimalField(
                    decimal_places=2,
                    help_text="Unit price at order time",
                    max_digits=10,
                    validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.00"))],
                )),
                ("menu_item", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="order_items",
                    to="menu.menuitem",
                )),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="orders.order")),
            ],
            options={
                "db_table": "order_items",
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(quantity__gte=1), name="order_item_quantity_positive"),
                    models.CheckConstraint(condition=models.Q(price__gte=0), name="order_item_price_non_negative"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderStatusHistory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("previous_status", models.CharField(blank=True, choices=STATUS_CHOICES, max_length=16)),
                ("new_status", models.CharField(choices=STATUS_CHOICES, max_length=16)),
                ("previous_payment_status", models.CharField(blank=True, choices=PAYMENT_STATUS_CHOICES, max_length=16)),
                ("new_payment_status", models.CharField(blank=True, choices=PAYMENT_STATUS_CHOICES, max_length=16)),
                ("note", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="status_history", to="orders.order")),
            ],
            options={
                "db_table": "order_status_history",
                "ordering": ["-created_at", "-id"],
                "verbose_name_plural": "Order status history",
            },
        ),
    ]

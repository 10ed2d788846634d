from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from core.tables import table_count


def validate_table_number(value):
    """Reject table numbers outside 1..RESTAURANT_TABLE_COUNT."""
    if not 1 <= int(value) <= table_count():
        raise ValidationError(
            f"Table number must be between 1 and {table_count()}.",
            code="table_range",
        )


class Order(models.Model):
    """
    One table's order. Created by customer submission; every later change
    (status, payment) is a staff action. ``total`` is fixed at submission.
    """
    STATUS_PENDING = "pending"
    STATUS_PREPARING = "preparing"
    STATUS_READY = "ready"
    STATUS_DELIVERED = "delivered"
    STATUS_COMPLETED = "completed"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_PREPARING, "Preparing"),
        (STATUS_READY, "Ready"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_COMPLETED, "Completed"),
    ]

    # Linear workflow: pending -> preparing -> ready -> delivered -> completed
    STATUS_FLOW = [
        STATUS_PENDING,
        STATUS_PREPARING,
        STATUS_READY,
        STATUS_DELIVERED,
        STATUS_COMPLETED,
    ]

    PAYMENT_PENDING = "pending"
    PAYMENT_PAID = "paid"
    PAYMENT_STATUS_CHOICES = [
        (PAYMENT_PENDING, "Pending"),
        (PAYMENT_PAID, "Paid"),
    ]

    METHOD_CASH = "cash"
    METHOD_ONLINE = "online"
    PAYMENT_METHOD_CHOICES = [
        (METHOD_CASH, "Cash"),
        (METHOD_ONLINE, "Online"),
    ]

    table_number = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), validate_table_number],
        db_index=True,
        help_text="Table the order was placed from",
    )
    status = models.CharField(
        max_length=16,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
        db_index=True,
    )
    payment_status = models.CharField(
        max_length=16,
        choices=PAYMENT_STATUS_CHOICES,
        default=PAYMENT_PENDING,
        db_index=True,
    )
    payment_method = models.CharField(
        max_length=16,
        choices=PAYMENT_METHOD_CHOICES,
        blank=True,
        null=True,
        help_text="Set when payment is recorded",
    )
    total = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Sum of line items at submission",
    )

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["table_number", "status"], name="orders_table_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total__gte=0),
                name="order_total_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(table_number__gte=1),
                name="order_table_number_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"Order #{self.pk} (table {self.table_number}, {self.status})"

    @property
    def is_active(self) -> bool:
        return self.status != self.STATUS_COMPLETED

    @property
    def awaiting_payment(self) -> bool:
        return self.status == self.STATUS_DELIVERED and self.payment_status == self.PAYMENT_PENDING

    def next_status(self) -> str | None:
        """The following step in the linear workflow, or None at the end."""
        try:
            idx = self.STATUS_FLOW.index(self.status)
        except ValueError:
            return None
        return self.STATUS_FLOW[idx + 1] if idx + 1 < len(self.STATUS_FLOW) else None

    def items_total(self) -> Decimal:
        return sum((item.line_total for item in self.items.all()), Decimal("0.00"))


class OrderItem(models.Model):
    """A line of an order: unit price and name are copied at order time."""

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
    )
    menu_item = models.ForeignKey(
        "menu.MenuItem",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )
    item_name = models.CharField(max_length=200, blank=True)
    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Unit price at order time",
    )

    class Meta:
        db_table = "order_items"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_item_quantity_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="order_item_price_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.quantity} x {self.display_name}"

    @property
    def display_name(self) -> str:
        if self.menu_item_id and self.menu_item is not None:
            return self.menu_item.name
        return self.item_name or "Deleted item"

    @property
    def line_total(self) -> Decimal:
        return (self.price or Decimal("0.00")) * self.quantity


class OrderStatusHistory(models.Model):
    """Audit trail: one row per lifecycle write."""

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="status_history",
    )
    previous_status = models.CharField(max_length=16, choices=Order.STATUS_CHOICES, blank=True)
    new_status = models.CharField(max_length=16, choices=Order.STATUS_CHOICES)
    previous_payment_status = models.CharField(
        max_length=16, choices=Order.PAYMENT_STATUS_CHOICES, blank=True
    )
    new_payment_status = models.CharField(
        max_length=16, choices=Order.PAYMENT_STATUS_CHOICES, blank=True
    )
    note = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "order_status_history"
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "Order status history"

    def __str__(self) -> str:
        return f"#{self.order_id}: {self.previous_status or '-'} -> {self.new_status}"

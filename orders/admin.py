from __future__ import annotations

import csv

from django.contrib import admin
from django.http import HttpResponse

from core.exceptions import TablesideError

from .models import Order, OrderItem, OrderStatusHistory
from .services import lifecycle


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    raw_id_fields = ("menu_item",)
    readonly_fields = ("item_name", "quantity", "price")


class OrderStatusHistoryInline(admin.TabularInline):
    model = OrderStatusHistory
    extra = 0
    can_delete = False
    readonly_fields = (
        "previous_status", "new_status",
        "previous_payment_status", "new_payment_status",
        "note", "created_at",
    )


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "id", "table_number", "status", "payment_status", "payment_method",
        "total", "created_at", "completed_at",
    )
    list_filter = ("status", "payment_status", "payment_method")
    search_fields = ("id", "table_number")
    date_hierarchy = "created_at"
    readonly_fields = ("total", "created_at", "updated_at", "completed_at")
    inlines = [OrderItemInline, OrderStatusHistoryInline]

    # ---- CSV Export and Cash Payment ----
    actions = ["export_sales_csv", "record_cash_payment"]

    def export_sales_csv(self, request, queryset):
        response = HttpResponse(content_type="text/csv")
        response["Content-Disposition"] = 'attachment; filename="sales.csv"'
        writer = csv.writer(response)
        writer.writerow([
            "Order ID", "Created At", "Table",
            "Status", "Payment", "Method", "Total",
        ])
        for o in queryset:
            writer.writerow([
                o.id,
                o.created_at,
                o.table_number,
                o.status,
                o.payment_status,
                o.payment_method or "",
                str(o.total),
            ])
        return response
    export_sales_csv.short_description = "Export Sales (CSV)"

    def record_cash_payment(self, request, queryset):
        """Record a cash payment for each selected delivered order."""
        paid = skipped = 0
        for o in queryset:
            try:
                lifecycle.record_payment(o.pk, Order.METHOD_CASH)
                paid += 1
            except TablesideError:
                skipped += 1
        self.message_user(
            request,
            f"Recorded cash payments for {paid} order(s); skipped {skipped}",
            level=admin.messages.INFO,
        )
    record_cash_payment.short_description = "Record Cash Payment"


@admin.register(OrderStatusHistory)
class OrderStatusHistoryAdmin(admin.ModelAdmin):
    list_display = ("order", "previous_status", "new_status", "new_payment_status", "created_at")
    list_filter = ("new_status",)
    list_select_related = ("order",)

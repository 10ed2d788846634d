from django.contrib import admin, messages

from .models import MenuItem, MenuItemRating


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "name",
        "category",
        "type",
        "price",
        "available",
        "prep_time",
        "rating_average",
        "rating_count",
    )
    list_filter = ("available", "category", "type")
    search_fields = ("name", "description")
    ordering = ("category", "name")
    readonly_fields = ("rating_average", "rating_count", "created_at", "updated_at")
    actions = ("mark_available", "mark_unavailable")

    @admin.action(description="Show selected items on the menu")
    def mark_available(self, request, queryset):
        updated = queryset.update(available=True)
        self.message_user(request, f"{updated} item(s) shown.", messages.SUCCESS)

    @admin.action(description="Hide selected items from the menu")
    def mark_unavailable(self, request, queryset):
        updated = queryset.update(available=False)
        self.message_user(request, f"{updated} item(s) hidden.", messages.SUCCESS)


@admin.register(MenuItemRating)
class MenuItemRatingAdmin(admin.ModelAdmin):
    list_display = ("id", "menu_item", "rating", "created_at")
    list_filter = ("rating",)
    search_fields = ("menu_item__name", "comment")
    list_select_related = ("menu_item",)

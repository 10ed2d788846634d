# menu/services.py
"""
Menu management writes. Every write goes through ``persistence_guard`` so
the API answers a rejected write with a retry prompt instead of a 500.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

from django.db import transaction
from django.db.models import Q, QuerySet

from core.db import persistence_guard
from core.exceptions import NotFound, ValidationError

from .models import CATEGORIES, MenuItem, MenuItemRating

logger = logging.getLogger(__name__)


def menu_queryset(
    *,
    include_unavailable: bool = False,
    category: Optional[str] = None,
    item_type: Optional[str] = None,
    search: Optional[str] = None,
) -> QuerySet:
    """Menu items as the customer menu filters them (category + free text)."""
    qs = MenuItem.objects.all()
    if not include_unavailable:
        qs = qs.filter(available=True)
    if category and category != "all":
        if category not in CATEGORIES:
            raise ValidationError(f"Unknown category '{category}'.", field="category")
        qs = qs.filter(category=category)
    if item_type:
        qs = qs.filter(type=item_type)
    if search:
        term = search.strip()
        if term:
            qs = qs.filter(Q(name__icontains=term) | Q(description__icontains=term))
    return qs.order_by("category", "name")


def get_menu_item(item_id: Any) -> MenuItem:
    try:
        return MenuItem.objects.get(pk=item_id)
    except (MenuItem.DoesNotExist, ValueError, TypeError):
        raise NotFound("Menu item not found.")


def create_menu_item(data: Dict[str, Any]) -> MenuItem:
    with persistence_guard("menu item create"):
        item = MenuItem.objects.create(**data)
    logger.info("Menu item created: %s (%s)", item.name, item.pk)
    return item


def update_menu_item(item: MenuItem, updates: Dict[str, Any]) -> MenuItem:
    for attr, value in updates.items():
        setattr(item, attr, value)
    with persistence_guard("menu item update"):
        item.save()
    logger.info("Menu item updated: %s fields=%s", item.pk, sorted(updates))
    return item


def delete_menu_item(item: MenuItem) -> None:
    pk = item.pk
    with persistence_guard("menu item delete"):
        item.delete()
    logger.info("Menu item deleted: %s", pk)


def toggle_availability(item: MenuItem) -> MenuItem:
    return update_menu_item(item, {"available": not item.available})


def rate_menu_item(item: MenuItem, rating: int, comment: str = "") -> MenuItemRating:
    with persistence_guard("menu item rating"):
        with transaction.atomic():
            entry = MenuItemRating.objects.create(menu_item=item, rating=rating, comment=comment or "")
            item.refresh_rating()
    return entry


def seed_menu(items: Iterable[Dict[str, Any]]) -> int:
    """Create items that do not exist yet (matched by name). Returns count created."""
    created = 0
    with persistence_guard("menu seed"):
        with transaction.atomic():
            for data in items:
                _, was_created = MenuItem.objects.get_or_create(
                    name=data["name"], defaults={k: v for k, v in data.items() if k != "name"}
                )
                created += int(was_created)
    return created

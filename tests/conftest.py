import os
from decimal import Decimal

import pytest
from rest_framework.test import APIClient


# Ensure development-like environment during tests if not provided externally
os.environ.setdefault("ENVIRONMENT", "development")


@pytest.fixture(autouse=True)
def in_memory_channel_layer(settings):
    """Live-update tests never need Redis."""
    settings.CHANNEL_LAYERS = {"default": {"BACKEND": "channels.layers.InMemoryChannelLayer"}}


@pytest.fixture
def api_client() -> APIClient:
    """Unauthenticated DRF APIClient; keeps its session cookie between calls."""
    return APIClient(enforce_csrf_checks=False)


@pytest.fixture
def menu_item(db):
    from tests.factories import MenuItemFactory

    return MenuItemFactory(name="Paneer Tikka", price=Decimal("100.00"), category="Starters")


@pytest.fixture
def second_menu_item(db):
    from tests.factories import MenuItemFactory

    return MenuItemFactory(name="Butter Naan", price=Decimal("150.00"), category="Breads")

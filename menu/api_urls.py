# menu/api_urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .api_views import MenuCategoryViewSet, MenuItemViewSet

router = DefaultRouter()
router.register(r"menu/items", MenuItemViewSet, basename="menuitem")
router.register(r"menu/categories", MenuCategoryViewSet, basename="menucategory")

urlpatterns = [
    path("", include(router.urls)),
]

# GET    /api/menu/items/                          - List available items (category, type, search, include_unavailable)
# POST   /api/menu/items/                          - Create item
# GET    /api/menu/items/{id}/                     - Retrieve item
# PUT    /api/menu/items/{id}/                     - Update item
# PATCH  /api/menu/items/{id}/                     - Partial update item
# DELETE /api/menu/items/{id}/                     - Delete item
# POST   /api/menu/items/{id}/toggle_availability/ - Show / hide item
# POST   /api/menu/items/{id}/rate/                - Rate item (1-5)
# GET    /api/menu/categories/                     - Fixed category list and types

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from . import services
from .models import MenuItem
from .serializers import (
    MenuCategoriesSerializer,
    MenuItemRatingSerializer,
    MenuItemSerializer,
)


def _truthy(value) -> bool:
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}


class MenuItemViewSet(viewsets.ModelViewSet):
    """
    Menu items: customers list and filter; staff create, edit, delete and
    toggle availability.

    Query params on list: ``category``, ``type``, ``search`` and
    ``include_unavailable=1`` for the staff editor.
    """
    serializer_class = MenuItemSerializer
    permission_classes = [AllowAny]
    # Filtering is done by services.menu_queryset
    filter_backends = []

    def get_queryset(self):
        params = self.request.query_params
        if self.action != "list":
            return MenuItem.objects.all()
        return services.menu_queryset(
            include_unavailable=_truthy(params.get("include_unavailable")),
            category=params.get("category"),
            item_type=params.get("type"),
            search=params.get("search"),
        )

    def get_object(self):
        return services.get_menu_item(self.kwargs.get(self.lookup_field))

    def perform_create(self, serializer):
        serializer.instance = services.create_menu_item(dict(serializer.validated_data))

    def perform_update(self, serializer):
        serializer.instance = services.update_menu_item(
            serializer.instance, dict(serializer.validated_data)
        )

    def perform_destroy(self, instance):
        services.delete_menu_item(instance)

    @action(detail=True, methods=["post"])
    def toggle_availability(self, request, pk=None):
        """Flip an item between available and hidden."""
        item = services.toggle_availability(self.get_object())
        return Response(MenuItemSerializer(item).data)

    @action(detail=True, methods=["post"])
    def rate(self, request, pk=None):
        """Record a 1-5 star rating with an optional comment."""
        item = self.get_object()
        serializer = MenuItemRatingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = services.rate_menu_item(
            item,
            serializer.validated_data["rating"],
            serializer.validated_data.get("comment", ""),
        )
        item.refresh_from_db()
        return Response(
            {
                "rating": MenuItemRatingSerializer(entry).data,
                "average_rating": str(item.rating_average),
                "rating_count": item.rating_count,
            },
            status=status.HTTP_201_CREATED,
        )


class MenuCategoryViewSet(viewsets.ViewSet):
    """The fixed category list and item types."""
    permission_classes = [AllowAny]

    def list(self, request):
        return Response(MenuCategoriesSerializer.payload())

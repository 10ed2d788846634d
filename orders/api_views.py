from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from core.exceptions import NotFound, ValidationError
from core.tables import menu_url, parse_table_number, table_count
from menu.services import get_menu_item

from .cart import SessionCart
from .serializers import (
    CartAddSerializer,
    CartRemoveSerializer,
    CartSerializer,
    OrderSerializer,
    PaymentSerializer,
    StatusUpdateSerializer,
    SubmitOrderSerializer,
    TableSerializer,
)
from .services import lifecycle
from .services.submission import submit_order


class OrderViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Staff view of orders, newest first, plus the two lifecycle writes.
    """
    serializer_class = OrderSerializer
    permission_classes = [AllowAny]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ["status", "payment_status", "table_number"]
    ordering_fields = ["created_at", "total", "table_number"]

    def get_queryset(self):
        return lifecycle.orders_queryset()

    def get_object(self):
        return lifecycle.get_order(self.kwargs.get(self.lookup_field))

    @action(detail=True, methods=["post"])
    def update_status(self, request, pk=None):
        serializer = StatusUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            raise ValidationError(f"Unknown status '{request.data.get('status')}'.", field="status")
        lifecycle.advance_status(pk, serializer.validated_data["status"])
        return Response(OrderSerializer(lifecycle.get_order(pk)).data)

    @action(detail=True, methods=["post"])
    def record_payment(self, request, pk=None):
        serializer = PaymentSerializer(data=request.data)
        if not serializer.is_valid():
            raise ValidationError(
                f"Unknown payment method '{request.data.get('payment_method')}'.",
                field="payment_method",
            )
        lifecycle.record_payment(pk, serializer.validated_data["payment_method"])
        return Response(OrderSerializer(lifecycle.get_order(pk)).data)

    @action(detail=False, methods=["get"])
    def active(self, request):
        """Staff dashboard list; ``?status=all`` (default) means every active order."""
        orders = lifecycle.filter_orders(lifecycle.load_orders(), request.query_params.get("status"))
        return Response(OrderSerializer(orders, many=True).data)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        return Response(lifecycle.compute_stats(lifecycle.load_orders()).as_dict())

    @action(detail=False, methods=["get"])
    def recently_completed(self, request):
        orders = lifecycle.recently_completed(lifecycle.load_orders())
        return Response(OrderSerializer(orders, many=True).data)


class CartViewSet(viewsets.ViewSet):
    """
    The customer's session cart. Nothing here touches the orders tables
    until ``submit``.
    """
    permission_classes = [AllowAny]

    def _respond(self, session_cart, code=status.HTTP_200_OK):
        return Response(CartSerializer.payload(session_cart.cart), status=code)

    def list(self, request):
        return self._respond(SessionCart(request))

    @action(detail=False, methods=["post"])
    def add_item(self, request):
        serializer = CartAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            item = get_menu_item(serializer.validated_data["menu_item_id"])
        except NotFound:
            raise ValidationError("Menu item not found.", field="menu_item_id")
        if not item.available:
            raise ValidationError(f"{item.name} is not available right now.", field="menu_item_id")

        session_cart = SessionCart(request)
        session_cart.cart.add(item, serializer.validated_data["quantity"])
        session_cart.save()
        return self._respond(session_cart)

    @action(detail=False, methods=["post"])
    def remove_item(self, request):
        serializer = CartRemoveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session_cart = SessionCart(request)
        if session_cart.cart.remove(serializer.validated_data["cart_id"]):
            session_cart.save()
        return self._respond(session_cart)

    @action(detail=False, methods=["post"])
    def clear(self, request):
        session_cart = SessionCart(request)
        session_cart.cart.clear()
        session_cart.save()
        return self._respond(session_cart)

    @action(detail=False, methods=["post"])
    def submit(self, request):
        serializer = SubmitOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        table = parse_table_number(serializer.validated_data.get("table_number"))

        session_cart = SessionCart(request)
        if not session_cart.cart:
            raise ValidationError("Your cart is empty.", field="items")

        order = submit_order(session_cart.cart, table)
        session_cart.save()
        return Response(
            OrderSerializer(lifecycle.get_order(order.pk)).data,
            status=status.HTTP_201_CREATED,
        )


class TableViewSet(viewsets.ViewSet):
    """Occupancy per table and each table's QR menu link."""
    permission_classes = [AllowAny]
    lookup_value_regex = r"\d+"

    def _table(self, pk) -> int:
        try:
            return parse_table_number(pk)
        except ValidationError:
            raise NotFound("Table not found.")

    def list(self, request):
        occupancy = lifecycle.derive_table_occupancy(lifecycle.load_orders(), table_count())
        return Response(TableSerializer(occupancy, many=True).data)

    def retrieve(self, request, pk=None):
        number = self._table(pk)
        order = lifecycle.load_table_order(number)
        return Response({
            "table_number": number,
            "occupied": order is not None,
            "menu_url": menu_url(number),
            "order": OrderSerializer(order).data if order is not None else None,
        })

    @action(detail=True, methods=["get"])
    def order(self, request, pk=None):
        number = self._table(pk)
        order = lifecycle.load_table_order(number)
        return Response({
            "table_number": number,
            "order": OrderSerializer(order).data if order is not None else None,
        })

from __future__ import annotations

from rest_framework import viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from orders.services.lifecycle import load_orders

from .analytics import summarize


class AnalyticsViewSet(viewsets.ViewSet):
    """Analytics summary over every order."""
    permission_classes = [AllowAny]

    def list(self, request):
        return Response(summarize(load_orders()).as_dict())

from __future__ import annotations

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import AnalyticsViewSet

app_name = "reports"

router = DefaultRouter()
router.register(r"reports/analytics", AnalyticsViewSet, basename="analytics")

urlpatterns = [
    path("", include(router.urls)),
]

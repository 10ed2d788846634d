from django.urls import path

from .consumers import AnalyticsConsumer

websocket_urlpatterns = [
    path("ws/reports/", AnalyticsConsumer.as_asgi()),
]

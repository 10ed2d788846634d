from django.urls import path

from .consumers import StaffDashboardConsumer, TableOrderConsumer

websocket_urlpatterns = [
    path("ws/staff/", StaffDashboardConsumer.as_asgi()),
    path("ws/tables/<int:table_number>/", TableOrderConsumer.as_asgi()),
]

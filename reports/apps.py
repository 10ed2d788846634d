from django.apps import AppConfig

class ReportsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "reports"

    def ready(self):
        # live analytics follow the order lifecycle signals
        from . import receivers  # noqa

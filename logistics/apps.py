from django.apps import AppConfig
from django.conf import settings


class LogisticsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'logistics'
    verbose_name = 'Listings & Pricing'

    def ready(self):
        # An incomplete rate table must stop startup, not fail a request later
        from .services.rates import validate_rate_table
        validate_rate_table()

        if settings.AIRPORTS_FILE:
            from .services.airports import airport_registry
            airport_registry.import_path(settings.AIRPORTS_FILE)

        import logistics.checks  # noqa: F401

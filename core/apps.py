from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core'
    verbose_name = 'Users & Identity'

    def ready(self):
        from core.identity import validate_owner_identity

        # A missing owner identity must stop startup, not fail a request later
        validate_owner_identity()

        # Register startup system checks
        import core.checks  # noqa: F401

from django.apps import AppConfig


class FlockManagementConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "flock_management"
    verbose_name = "Flock Management"

    def ready(self):
        """
        Import signals to register them when the app is ready.

        This keeps batch bird counts in sync when mortality is recorded.
        """
        import flock_management.signals  # noqa: F401

from django.apps import AppConfig


class DjustDatastarConfig(AppConfig):
    name = "djust_datastar"
    verbose_name = "djust Datastar"

    def ready(self):
        # Import checks module so @register() decorators are executed
        import djust_datastar.checks  # noqa: F401

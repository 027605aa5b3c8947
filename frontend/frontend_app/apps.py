from django.apps import AppConfig


class FrontendAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "frontend.frontend_app"
    label = "frontend_app"
    verbose_name = "Health assistant"

from django.apps import AppConfig


class ReportingConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'reporting'
    verbose_name = 'Revenue Reporting'

    def ready(self):
        from .centers import validate_center_display
        validate_center_display()

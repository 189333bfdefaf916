from django.apps import AppConfig


class TimeclockConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'timeclock'
    verbose_name = 'Time Clock'

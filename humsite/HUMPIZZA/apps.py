from django.apps import AppConfig


class HumpizzaConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'HUMPIZZA'
    verbose_name = "Hum's Pizza"

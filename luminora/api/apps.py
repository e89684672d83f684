import os

from django.apps import AppConfig
from django.conf import settings


class ApiConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'api'

    def ready(self):
        # SQLite needs its directory before the first connection is opened.
        os.makedirs(settings.DATA_DIR, exist_ok=True)

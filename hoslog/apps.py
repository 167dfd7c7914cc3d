"""
Hoslog app configuration.
"""

from django.apps import AppConfig


class HoslogConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'hoslog'
    verbose_name = 'HOS Logbook'

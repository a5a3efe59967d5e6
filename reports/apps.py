"""
Reports App Configuration
"""

from django.apps import AppConfig


class ReportsConfig(AppConfig):
    """User reports against CVs, employers and messages."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'reports'
    verbose_name = 'Reports'

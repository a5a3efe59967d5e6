"""
Employers App Configuration
"""

from django.apps import AppConfig


class EmployersConfig(AppConfig):
    """Employer profiles, the verification gate and saved CV snapshots."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'employers'
    verbose_name = 'Employers & Verification'

"""
Jobseekers App Configuration
"""

from django.apps import AppConfig


class JobseekersConfig(AppConfig):
    """Profile store, CV sections and the visibility lock."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'jobseekers'
    verbose_name = 'Jobseekers & CVs'

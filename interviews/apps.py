"""
Interviews App Configuration
"""

from django.apps import AppConfig


class InterviewsConfig(AppConfig):
    """Employer to jobseeker interview requests."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'interviews'
    verbose_name = 'Interview Requests'

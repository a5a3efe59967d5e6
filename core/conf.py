"""
Access to the ``SEAVITAE`` settings dictionary with defaults.
"""

from django.conf import settings

DEFAULTS = {
    'MIN_SUMMARY_LENGTH': 50,
    'TEASER_SIZE': 3,
    'DEFAULT_PAGE_SIZE': 20,
    'MAX_PAGE_SIZE': 100,
    'MAX_MESSAGE_LENGTH': 5000,
    'MAX_INTERVIEW_MESSAGE_LENGTH': 2000,
}


def get_setting(name: str):
    """Return a workflow setting, falling back to the built-in default."""
    overrides = getattr(settings, 'SEAVITAE', {}) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]

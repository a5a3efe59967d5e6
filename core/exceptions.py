"""
Core exceptions.

Expected business outcomes are reported through ``ServiceResult``; the
exceptions here signal programming errors only.
"""


class ImmutableRecordError(Exception):
    """Raised when code attempts to modify a record that is write-once."""

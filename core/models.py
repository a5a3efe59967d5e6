"""
Core Models - Base classes for all apps

This module provides reusable abstract model classes:
- TimestampedModel: Adds created_at/updated_at timestamps
- UUIDModel: UUID primary key plus timestamps
"""

import uuid

from django.db import models


class TimestampedModel(models.Model):
    """
    Abstract base class that adds timestamp fields.

    Provides:
    - created_at: Automatically set on creation
    - updated_at: Automatically updated on save
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text='Timestamp when record was created'
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text='Timestamp when record was last updated'
    )

    class Meta:
        abstract = True
        get_latest_by = 'created_at'
        ordering = ['-created_at']


class UUIDModel(TimestampedModel):
    """
    Abstract base class with a UUID primary key.

    UUIDs are used for every row that is addressed from the public API so
    that identifiers cannot be enumerated.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta(TimestampedModel.Meta):
        abstract = True

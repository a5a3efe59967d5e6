"""
Messages between employers and jobseekers.

A verified employer opens a conversation with a jobseeker whose CV is
visible. Either participant may then reply; replies point at the first
message of the thread through ``parent``.
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Message(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='sent_messages',
    )
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='received_messages',
    )
    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='replies',
        help_text=_('First message of the thread; empty for the first message itself')
    )
    content = models.TextField()
    is_read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _('Message')
        verbose_name_plural = _('Messages')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['recipient', 'is_read'], name='idx_message_recipient_read'),
        ]

    def __str__(self):
        return f"{self.sender_id} -> {self.recipient_id}: {self.preview}"

    @property
    def preview(self) -> str:
        return (self.content[:50] + '...') if len(self.content) > 50 else self.content

    @property
    def thread_root_id(self):
        return self.parent_id or self.pk

    def is_participant(self, user) -> bool:
        return user.pk in (self.sender_id, self.recipient_id)

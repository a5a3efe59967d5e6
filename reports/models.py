"""
Reports raised by users against a CV, an employer or a message.

A report starts ``pending`` and an admin moves it once to ``reviewed``
(action taken) or ``dismissed``. A reporter may hold at most one pending
report per target; the partial unique constraint enforces it even under
concurrent submission.
"""

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from core.models import UUIDModel

MAX_NOTE_LENGTH = 500


class Report(UUIDModel):

    class TargetType(models.TextChoices):
        CV_PROFILE = 'cv_profile', _('CV profile')
        EMPLOYER_PROFILE = 'employer_profile', _('Employer profile')
        MESSAGE = 'message', _('Message')

    class Reason(models.TextChoices):
        SPAM = 'spam', _('Spam')
        FAKE_PROFILE = 'fake_profile', _('Fake profile')
        INAPPROPRIATE_CONTENT = 'inappropriate_content', _('Inappropriate content')
        HARASSMENT = 'harassment', _('Harassment')
        MISLEADING_INFORMATION = 'misleading_information', _('Misleading information')
        OTHER = 'other', _('Other')

    class Status(models.TextChoices):
        PENDING = 'pending', _('Pending')
        REVIEWED = 'reviewed', _('Reviewed')
        DISMISSED = 'dismissed', _('Dismissed')

    RESOLVED_STATUSES = (Status.REVIEWED, Status.DISMISSED)

    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='reports_made',
    )
    target_type = models.CharField(max_length=20, choices=TargetType.choices)
    target_id = models.UUIDField()
    reason = models.CharField(max_length=30, choices=Reason.choices)
    note = models.CharField(max_length=MAX_NOTE_LENGTH, blank=True)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reports_reviewed',
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    reviewer_notes = models.TextField(blank=True)

    class Meta:
        verbose_name = _('Report')
        verbose_name_plural = _('Reports')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['reporter', 'target_type', 'target_id'],
                condition=Q(status='pending'),
                name='uq_report_pending_per_target',
            ),
        ]
        indexes = [
            models.Index(fields=['target_type', 'target_id'], name='idx_report_target'),
        ]

    def __str__(self):
        return f"{self.get_reason_display()} report on {self.target_type} {self.target_id}"

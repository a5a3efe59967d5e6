"""
Employer Models

Models:
- EmployerProfile: employer identity plus the verification state machine
- VerificationDecision: append-only audit trail of verification transitions
- EmployerSavedSnapshot: immutable copy of a CV taken by an employer
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.exceptions import ImmutableRecordError
from core.models import UUIDModel


class VerificationStatus(models.TextChoices):
    PENDING = 'pending', _('Pending')
    APPROVED = 'approved', _('Approved')
    REJECTED = 'rejected', _('Rejected')


class EmployerProfile(UUIDModel):
    """
    Employer profile.

    ``is_verified`` is derived from ``verification_status`` so the two can
    never disagree. Profiles are created pending and only move through
    ``VerificationService``.
    """

    class EmployerType(models.TextChoices):
        INDIVIDUAL = 'individual', _('Individual')
        COMPANY = 'company', _('Company')

    # Fields whose change while rejected puts the profile back in review
    VERIFICATION_FIELDS = (
        'employer_type',
        'company_name',
        'registration_number',
        'national_id',
        'verification_document_id',
    )

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='employer_profile',
    )
    employer_type = models.CharField(max_length=20, choices=EmployerType.choices)

    display_name = models.CharField(max_length=200)
    city = models.CharField(max_length=100, blank=True)
    website = models.URLField(blank=True)
    linkedin = models.URLField(blank=True)
    contact_person_name = models.CharField(max_length=200, blank=True)
    contact_person_role = models.CharField(max_length=200, blank=True)

    # Verification inputs
    company_name = models.CharField(max_length=200, blank=True)
    registration_number = models.CharField(max_length=100, blank=True)
    national_id = models.CharField(max_length=100, blank=True)
    verification_document_id = models.CharField(
        max_length=255,
        blank=True,
        help_text=_('Opaque reference to the uploaded identity document')
    )

    verification_status = models.CharField(
        max_length=20,
        choices=VerificationStatus.choices,
        default=VerificationStatus.PENDING,
        db_index=True,
    )
    verification_notes = models.TextField(blank=True)
    verification_date = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _('Employer Profile')
        verbose_name_plural = _('Employer Profiles')
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.display_name} ({self.get_verification_status_display()})"

    @property
    def is_verified(self) -> bool:
        return self.verification_status == VerificationStatus.APPROVED

    @property
    def is_company(self) -> bool:
        return self.employer_type == self.EmployerType.COMPANY


class VerificationDecision(models.Model):
    """One verification transition. Rows are never edited."""

    class Action(models.TextChoices):
        APPROVE = 'approve', _('Approve')
        REJECT = 'reject', _('Reject')
        RESET = 'reset', _('Reset to pending')
        RESUBMIT = 'resubmit', _('Resubmitted by employer')

    employer = models.ForeignKey(
        EmployerProfile,
        on_delete=models.CASCADE,
        related_name='verification_decisions',
    )
    action = models.CharField(max_length=20, choices=Action.choices)
    reviewer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='verification_decisions',
        help_text=_('Empty for automatic resubmission')
    )
    from_status = models.CharField(max_length=20, choices=VerificationStatus.choices)
    to_status = models.CharField(max_length=20, choices=VerificationStatus.choices)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _('Verification Decision')
        verbose_name_plural = _('Verification Decisions')
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.employer_id}: {self.from_status} -> {self.to_status} ({self.action})"


class SnapshotQuerySet(models.QuerySet):
    def update(self, **kwargs):
        raise ImmutableRecordError("Saved snapshots cannot be modified.")


class EmployerSavedSnapshot(models.Model):
    """
    Immutable copy of a visible CV at a given version.

    Only creation and deletion are allowed; saving an existing row or
    updating through the queryset raises ImmutableRecordError.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    employer = models.ForeignKey(
        EmployerProfile,
        on_delete=models.CASCADE,
        related_name='saved_snapshots',
    )
    jobseeker = models.ForeignKey(
        'jobseekers.JobSeekerProfile',
        on_delete=models.CASCADE,
        related_name='employer_snapshots',
    )
    cv = models.ForeignKey(
        'jobseekers.CVDocument',
        on_delete=models.CASCADE,
        related_name='employer_snapshots',
    )
    snapshot_version = models.PositiveIntegerField()
    data = models.JSONField()
    saved_at = models.DateTimeField(auto_now_add=True, db_index=True)

    objects = SnapshotQuerySet.as_manager()

    class Meta:
        verbose_name = _('Saved CV Snapshot')
        verbose_name_plural = _('Saved CV Snapshots')
        ordering = ['-saved_at']
        constraints = [
            models.UniqueConstraint(
                fields=['employer', 'cv', 'snapshot_version'],
                name='uq_snapshot_employer_cv_version',
            ),
        ]

    def __str__(self):
        return f"Snapshot of {self.cv_id} v{self.snapshot_version} by {self.employer_id}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableRecordError("Saved snapshots cannot be modified.")
        super().save(*args, **kwargs)

"""
Interview request model.

A request moves through:

    pending --accept--> accepted --complete--> completed
    pending --decline-> declined
    pending --cancel--> cancelled

declined, cancelled and completed are terminal. At most one request per
(employer, jobseeker) pair may be in flight (pending or accepted); the
partial unique constraint enforces it even under concurrent creation.
"""

from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from core.models import UUIDModel


class InterviewRequest(UUIDModel):

    class Status(models.TextChoices):
        PENDING = 'pending', _('Pending')
        ACCEPTED = 'accepted', _('Accepted')
        DECLINED = 'declined', _('Declined')
        CANCELLED = 'cancelled', _('Cancelled')
        COMPLETED = 'completed', _('Completed')

    class InterviewType(models.TextChoices):
        VIDEO = 'video', _('Video call')
        PHONE = 'phone', _('Phone call')
        IN_PERSON = 'in_person', _('In person')

    IN_FLIGHT_STATUSES = (Status.PENDING, Status.ACCEPTED)
    TERMINAL_STATUSES = (Status.DECLINED, Status.CANCELLED, Status.COMPLETED)
    # Statuses in which the jobseeker's phone is shown to the employer
    DISCLOSURE_STATUSES = (Status.ACCEPTED, Status.COMPLETED)

    employer = models.ForeignKey(
        'employers.EmployerProfile',
        on_delete=models.CASCADE,
        related_name='interview_requests',
    )
    jobseeker = models.ForeignKey(
        'jobseekers.JobSeekerProfile',
        on_delete=models.CASCADE,
        related_name='interview_requests',
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    interview_type = models.CharField(max_length=20, choices=InterviewType.choices)
    proposed_at = models.DateTimeField(null=True, blank=True)
    location = models.CharField(max_length=300, blank=True)
    meeting_link = models.URLField(blank=True)
    employer_message = models.TextField(blank=True)
    response_message = models.TextField(blank=True)

    responded_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _('Interview Request')
        verbose_name_plural = _('Interview Requests')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['employer', 'jobseeker'],
                condition=Q(status__in=['pending', 'accepted']),
                name='uq_interview_in_flight_pair',
            ),
        ]
        indexes = [
            models.Index(fields=['jobseeker', 'status'], name='idx_interview_jobseeker_status'),
            models.Index(fields=['employer', 'status'], name='idx_interview_employer_status'),
        ]

    def __str__(self):
        return f"Interview {self.employer_id} -> {self.jobseeker_id} ({self.status})"

    @property
    def is_terminal(self) -> bool:
        return self.status in self.TERMINAL_STATUSES

    @property
    def discloses_contact(self) -> bool:
        return self.status in self.DISCLOSURE_STATUSES

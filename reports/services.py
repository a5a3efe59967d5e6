"""
Report Services.

- ReportService.create: any account reports a CV, an employer or a message
- ReportService.my_reports: the caller's own reports
- ReportService.review_queue / resolve: admin moderation
"""

import logging
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import Case, Count, IntegerField, Value, When
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.pagination import paginate
from core.permissions import is_admin
from core.results import ErrorCode, ServiceResult
from employers.models import EmployerProfile
from jobseekers.models import JobSeekerProfile
from messages_sys.models import Message

from .models import MAX_NOTE_LENGTH, Report

logger = logging.getLogger(__name__)


def _choices_error(field: str, values) -> ServiceResult:
    return ServiceResult.fail(
        ErrorCode.VALIDATION,
        errors={field: [f'{field.replace("_", " ").capitalize()} must be one of: {", ".join(values)}.']},
    )


def _target_owner_id(target_type: str, target_id, reporter):
    """
    Account behind a report target, or None when the target does not exist.

    Messages only resolve for their participants; the owner of a message
    is its sender.
    """
    if target_type == Report.TargetType.CV_PROFILE:
        return JobSeekerProfile.objects.filter(pk=target_id).values_list('user_id', flat=True).first()
    if target_type == Report.TargetType.EMPLOYER_PROFILE:
        return EmployerProfile.objects.filter(pk=target_id).values_list('user_id', flat=True).first()
    message = Message.objects.filter(pk=target_id).first()
    if message is None or not message.is_participant(reporter):
        return None
    return message.sender_id


class ReportService:
    """
    User reports and their moderation.

    A report names a target by type and id. Reporting yourself or your own
    message is refused, and a second pending report on the same target by
    the same account is a conflict.
    """

    @staticmethod
    @transaction.atomic
    def create(user, target_type: str, target_id, reason: str, note: Optional[str] = None) -> ServiceResult:
        if target_type not in Report.TargetType.values:
            return _choices_error('target_type', Report.TargetType.values)
        if reason not in Report.Reason.values:
            return _choices_error('reason', Report.Reason.values)

        note = (note or '').strip()
        if len(note) > MAX_NOTE_LENGTH:
            return ServiceResult.fail(
                ErrorCode.VALIDATION,
                errors={'note': [f'Note must be at most {MAX_NOTE_LENGTH} characters.']},
            )
        if reason == Report.Reason.OTHER and not note:
            return ServiceResult.fail(
                ErrorCode.VALIDATION,
                _('Please describe the problem.'),
                errors={'note': ['A note is required when the reason is "other".']},
            )

        owner_id = _target_owner_id(target_type, target_id, user)
        if owner_id is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, _('Reported item not found.'))
        if owner_id == user.pk:
            return ServiceResult.fail(
                ErrorCode.VALIDATION,
                _('You cannot report yourself.'),
                errors={'target_id': ['You cannot report yourself.']},
            )

        existing = Report.objects.filter(
            reporter=user, target_type=target_type, target_id=target_id, status=Report.Status.PENDING,
        ).first()
        if existing is not None:
            return ServiceResult.fail(
                ErrorCode.CONFLICT, _('You have already reported this and it is under review.'), data=existing,
            )

        try:
            with transaction.atomic():
                report = Report.objects.create(
                    reporter=user,
                    target_type=target_type,
                    target_id=target_id,
                    reason=reason,
                    note=note,
                )
        except IntegrityError:
            logger.info("Concurrent report lost: reporter=%s %s=%s", user.pk, target_type, target_id)
            return ServiceResult.fail(ErrorCode.CONFLICT, _('You have already reported this and it is under review.'))

        logger.info("Report created: report=%s reporter=%s %s=%s reason=%s",
                    report.pk, user.pk, target_type, target_id, reason)
        return ServiceResult.ok(report, _('Thank you. Our team will review your report.'))

    @staticmethod
    def my_reports(user, page=None, limit=None) -> ServiceResult:
        """Caller's reports, newest first."""
        return ServiceResult.ok(paginate(Report.objects.filter(reporter=user).order_by('-created_at'), page, limit))

    @staticmethod
    def review_queue(reviewer, status: Optional[str] = None, target_type: Optional[str] = None,
                     page=None, limit=None) -> ServiceResult:
        """
        Reports for moderation, pending first and oldest first within a status.

        Returns:
            Paginated reports plus ``counts`` per status.
        """
        if not is_admin(reviewer):
            return ServiceResult.fail(ErrorCode.FORBIDDEN, _('Admin access required.'))
        if status and status not in Report.Status.values:
            return _choices_error('status', Report.Status.values)
        if target_type and target_type not in Report.TargetType.values:
            return _choices_error('target_type', Report.TargetType.values)

        queryset = Report.objects.select_related('reporter')
        if status:
            queryset = queryset.filter(status=status)
        if target_type:
            queryset = queryset.filter(target_type=target_type)
        queryset = queryset.annotate(
            review_order=Case(
                When(status=Report.Status.PENDING, then=Value(0)),
                default=Value(1),
                output_field=IntegerField(),
            ),
        ).order_by('review_order', 'created_at')

        counts = {value: 0 for value in Report.Status.values}
        for row in Report.objects.order_by().values('status').annotate(n=Count('id')):
            counts[row['status']] = row['n']

        data = paginate(queryset, page, limit)
        data['counts'] = counts
        return ServiceResult.ok(data)

    @staticmethod
    @transaction.atomic
    def resolve(report_id, status: str, reviewer, notes: Optional[str] = None) -> ServiceResult:
        """
        Move a pending report to ``reviewed`` or ``dismissed``.

        Already resolved reports are a ``conflict``.
        """
        if not is_admin(reviewer):
            logger.warning("Non-admin report resolution attempt: user=%s report=%s",
                           getattr(reviewer, 'pk', None), report_id)
            return ServiceResult.fail(ErrorCode.FORBIDDEN, _('Admin access required.'))
        if status not in Report.RESOLVED_STATUSES:
            return _choices_error('status', [s.value for s in Report.RESOLVED_STATUSES])

        updated = Report.objects.filter(pk=report_id, status=Report.Status.PENDING).update(
            status=status,
            reviewed_by=reviewer,
            reviewed_at=timezone.now(),
            reviewer_notes=(notes or '').strip(),
            updated_at=timezone.now(),
        )
        report = Report.objects.filter(pk=report_id).first()
        if report is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, _('Report not found.'))
        if not updated:
            return ServiceResult.fail(
                ErrorCode.CONFLICT, _('This report has already been resolved.'), data=report,
            )

        logger.info("Report resolved: report=%s status=%s reviewer=%s", report.pk, status, reviewer.pk)
        return ServiceResult.ok(report)

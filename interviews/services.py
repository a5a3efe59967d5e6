"""
Interview Services - interview request negotiation.

Every status change is a conditional update keyed on the expected current
status, so two concurrent responses can never both succeed: the loser
updates zero rows and gets ``conflict``.
"""

import logging
from typing import Any, Dict, Optional

from django.db import IntegrityError, transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from core.conf import get_setting
from core.pagination import paginate
from core.results import ErrorCode, ServiceResult
from employers.verification import VerificationGate
from jobseekers.models import JobSeekerProfile
from notifications.dispatcher import notify

from .models import InterviewRequest

logger = logging.getLogger(__name__)

Status = InterviewRequest.Status


class InterviewDetailsSerializer(serializers.Serializer):
    """Validation of the details an employer proposes."""

    interview_type = serializers.ChoiceField(choices=InterviewRequest.InterviewType.choices)
    proposed_at = serializers.DateTimeField(required=False, allow_null=True)
    location = serializers.CharField(max_length=300, required=False, allow_blank=True)
    meeting_link = serializers.URLField(required=False, allow_blank=True)
    message = serializers.CharField(required=False, allow_blank=True)

    def validate_proposed_at(self, value):
        if value is not None and value <= timezone.now():
            raise serializers.ValidationError(_('Proposed time must be in the future.'))
        return value

    def validate_message(self, value):
        limit = get_setting('MAX_INTERVIEW_MESSAGE_LENGTH')
        if len(value) > limit:
            raise serializers.ValidationError(
                _('Message must be at most %(n)d characters.') % {'n': limit}
            )
        return value

    def validate(self, attrs):
        if attrs['interview_type'] == InterviewRequest.InterviewType.IN_PERSON \
                and not (attrs.get('location') or '').strip():
            raise serializers.ValidationError({'location': _('A location is required for in-person interviews.')})
        return attrs


def _request_not_found() -> ServiceResult:
    return ServiceResult.fail(ErrorCode.NOT_FOUND, _('Interview request not found.'))


def _get_request(request_id) -> Optional[InterviewRequest]:
    return (
        InterviewRequest.objects
        .select_related('employer', 'jobseeker')
        .filter(pk=request_id)
        .first()
    )


def _transition(request_id, from_status: str, **changes) -> bool:
    """Conditional status update; False when the row is no longer in ``from_status``."""
    changes['updated_at'] = timezone.now()
    updated = InterviewRequest.objects.filter(pk=request_id, status=from_status).update(**changes)
    return updated == 1


def _invalid_status(interview: InterviewRequest, action: str) -> ServiceResult:
    return ServiceResult.fail(
        ErrorCode.CONFLICT,
        _('Cannot %(action)s a request that is %(status)s.') % {
            'action': action, 'status': interview.status,
        },
    )


def _validate_status_filter(status: Optional[str]) -> Optional[ServiceResult]:
    if status and status not in Status.values:
        return ServiceResult.fail(
            ErrorCode.VALIDATION,
            errors={'status': [f'Status must be one of: {", ".join(Status.values)}.']},
        )
    return None


class InterviewService:
    """
    Interview request negotiation between a verified employer and a
    jobseeker with a visible CV.
    """

    @staticmethod
    @transaction.atomic
    def create_request(user, jobseeker_profile_id, details: Dict[str, Any]) -> ServiceResult:
        """
        Open a new interview request.

        Args:
            user: Verified employer account
            jobseeker_profile_id: Target JobSeekerProfile id
            details: ``interview_type`` plus optional ``proposed_at``,
                ``location``, ``meeting_link`` and ``message``

        Returns:
            ServiceResult with the new InterviewRequest; ``conflict`` with the
            in-flight request as data when one already exists for the pair.
        """
        gate = VerificationGate.check(user)
        if not gate:
            return gate
        employer = gate.data

        profile = JobSeekerProfile.objects.filter(pk=jobseeker_profile_id).first()
        if profile is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, _('Jobseeker not found.'))
        if not profile.is_visible:
            return ServiceResult.fail(ErrorCode.FORBIDDEN, _('This CV is not currently visible.'))

        serializer = InterviewDetailsSerializer(data=details or {})
        if not serializer.is_valid():
            return ServiceResult.fail(ErrorCode.VALIDATION, errors=serializer.errors)
        data = serializer.validated_data

        existing = InterviewRequest.objects.filter(
            employer=employer,
            jobseeker=profile,
            status__in=InterviewRequest.IN_FLIGHT_STATUSES,
        ).first()
        if existing is not None:
            return ServiceResult.fail(
                ErrorCode.CONFLICT,
                _('You already have an active interview request with this candidate.'),
                data=existing,
            )

        try:
            with transaction.atomic():
                interview = InterviewRequest.objects.create(
                    employer=employer,
                    jobseeker=profile,
                    interview_type=data['interview_type'],
                    proposed_at=data.get('proposed_at'),
                    location=data.get('location', ''),
                    meeting_link=data.get('meeting_link', ''),
                    employer_message=data.get('message', ''),
                )
        except IntegrityError:
            logger.info("Concurrent interview request lost: employer=%s jobseeker=%s",
                        employer.pk, profile.pk)
            return ServiceResult.fail(
                ErrorCode.CONFLICT,
                _('You already have an active interview request with this candidate.'),
            )

        notify('interview_requested', profile.user_id, {
            'employer_name': employer.display_name,
            'interview_type': interview.get_interview_type_display(),
            'proposed_at': interview.proposed_at.isoformat() if interview.proposed_at else '',
            'message': interview.employer_message,
        })

        logger.info("Interview requested: request=%s employer=%s jobseeker=%s",
                    interview.pk, employer.pk, profile.pk)
        return ServiceResult.ok(interview, _('Interview request sent.'))

    @staticmethod
    @transaction.atomic
    def respond(user, request_id, decision: str, message: Optional[str] = None) -> ServiceResult:
        """
        Accept or decline a pending request addressed to the caller.

        Accepting discloses the jobseeker's phone number to the employer.
        """
        interview = _get_request(request_id)
        if interview is None:
            return _request_not_found()
        if interview.jobseeker.user_id != user.pk:
            logger.warning("Respond refused: user=%s request=%s", user.pk, request_id)
            return ServiceResult.fail(ErrorCode.FORBIDDEN, _('This request is not addressed to you.'))

        if decision not in ('accept', 'decline'):
            return ServiceResult.fail(
                ErrorCode.VALIDATION,
                errors={'decision': ['Decision must be "accept" or "decline".']},
            )
        message = (message or '').strip()
        limit = get_setting('MAX_INTERVIEW_MESSAGE_LENGTH')
        if len(message) > limit:
            return ServiceResult.fail(
                ErrorCode.VALIDATION,
                errors={'message': [f'Message must be at most {limit} characters.']},
            )

        new_status = Status.ACCEPTED if decision == 'accept' else Status.DECLINED
        if not _transition(
            interview.pk,
            Status.PENDING,
            status=new_status,
            response_message=message,
            responded_at=timezone.now(),
        ):
            interview.refresh_from_db(fields=['status'])
            return _invalid_status(interview, decision)

        interview.refresh_from_db()
        notify(
            'interview_accepted' if new_status == Status.ACCEPTED else 'interview_declined',
            interview.employer.user_id,
            {
                'jobseeker_name': interview.jobseeker.full_name,
                'message': message,
            },
        )

        logger.info("Interview %s: request=%s", new_status, interview.pk)
        return ServiceResult.ok(
            interview,
            _('Interview accepted.') if new_status == Status.ACCEPTED else _('Interview declined.'),
        )

    @staticmethod
    @transaction.atomic
    def cancel(user, request_id) -> ServiceResult:
        """Withdraw a pending request. Originating employer only."""
        interview = _get_request(request_id)
        if interview is None:
            return _request_not_found()
        if interview.employer.user_id != user.pk:
            logger.warning("Cancel refused: user=%s request=%s", user.pk, request_id)
            return ServiceResult.fail(ErrorCode.FORBIDDEN, _('Only the requesting employer can cancel.'))

        if not _transition(interview.pk, Status.PENDING, status=Status.CANCELLED, cancelled_at=timezone.now()):
            interview.refresh_from_db(fields=['status'])
            return _invalid_status(interview, 'cancel')

        interview.refresh_from_db()
        notify('interview_cancelled', interview.jobseeker.user_id, {
            'employer_name': interview.employer.display_name,
        })

        logger.info("Interview cancelled: request=%s", interview.pk)
        return ServiceResult.ok(interview, _('Interview request cancelled.'))

    @staticmethod
    @transaction.atomic
    def mark_completed(user, request_id) -> ServiceResult:
        """Mark an accepted interview as done. Either party may do this."""
        interview = _get_request(request_id)
        if interview is None:
            return _request_not_found()
        if user.pk not in (interview.employer.user_id, interview.jobseeker.user_id):
            return ServiceResult.fail(ErrorCode.FORBIDDEN, _('You are not part of this interview.'))

        if not _transition(interview.pk, Status.ACCEPTED, status=Status.COMPLETED, completed_at=timezone.now()):
            interview.refresh_from_db(fields=['status'])
            return _invalid_status(interview, 'complete')

        interview.refresh_from_db()
        logger.info("Interview completed: request=%s by user=%s", interview.pk, user.pk)
        return ServiceResult.ok(interview, _('Interview marked as completed.'))

    @staticmethod
    @transaction.atomic
    def delete(user, request_id) -> ServiceResult:
        """Remove a finished request. Originating employer only, terminal states only."""
        interview = _get_request(request_id)
        if interview is None:
            return _request_not_found()
        if interview.employer.user_id != user.pk:
            return ServiceResult.fail(ErrorCode.FORBIDDEN, _('Only the requesting employer can delete.'))

        deleted, _rows = InterviewRequest.objects.filter(
            pk=interview.pk,
            status__in=InterviewRequest.TERMINAL_STATUSES,
        ).delete()
        if not deleted:
            return _invalid_status(interview, 'delete')

        logger.info("Interview deleted: request=%s", request_id)
        return ServiceResult.ok(message=_('Interview request deleted.'))

    @staticmethod
    def list_for_employer(user, status: Optional[str] = None, page=None, limit=None) -> ServiceResult:
        resolved = VerificationGate.resolve(user)
        if not resolved:
            return resolved
        invalid = _validate_status_filter(status)
        if invalid:
            return invalid

        queryset = (
            InterviewRequest.objects
            .filter(employer=resolved.data)
            .select_related('employer', 'jobseeker')
        )
        if status:
            queryset = queryset.filter(status=status)
        return ServiceResult.ok(paginate(queryset.order_by('-created_at'), page, limit))

    @staticmethod
    def list_for_jobseeker(user, status: Optional[str] = None, page=None, limit=None) -> ServiceResult:
        profile = JobSeekerProfile.objects.filter(user=user).first()
        if profile is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, _('Profile not found.'))
        invalid = _validate_status_filter(status)
        if invalid:
            return invalid

        queryset = (
            InterviewRequest.objects
            .filter(jobseeker=profile)
            .select_related('employer', 'jobseeker')
        )
        if status:
            queryset = queryset.filter(status=status)
        return ServiceResult.ok(paginate(queryset.order_by('-created_at'), page, limit))

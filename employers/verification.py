"""
Employer verification gate.

VerificationGate answers "may this caller act as a verified employer?".
VerificationService owns the verification state machine:

    pending  --approve-->  approved
    pending  --reject--->  rejected
    approved --reset---->  pending
    rejected --reset---->  pending
    rejected --resubmit->  pending
    rejected --approve-->  approved

Any other (status, action) pair is a conflict. Every transition appends a
VerificationDecision row.
"""

import logging
from typing import Optional

from django.db import transaction
from django.db.models import Case, Count, IntegerField, Value, When
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.pagination import paginate
from core.permissions import is_admin
from core.results import ErrorCode, ServiceResult
from notifications.dispatcher import notify

from .models import EmployerProfile, VerificationDecision, VerificationStatus

logger = logging.getLogger(__name__)

Action = VerificationDecision.Action

TRANSITIONS = {
    (VerificationStatus.PENDING, Action.APPROVE): VerificationStatus.APPROVED,
    (VerificationStatus.PENDING, Action.REJECT): VerificationStatus.REJECTED,
    (VerificationStatus.APPROVED, Action.RESET): VerificationStatus.PENDING,
    (VerificationStatus.REJECTED, Action.RESET): VerificationStatus.PENDING,
    (VerificationStatus.REJECTED, Action.RESUBMIT): VerificationStatus.PENDING,
    (VerificationStatus.REJECTED, Action.APPROVE): VerificationStatus.APPROVED,
}

# Actions a reviewer may take; resubmit is triggered by the employer's edit
REVIEW_ACTIONS = (Action.APPROVE, Action.REJECT, Action.RESET)


class VerificationGate:
    """Single check used by every employer-side privileged operation."""

    @staticmethod
    def can_act_as_verified_employer(employer: EmployerProfile) -> bool:
        return employer.is_verified

    @staticmethod
    def resolve(user) -> ServiceResult:
        """Caller's employer profile, verified or not."""
        if getattr(user, 'role', None) != 'employer':
            return ServiceResult.fail(ErrorCode.FORBIDDEN, _('Only employers can perform this action.'))

        employer = EmployerProfile.objects.filter(user=user).first()
        if employer is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, _('Employer profile not found.'))
        return ServiceResult.ok(employer)

    @staticmethod
    def check(user) -> ServiceResult:
        """
        Resolve the caller's employer profile and require it to be verified.

        Returns:
            ServiceResult with the EmployerProfile as ``data`` on success;
            ``forbidden`` for non-employers, ``not_found`` without a profile,
            ``not_verified`` while pending or rejected.
        """
        resolved = VerificationGate.resolve(user)
        if not resolved:
            return resolved

        employer = resolved.data
        if not VerificationGate.can_act_as_verified_employer(employer):
            logger.warning(
                "Unverified employer refused: employer=%s status=%s",
                employer.pk, employer.verification_status,
            )
            return ServiceResult.fail(ErrorCode.NOT_VERIFIED, data={'status': employer.verification_status})

        return ServiceResult.ok(employer)


class VerificationService:
    """
    Verification state machine.

    Handles:
    - Admin review decisions (approve / reject / reset)
    - Automatic resubmission after a rejected employer edits their details
    - The review queue with status counts
    """

    @staticmethod
    def _apply(employer: EmployerProfile, action: str, reviewer=None,
               notes: Optional[str] = None) -> ServiceResult:
        """Apply a transition to a row already locked by the caller."""
        from_status = employer.verification_status
        to_status = TRANSITIONS.get((VerificationStatus(from_status), Action(action)))
        if to_status is None:
            return ServiceResult.fail(
                ErrorCode.CONFLICT,
                _('Cannot %(action)s an employer whose verification is %(status)s.') % {
                    'action': action, 'status': from_status,
                },
            )

        now = timezone.now()
        if action == Action.APPROVE:
            employer.verification_notes = notes or f"Approved by admin on {now:%Y-%m-%d}"
            employer.verification_date = now
        elif action == Action.REJECT:
            employer.verification_notes = notes
            employer.verification_date = now
        else:
            employer.verification_notes = ''
            employer.verification_date = None
        employer.verification_status = to_status
        employer.save(update_fields=[
            'verification_status', 'verification_notes', 'verification_date', 'updated_at',
        ])

        VerificationDecision.objects.create(
            employer=employer,
            action=action,
            reviewer=reviewer,
            from_status=from_status,
            to_status=to_status,
            notes=employer.verification_notes,
        )

        if action == Action.APPROVE:
            notify('verification_approved', employer.user_id, {
                'employer_name': employer.display_name,
            })
        elif action == Action.REJECT:
            notify('verification_rejected', employer.user_id, {
                'employer_name': employer.display_name,
                'notes': employer.verification_notes,
            })

        logger.info(
            "Verification %s: employer=%s %s -> %s reviewer=%s",
            action, employer.pk, from_status, to_status, getattr(reviewer, 'pk', None),
        )
        return ServiceResult.ok(employer)

    @staticmethod
    @transaction.atomic
    def decide(employer_id, action: str, reviewer, notes: Optional[str] = None) -> ServiceResult:
        """
        Record an admin review decision.

        Args:
            employer_id: EmployerProfile id
            action: ``approve``, ``reject`` or ``reset``
            reviewer: Admin account making the decision
            notes: Reviewer notes; required (non-blank) for ``reject``
        """
        if not is_admin(reviewer):
            logger.warning("Non-admin review attempt: user=%s employer=%s",
                           getattr(reviewer, 'pk', None), employer_id)
            return ServiceResult.fail(ErrorCode.FORBIDDEN, _('Admin access required.'))

        if action not in REVIEW_ACTIONS:
            return ServiceResult.fail(
                ErrorCode.VALIDATION,
                errors={'action': [f'Action must be one of: {", ".join(a.value for a in REVIEW_ACTIONS)}.']},
            )

        notes = (notes or '').strip()
        if action == Action.REJECT and not notes:
            return ServiceResult.fail(
                ErrorCode.VALIDATION,
                _('A rejection reason is required.'),
                errors={'notes': ['A rejection reason is required.']},
            )

        employer = EmployerProfile.objects.select_for_update().filter(pk=employer_id).first()
        if employer is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, _('Employer profile not found.'))

        return VerificationService._apply(employer, action, reviewer=reviewer, notes=notes or None)

    @staticmethod
    @transaction.atomic
    def resubmit(employer: EmployerProfile) -> ServiceResult:
        """Put a rejected employer back in the review queue."""
        locked = EmployerProfile.objects.select_for_update().get(pk=employer.pk)
        result = VerificationService._apply(locked, Action.RESUBMIT)
        if result:
            employer.refresh_from_db()
        return result

    @staticmethod
    def review_queue(reviewer, status: Optional[str] = None, page=None, limit=None) -> ServiceResult:
        """
        List employer profiles for review.

        Pending profiles come first, each group oldest first.

        Returns:
            Paginated profiles plus ``counts`` per verification status.
        """
        if not is_admin(reviewer):
            return ServiceResult.fail(ErrorCode.FORBIDDEN, _('Admin access required.'))

        if status and status not in VerificationStatus.values:
            return ServiceResult.fail(
                ErrorCode.VALIDATION,
                errors={'status': [f'Status must be one of: {", ".join(VerificationStatus.values)}.']},
            )

        queryset = EmployerProfile.objects.select_related('user')
        if status:
            queryset = queryset.filter(verification_status=status)
        queryset = queryset.annotate(
            review_order=Case(
                When(verification_status=VerificationStatus.PENDING, then=Value(0)),
                default=Value(1),
                output_field=IntegerField(),
            ),
        ).order_by('review_order', 'created_at')

        counts = {value: 0 for value in VerificationStatus.values}
        for row in EmployerProfile.objects.order_by().values('verification_status').annotate(n=Count('id')):
            counts[row['verification_status']] = row['n']

        data = paginate(queryset, page, limit)
        data['counts'] = counts
        return ServiceResult.ok(data)

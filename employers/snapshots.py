"""
Saved CV snapshots.

A verified employer may save an immutable copy of a visible CV. The copy is
keyed by the CV version, so saving the same version twice is a conflict
while saving again after the jobseeker edits and republishes is allowed.
"""

import logging
from typing import Any, Dict

from django.db import IntegrityError, transaction
from django.utils.translation import gettext_lazy as _

from core.pagination import paginate
from core.results import ErrorCode, ServiceResult
from jobseekers.models import JobSeekerProfile
from notifications.dispatcher import notify

from .models import EmployerSavedSnapshot
from .verification import VerificationGate

logger = logging.getLogger(__name__)


def build_snapshot_data(profile: JobSeekerProfile) -> Dict[str, Any]:
    """
    Denormalised copy of a profile's display fields and CV sections.

    Age and phone are never included.
    """
    cv = profile.cv
    return {
        'profile': {
            'id': str(profile.pk),
            'full_name': profile.full_name,
            'city': profile.city,
            'preferred_role': profile.preferred_role,
            'years_experience': profile.years_experience,
        },
        'version': cv.version,
        'sections': [
            {
                'section_type': section.section_type,
                'position': section.position,
                'content': section.content,
            }
            for section in cv.sections.order_by('position', 'section_type')
        ],
    }


def saved_by_row(snapshot: EmployerSavedSnapshot) -> Dict[str, Any]:
    employer = snapshot.employer
    return {
        'employer_name': employer.display_name,
        'employer_type': employer.employer_type,
        'is_verified': employer.is_verified,
        'city': employer.city,
        'saved_at': snapshot.saved_at,
        'snapshot_version': snapshot.snapshot_version,
    }


def _snapshot_not_found() -> ServiceResult:
    return ServiceResult.fail(ErrorCode.NOT_FOUND, _('Snapshot not found.'))


class SnapshotService:
    """Save, list, read and delete employer CV snapshots."""

    @staticmethod
    @transaction.atomic
    def save_snapshot(user, profile_id) -> ServiceResult:
        """
        Save a snapshot of a visible CV at its current version.

        Returns:
            ServiceResult with the new EmployerSavedSnapshot, or ``conflict``
            (with the existing snapshot as data) when this version is already
            saved.
        """
        gate = VerificationGate.check(user)
        if not gate:
            return gate
        employer = gate.data

        # Lock the profile row so the copy matches a single CV version
        profile = (
            JobSeekerProfile.objects
            .select_for_update()
            .select_related('cv')
            .filter(pk=profile_id)
            .first()
        )
        if profile is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, _('CV not found.'))
        if not profile.is_visible:
            return ServiceResult.fail(ErrorCode.FORBIDDEN, _('This CV is not currently visible.'))

        cv = profile.cv
        existing = EmployerSavedSnapshot.objects.filter(
            employer=employer, cv=cv, snapshot_version=cv.version,
        ).first()
        if existing is not None:
            return ServiceResult.fail(
                ErrorCode.CONFLICT,
                _('You have already saved this version of the CV.'),
                data=existing,
            )

        try:
            with transaction.atomic():
                snapshot = EmployerSavedSnapshot.objects.create(
                    employer=employer,
                    jobseeker=profile,
                    cv=cv,
                    snapshot_version=cv.version,
                    data=build_snapshot_data(profile),
                )
        except IntegrityError:
            logger.info("Concurrent snapshot save lost: employer=%s cv=%s v%s",
                        employer.pk, cv.pk, cv.version)
            return ServiceResult.fail(ErrorCode.CONFLICT, _('You have already saved this version of the CV.'))

        notify('cv_saved', profile.user_id, {
            'employer_name': employer.display_name,
            'version': cv.version,
        })

        logger.info("Snapshot saved: employer=%s cv=%s v%s", employer.pk, cv.pk, cv.version)
        return ServiceResult.ok(snapshot, _('CV saved.'))

    @staticmethod
    def list_snapshots(user, page=None, limit=None) -> ServiceResult:
        """Caller's snapshots, newest first."""
        gate = VerificationGate.check(user)
        if not gate:
            return gate

        queryset = (
            EmployerSavedSnapshot.objects
            .filter(employer=gate.data)
            .select_related('cv', 'jobseeker')
            .order_by('-saved_at')
        )
        return ServiceResult.ok(paginate(queryset, page, limit))

    @staticmethod
    def get_snapshot(user, snapshot_id) -> ServiceResult:
        gate = VerificationGate.check(user)
        if not gate:
            return gate

        snapshot = (
            EmployerSavedSnapshot.objects
            .select_related('cv', 'jobseeker')
            .filter(pk=snapshot_id, employer=gate.data)
            .first()
        )
        if snapshot is None:
            return _snapshot_not_found()
        return ServiceResult.ok(snapshot)

    @staticmethod
    @transaction.atomic
    def delete_snapshot(user, snapshot_id) -> ServiceResult:
        """
        Delete one of the caller's snapshots.

        Not gated by verification. Another employer's snapshot reports
        ``not_found``.
        """
        resolved = VerificationGate.resolve(user)
        if not resolved:
            return resolved

        deleted, _rows = EmployerSavedSnapshot.objects.filter(
            pk=snapshot_id, employer=resolved.data,
        ).delete()
        if not deleted:
            return _snapshot_not_found()

        logger.info("Snapshot deleted: employer=%s snapshot=%s", resolved.data.pk, snapshot_id)
        return ServiceResult.ok(message=_('Snapshot deleted.'))

    @staticmethod
    def who_saved_my_cv(user, page=None, limit=None) -> ServiceResult:
        """
        Employers that saved the caller's CV, newest save first.

        Only the jobseeker who owns the CV may ask. Each row names the
        employer and the CV version they saved; snapshot contents are not
        returned.
        """
        if getattr(user, 'role', None) != 'jobseeker':
            return ServiceResult.fail(ErrorCode.FORBIDDEN)

        profile = JobSeekerProfile.objects.filter(user=user).first()
        if profile is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, _('Jobseeker profile not found.'))

        queryset = (
            EmployerSavedSnapshot.objects
            .filter(jobseeker=profile)
            .select_related('employer')
            .order_by('-saved_at')
        )
        return ServiceResult.ok(paginate(queryset, page, limit, transform=saved_by_row))

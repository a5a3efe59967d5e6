"""
Jobseeker Services - Business Logic Layer

This module provides the service classes behind the jobseeker side of the
workflow:

- CompletenessPolicy: the rules a CV must satisfy before publication
- JobSeekerProfileService: profile creation and display-field edits
- VisibilityService: publication toggle, which also locks/unlocks the CV
- CVService: section writes under the visibility lock

Every public method returns a ServiceResult. Expected business outcomes
(locked, incomplete, missing profile) are reported through the result's
``code``, never raised.
"""

import logging
from typing import Any, Dict, Optional

from django.db import transaction
from django.db.models import F
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from core.conf import get_setting
from core.results import ErrorCode, ServiceResult

from .models import CVDocument, CVSection, JobSeekerProfile
from .sections import (
    SectionType,
    default_position,
    entry_count,
    is_known_type,
    section_search_text,
    validate_payload,
)

logger = logging.getLogger(__name__)


# =============================================================================
# COMPLETENESS POLICY
# =============================================================================

class CompletenessPolicy:
    """
    Publication rules for a CV.

    A CV may only be published when it has a summary of at least
    MIN_SUMMARY_LENGTH characters and at least one skill, one experience
    entry and one education entry.
    """

    RULES = (
        SectionType.SUMMARY,
        SectionType.SKILLS,
        SectionType.EXPERIENCE,
        SectionType.EDUCATION,
    )

    @classmethod
    def violations(cls, cv: CVDocument) -> Dict[str, str]:
        """Return ``{rule: message}`` for every rule the CV fails."""
        sections = cv.sections_by_type()
        min_summary = get_setting('MIN_SUMMARY_LENGTH')

        def count(section_type):
            section = sections.get(section_type)
            return entry_count(section_type, section.content if section else None)

        errors = {}
        if count(SectionType.SUMMARY) < min_summary:
            errors[SectionType.SUMMARY.value] = str(
                _('Professional summary must be at least %(n)d characters') % {'n': min_summary}
            )
        if count(SectionType.SKILLS) == 0:
            errors[SectionType.SKILLS.value] = str(_('At least one skill is required'))
        if count(SectionType.EXPERIENCE) == 0:
            errors[SectionType.EXPERIENCE.value] = str(_('At least one experience entry is required'))
        if count(SectionType.EDUCATION) == 0:
            errors[SectionType.EDUCATION.value] = str(_('At least one education entry is required'))
        return errors

    @classmethod
    def score(cls, cv: CVDocument) -> int:
        failed = len(cls.violations(cv))
        return int(100 * (len(cls.RULES) - failed) / len(cls.RULES))


# =============================================================================
# PROFILE INPUT
# =============================================================================

class ProfileFieldsSerializer(serializers.Serializer):
    """Validation for jobseeker display and private fields."""

    full_name = serializers.CharField(max_length=200)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    preferred_role = serializers.CharField(max_length=200, required=False, allow_blank=True)
    years_experience = serializers.IntegerField(min_value=0, max_value=70, required=False)
    age = serializers.IntegerField(min_value=16, max_value=100, required=False, allow_null=True)
    phone = serializers.RegexField(
        r'^\+?[0-9 ()\-]{6,30}$',
        max_length=30,
        required=False,
        allow_blank=True,
    )


def _locked_profile_for(user) -> Optional[JobSeekerProfile]:
    """Fetch the caller's profile with its row locked for the transaction."""
    return (
        JobSeekerProfile.objects
        .select_for_update()
        .filter(user=user)
        .first()
    )


def _bump_version(cv: CVDocument, expected_version: Optional[int] = None) -> bool:
    """
    Increment the CV version by exactly one.

    With ``expected_version`` the increment is a conditional update that
    only applies when the stored version still matches.
    """
    queryset = CVDocument.objects.filter(pk=cv.pk)
    if expected_version is not None:
        queryset = queryset.filter(version=expected_version)
    updated = queryset.update(version=F('version') + 1, updated_at=timezone.now())
    return updated == 1


def _profile_not_found() -> ServiceResult:
    return ServiceResult.fail(ErrorCode.NOT_FOUND, _('Profile not found.'))


def _not_a_mapping() -> ServiceResult:
    return ServiceResult.fail(
        ErrorCode.VALIDATION,
        errors={'non_field_errors': ['Expected an object of profile fields.']},
    )


def _version_conflict(expected_version: int) -> ServiceResult:
    return ServiceResult.fail(
        ErrorCode.CONFLICT,
        _('Your CV was changed elsewhere. Reload it and try again.'),
        errors={'expected_version': [f'CV is no longer at version {expected_version}.']},
    )


# =============================================================================
# PROFILE SERVICE
# =============================================================================

class JobSeekerProfileService:
    """
    Service for jobseeker profiles.

    Handles:
    - One-time profile creation (with its CV document)
    - Display/private field edits, which obey the visibility lock
    """

    @staticmethod
    def get_profile(user) -> Optional[JobSeekerProfile]:
        return (
            JobSeekerProfile.objects
            .select_related('cv')
            .prefetch_related('cv__sections')
            .filter(user=user)
            .first()
        )

    @staticmethod
    @transaction.atomic
    def create_profile(user, fields: Optional[Dict[str, Any]] = None) -> ServiceResult:
        """
        Create the caller's profile in draft state with an empty CV at version 1.

        Args:
            user: Authenticated jobseeker account
            fields: Mapping of profile fields (see ProfileFieldsSerializer).
                Unknown keys are ignored.
        """
        if getattr(user, 'role', None) != 'jobseeker':
            return ServiceResult.fail(ErrorCode.FORBIDDEN, _('Only jobseekers can create a CV profile.'))

        if JobSeekerProfile.objects.filter(user=user).exists():
            return ServiceResult.fail(ErrorCode.CONFLICT, _('Profile already exists.'))

        if not isinstance(fields, dict):
            return _not_a_mapping()

        serializer = ProfileFieldsSerializer(data=fields)
        if not serializer.is_valid():
            return ServiceResult.fail(ErrorCode.VALIDATION, errors=serializer.errors)

        profile = JobSeekerProfile.objects.create(user=user, **serializer.validated_data)
        CVDocument.objects.create(profile=profile)

        logger.info("Jobseeker profile created: profile=%s user=%s", profile.pk, user.pk)
        return ServiceResult.ok(JobSeekerProfileService.get_profile(user), _('Profile created.'))

    @staticmethod
    @transaction.atomic
    def update_profile(user, fields: Optional[Dict[str, Any]] = None) -> ServiceResult:
        """
        Update profile fields.

        Refused with ``locked`` while the profile is visible. Display fields
        are part of snapshot content, so a successful edit bumps the CV
        version.
        """
        profile = _locked_profile_for(user)
        if profile is None:
            return _profile_not_found()
        if profile.is_visible:
            return ServiceResult.fail(ErrorCode.LOCKED)
        if not isinstance(fields, dict):
            return _not_a_mapping()

        serializer = ProfileFieldsSerializer(data=fields, partial=True)
        if not serializer.is_valid():
            return ServiceResult.fail(ErrorCode.VALIDATION, errors=serializer.errors)
        if not serializer.validated_data:
            return ServiceResult.fail(ErrorCode.VALIDATION, _('No profile fields supplied.'))

        for name, value in serializer.validated_data.items():
            setattr(profile, name, value)
        profile.save(update_fields=[*serializer.validated_data.keys(), 'updated_at'])
        _bump_version(profile.cv)

        logger.info("Jobseeker profile updated: profile=%s fields=%s",
                    profile.pk, sorted(serializer.validated_data))
        return ServiceResult.ok(JobSeekerProfileService.get_profile(user), _('Profile updated.'))


# =============================================================================
# VISIBILITY LOCK MANAGER
# =============================================================================

class VisibilityService:
    """
    Publication toggle.

    The CV lock is derived from the publication state, so flipping the
    state is the only write and the lock can never disagree with it.
    """

    @staticmethod
    @transaction.atomic
    def set_visibility(user, target_visible: bool) -> ServiceResult:
        """
        Publish or hide the caller's profile.

        Publishing re-validates the completeness policy and reports every
        violated rule at once; nothing changes when any rule fails. Hiding
        always succeeds.
        """
        profile = _locked_profile_for(user)
        if profile is None:
            return _profile_not_found()

        if target_visible:
            violations = CompletenessPolicy.violations(profile.cv)
            if violations:
                return ServiceResult.fail(
                    ErrorCode.VALIDATION,
                    _('Profile is incomplete.'),
                    errors=violations,
                )
            new_state = JobSeekerProfile.PublicationState.PUBLISHED
            published_at = timezone.now()
        else:
            new_state = JobSeekerProfile.PublicationState.DRAFT
            published_at = None

        # Single conditional write keyed by profile id; last write wins.
        JobSeekerProfile.objects.filter(pk=profile.pk).update(
            publication_state=new_state,
            published_at=published_at,
            updated_at=timezone.now(),
        )

        logger.info("Visibility set: profile=%s state=%s", profile.pk, new_state)
        return ServiceResult.ok(
            JobSeekerProfileService.get_profile(user),
            _('Your CV is now visible to employers.') if target_visible
            else _('Your CV is hidden and can be edited.'),
        )

    @staticmethod
    def get_visibility(user) -> ServiceResult:
        profile = JobSeekerProfile.objects.filter(user=user).only('publication_state').first()
        if profile is None:
            return _profile_not_found()
        return ServiceResult.ok({'is_visible': profile.is_visible})


# =============================================================================
# CV SECTION MUTATION
# =============================================================================

class CVService:
    """
    CV reads and section writes.

    Writes are refused while the CV is locked. Each logical save replaces
    the affected section rows wholesale and increments the CV version by
    exactly one, however many sections it touched.
    """

    @staticmethod
    def get_cv(user) -> ServiceResult:
        """Owner view of the profile and CV, private fields included."""
        profile = JobSeekerProfileService.get_profile(user)
        if profile is None:
            return _profile_not_found()
        return ServiceResult.ok(profile)

    @staticmethod
    def write_section(
        user,
        section_type: str,
        content: Any,
        position: Optional[int] = None,
        expected_version: Optional[int] = None,
    ) -> ServiceResult:
        """Upsert a single section. See ``save_sections``."""
        positions = {section_type: position} if position is not None else None
        return CVService.save_sections(
            user,
            {section_type: content},
            positions=positions,
            expected_version=expected_version,
        )

    @staticmethod
    @transaction.atomic
    def save_sections(
        user,
        sections: Dict[str, Any],
        positions: Optional[Dict[str, int]] = None,
        expected_version: Optional[int] = None,
    ) -> ServiceResult:
        """
        Save one or more sections as one logical save.

        Args:
            user: CV owner
            sections: ``{section_type: content}``
            positions: Optional explicit ``{section_type: position}``
            expected_version: When given, the save only applies if the CV is
                still at this version (otherwise ``conflict``)

        Returns:
            ServiceResult with the refreshed profile
        """
        profile = _locked_profile_for(user)
        if profile is None:
            return _profile_not_found()
        if profile.is_visible:
            logger.info("Section write refused while locked: profile=%s", profile.pk)
            return ServiceResult.fail(ErrorCode.LOCKED)
        if not sections:
            return ServiceResult.fail(ErrorCode.VALIDATION, _('No sections supplied.'))

        positions = positions or {}
        normalized = {}
        errors = {}
        for section_type, content in sections.items():
            payload, payload_errors = validate_payload(section_type, content)
            if payload_errors:
                errors[str(section_type)] = payload_errors
            else:
                normalized[section_type] = payload
        for section_type, position in positions.items():
            if not isinstance(position, int) or isinstance(position, bool) or position < 0:
                errors.setdefault(str(section_type), {})
                errors[str(section_type)]['position'] = ['Position must be a non-negative integer.']
        if errors:
            return ServiceResult.fail(ErrorCode.VALIDATION, errors=errors)

        cv = profile.cv
        if not _bump_version(cv, expected_version):
            return _version_conflict(expected_version)

        for section_type, payload in normalized.items():
            CVSection.objects.update_or_create(
                cv=cv,
                section_type=section_type,
                defaults={
                    'content': payload,
                    'position': positions.get(section_type, default_position(section_type)),
                    'search_text': section_search_text(section_type, payload),
                },
            )

        logger.info("CV sections saved: cv=%s types=%s", cv.pk, sorted(normalized))
        return ServiceResult.ok(JobSeekerProfileService.get_profile(user), _('CV saved.'))

    @staticmethod
    @transaction.atomic
    def remove_section(user, section_type: str, expected_version: Optional[int] = None) -> ServiceResult:
        """Delete a section row under the same lock rule, one version increment."""
        if not is_known_type(section_type):
            return ServiceResult.fail(
                ErrorCode.VALIDATION,
                errors={'section_type': [f'Unknown section type "{section_type}".']},
            )

        profile = _locked_profile_for(user)
        if profile is None:
            return _profile_not_found()
        if profile.is_visible:
            return ServiceResult.fail(ErrorCode.LOCKED)

        cv = profile.cv
        if not CVSection.objects.filter(cv=cv, section_type=section_type).exists():
            return ServiceResult.fail(ErrorCode.NOT_FOUND, _('Section not found.'))
        if not _bump_version(cv, expected_version):
            return _version_conflict(expected_version)

        CVSection.objects.filter(cv=cv, section_type=section_type).delete()

        logger.info("CV section removed: cv=%s type=%s", cv.pk, section_type)
        return ServiceResult.ok(JobSeekerProfileService.get_profile(user), _('Section removed.'))

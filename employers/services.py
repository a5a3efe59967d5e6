"""
Employer Services - profile lifecycle.

Employers register as an individual or a company. Each type has its own
verification inputs; profiles start pending and wait for an admin review.
Editing the verification inputs after a rejection resubmits the profile.
"""

import logging
from typing import Any, Dict, Optional

from django.db import transaction
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from core.results import ErrorCode, ServiceResult

from .models import EmployerProfile, VerificationStatus
from .verification import VerificationService

logger = logging.getLogger(__name__)

REQUIRED_BY_TYPE = {
    EmployerProfile.EmployerType.COMPANY: ('company_name', 'registration_number'),
    EmployerProfile.EmployerType.INDIVIDUAL: ('national_id',),
}


class EmployerFieldsSerializer(serializers.Serializer):
    employer_type = serializers.ChoiceField(choices=EmployerProfile.EmployerType.choices)
    display_name = serializers.CharField(max_length=200)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    website = serializers.URLField(required=False, allow_blank=True)
    linkedin = serializers.URLField(required=False, allow_blank=True)
    contact_person_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    contact_person_role = serializers.CharField(max_length=200, required=False, allow_blank=True)
    company_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    registration_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    national_id = serializers.CharField(max_length=100, required=False, allow_blank=True)
    verification_document_id = serializers.CharField(max_length=255, required=False, allow_blank=True)


def missing_verification_fields(values: Dict[str, Any]) -> Dict[str, list]:
    """Every type-specific field that is missing or blank."""
    required = REQUIRED_BY_TYPE.get(values.get('employer_type'), ())
    return {
        name: [f'This field is required for {values.get("employer_type")} employers.']
        for name in required
        if not (values.get(name) or '').strip()
    }


def _not_a_mapping() -> ServiceResult:
    return ServiceResult.fail(
        ErrorCode.VALIDATION,
        errors={'non_field_errors': ['Expected an object of profile fields.']},
    )


class EmployerProfileService:
    """Creation and editing of employer profiles."""

    @staticmethod
    def get_profile(user) -> Optional[EmployerProfile]:
        return EmployerProfile.objects.filter(user=user).first()

    @staticmethod
    @transaction.atomic
    def create_profile(user, fields: Optional[Dict[str, Any]] = None) -> ServiceResult:
        """
        Create the caller's employer profile in ``pending`` verification.

        ``fields`` is a mapping of EmployerFieldsSerializer fields; unknown
        keys are ignored. All missing type-specific fields are reported
        together.
        """
        if getattr(user, 'role', None) != 'employer':
            return ServiceResult.fail(ErrorCode.FORBIDDEN, _('Only employer accounts can create an employer profile.'))

        if EmployerProfile.objects.filter(user=user).exists():
            return ServiceResult.fail(ErrorCode.CONFLICT, _('Employer profile already exists.'))
        if not isinstance(fields, dict):
            return _not_a_mapping()

        serializer = EmployerFieldsSerializer(data=fields)
        if not serializer.is_valid():
            return ServiceResult.fail(ErrorCode.VALIDATION, errors=serializer.errors)

        missing = missing_verification_fields(serializer.validated_data)
        if missing:
            return ServiceResult.fail(ErrorCode.VALIDATION, _('Verification details are incomplete.'), errors=missing)

        employer = EmployerProfile.objects.create(user=user, **serializer.validated_data)

        logger.info("Employer profile created: employer=%s type=%s", employer.pk, employer.employer_type)
        return ServiceResult.ok(employer, _('Profile created. Your account is pending verification.'))

    @staticmethod
    @transaction.atomic
    def update_profile(user, fields: Optional[Dict[str, Any]] = None) -> ServiceResult:
        """
        Update the caller's employer profile.

        When the profile is rejected and a verification field changes, the
        profile is resubmitted for review.
        """
        employer = EmployerProfile.objects.select_for_update().filter(user=user).first()
        if employer is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, _('Employer profile not found.'))
        if not isinstance(fields, dict):
            return _not_a_mapping()

        serializer = EmployerFieldsSerializer(data=fields, partial=True)
        if not serializer.is_valid():
            return ServiceResult.fail(ErrorCode.VALIDATION, errors=serializer.errors)
        changes = serializer.validated_data
        if not changes:
            return ServiceResult.fail(ErrorCode.VALIDATION, _('No profile fields supplied.'))

        merged = {name: getattr(employer, name) for name in EmployerProfile.VERIFICATION_FIELDS}
        merged.update({k: v for k, v in changes.items() if k in merged})
        missing = missing_verification_fields(merged)
        if missing:
            return ServiceResult.fail(ErrorCode.VALIDATION, _('Verification details are incomplete.'), errors=missing)

        verification_changed = any(
            name in changes and changes[name] != getattr(employer, name)
            for name in EmployerProfile.VERIFICATION_FIELDS
        )

        for name, value in changes.items():
            setattr(employer, name, value)
        employer.save(update_fields=[*changes.keys(), 'updated_at'])

        message = _('Profile updated.')
        if verification_changed and employer.verification_status == VerificationStatus.REJECTED:
            VerificationService.resubmit(employer)
            message = _('Profile updated and resubmitted for verification.')

        logger.info("Employer profile updated: employer=%s fields=%s", employer.pk, sorted(changes))
        return ServiceResult.ok(employer, message)

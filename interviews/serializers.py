"""
Interview API serializers.

The employer and jobseeker see different projections of the same request.
The jobseeker's phone number is only part of the employer projection once
the request is accepted or completed; it is computed at read time from the
current status, never copied onto the request.
"""

from rest_framework import serializers

from .models import InterviewRequest

BASE_FIELDS = [
    'id', 'status', 'interview_type', 'proposed_at', 'location', 'meeting_link',
    'employer_message', 'response_message', 'responded_at', 'cancelled_at',
    'completed_at', 'created_at', 'updated_at',
]


class EmployerInterviewSerializer(serializers.ModelSerializer):
    """Request as seen by the employer who sent it."""

    jobseeker = serializers.SerializerMethodField()

    class Meta:
        model = InterviewRequest
        fields = BASE_FIELDS + ['jobseeker']
        read_only_fields = fields

    def get_jobseeker(self, obj):
        profile = obj.jobseeker
        data = {
            'id': str(profile.pk),
            'full_name': profile.full_name,
            'city': profile.city,
            'preferred_role': profile.preferred_role,
        }
        if obj.discloses_contact:
            data['phone'] = profile.phone
        return data


class JobseekerInterviewSerializer(serializers.ModelSerializer):
    """Request as seen by the jobseeker it is addressed to."""

    employer = serializers.SerializerMethodField()

    class Meta:
        model = InterviewRequest
        fields = BASE_FIELDS + ['employer']
        read_only_fields = fields

    def get_employer(self, obj):
        employer = obj.employer
        return {
            'id': str(employer.pk),
            'display_name': employer.display_name,
            'employer_type': employer.employer_type,
            'city': employer.city,
            'website': employer.website,
            'is_verified': employer.is_verified,
        }


def serializer_for(user):
    """Projection matching the caller's role."""
    if getattr(user, 'role', None) == 'employer':
        return EmployerInterviewSerializer
    return JobseekerInterviewSerializer


# =============================================================================
# INPUT
# =============================================================================

class InterviewCreateSerializer(serializers.Serializer):
    jobseeker_profile_id = serializers.UUIDField()
    interview_type = serializers.CharField()
    proposed_at = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    location = serializers.CharField(required=False, allow_blank=True)
    meeting_link = serializers.CharField(required=False, allow_blank=True)
    message = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)


class RespondSerializer(serializers.Serializer):
    decision = serializers.CharField()
    message = serializers.CharField(required=False, allow_blank=True)


class InterviewListQuerySerializer(serializers.Serializer):
    status = serializers.CharField(required=False)
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    limit = serializers.IntegerField(min_value=1, required=False)

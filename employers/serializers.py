"""
Employer API serializers.
"""

from rest_framework import serializers

from .models import EmployerProfile, EmployerSavedSnapshot, VerificationDecision


class EmployerProfileSerializer(serializers.ModelSerializer):
    """Employer's own profile, including verification state."""

    is_verified = serializers.BooleanField(read_only=True)

    class Meta:
        model = EmployerProfile
        fields = [
            'id', 'employer_type', 'display_name', 'city', 'website', 'linkedin',
            'contact_person_name', 'contact_person_role',
            'company_name', 'registration_number', 'national_id', 'verification_document_id',
            'verification_status', 'is_verified', 'verification_notes', 'verification_date',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class VerificationDecisionSerializer(serializers.ModelSerializer):
    reviewer_email = serializers.EmailField(source='reviewer.email', read_only=True, default=None)

    class Meta:
        model = VerificationDecision
        fields = ['action', 'from_status', 'to_status', 'notes', 'reviewer_email', 'created_at']
        read_only_fields = fields


class ReviewEmployerSerializer(EmployerProfileSerializer):
    """Admin review queue entry."""

    email = serializers.EmailField(source='user.email', read_only=True)
    decisions = VerificationDecisionSerializer(source='verification_decisions', many=True, read_only=True)

    class Meta(EmployerProfileSerializer.Meta):
        fields = EmployerProfileSerializer.Meta.fields + ['email', 'decisions']
        read_only_fields = fields


class SnapshotSerializer(serializers.ModelSerializer):
    jobseeker_id = serializers.UUIDField(read_only=True)
    is_current_version = serializers.SerializerMethodField()
    is_currently_visible = serializers.SerializerMethodField()

    class Meta:
        model = EmployerSavedSnapshot
        fields = [
            'id', 'jobseeker_id', 'snapshot_version', 'data', 'saved_at',
            'is_current_version', 'is_currently_visible',
        ]
        read_only_fields = fields

    def get_is_current_version(self, obj) -> bool:
        return obj.snapshot_version == obj.cv.version

    def get_is_currently_visible(self, obj) -> bool:
        return obj.jobseeker.is_visible


# =============================================================================
# INPUT
# =============================================================================

class SnapshotCreateSerializer(serializers.Serializer):
    jobseeker_profile_id = serializers.UUIDField()


class ReviewDecisionInputSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=['approve', 'reject', 'reset'])
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class ReviewQueueQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=['pending', 'approved', 'rejected'], required=False,
    )
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    limit = serializers.IntegerField(min_value=1, required=False)

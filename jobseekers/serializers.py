"""
Jobseeker API serializers.

Output serializers come in two projections:
- owner view (private fields included)
- employer view (never age or phone)

Input serializers only shape request bodies; payload and business
validation happen in the services.
"""

from rest_framework import serializers

from .models import CVDocument, CVSection, JobSeekerProfile


class CVSectionSerializer(serializers.ModelSerializer):
    class Meta:
        model = CVSection
        fields = ['section_type', 'content', 'position', 'updated_at']
        read_only_fields = fields


class CVDocumentSerializer(serializers.ModelSerializer):
    is_locked = serializers.BooleanField(read_only=True)
    sections = CVSectionSerializer(many=True, read_only=True)

    class Meta:
        model = CVDocument
        fields = ['id', 'version', 'is_locked', 'sections', 'updated_at']
        read_only_fields = fields


class OwnerProfileSerializer(serializers.ModelSerializer):
    """The jobseeker's own view of their profile and CV."""

    is_visible = serializers.BooleanField(read_only=True)
    profile_completeness = serializers.IntegerField(read_only=True)
    cv = CVDocumentSerializer(read_only=True)

    class Meta:
        model = JobSeekerProfile
        fields = [
            'id', 'full_name', 'city', 'preferred_role', 'years_experience',
            'age', 'phone', 'publication_state', 'is_visible', 'published_at',
            'profile_completeness', 'cv', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class PublicCVSerializer(serializers.ModelSerializer):
    """CV of a published profile as seen by a verified employer."""

    version = serializers.IntegerField(source='cv.version', read_only=True)
    sections = CVSectionSerializer(source='cv.sections', many=True, read_only=True)

    class Meta:
        model = JobSeekerProfile
        fields = [
            'id', 'full_name', 'city', 'preferred_role', 'years_experience',
            'version', 'sections',
        ]
        read_only_fields = fields


# =============================================================================
# INPUT
# =============================================================================

class VisibilityInputSerializer(serializers.Serializer):
    is_visible = serializers.BooleanField()


class SectionWriteSerializer(serializers.Serializer):
    content = serializers.JSONField()
    position = serializers.IntegerField(min_value=0, required=False)
    expected_version = serializers.IntegerField(min_value=1, required=False)


class SectionsSaveSerializer(serializers.Serializer):
    sections = serializers.DictField(child=serializers.JSONField(), allow_empty=False)
    positions = serializers.DictField(child=serializers.IntegerField(min_value=0), required=False)
    expected_version = serializers.IntegerField(min_value=1, required=False)


class SearchQuerySerializer(serializers.Serializer):
    """Paging and mode parameters; filter parameters go to JobSeekerProfileFilter."""

    page = serializers.IntegerField(min_value=1, required=False, default=1)
    limit = serializers.IntegerField(min_value=1, required=False)
    teaser = serializers.BooleanField(required=False, default=False)

"""
CV section types and their payload schemas.

The set of section types is closed. Each type has a DRF serializer that
validates its payload; anything else is rejected before it reaches the
database.
"""

import json
from typing import Any, Dict, Optional, Tuple

from django.db import models
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers


class SectionType(models.TextChoices):
    """Section types in their canonical display order."""

    SUMMARY = 'summary', _('Professional Summary')
    EXPERIENCE = 'experience', _('Experience')
    EDUCATION = 'education', _('Education')
    SKILLS = 'skills', _('Skills')
    LANGUAGES = 'languages', _('Languages')
    CERTIFICATIONS = 'certifications', _('Certifications')
    PROJECTS = 'projects', _('Projects')
    PUBLICATIONS = 'publications', _('Publications')


def default_position(section_type: str) -> int:
    return SectionType.values.index(section_type)


# =============================================================================
# PAYLOAD SERIALIZERS
# =============================================================================

class SummarySerializer(serializers.Serializer):
    text = serializers.CharField(max_length=5000, allow_blank=True)


class ExperienceEntrySerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    company = serializers.CharField(max_length=200)
    location = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    start_date = serializers.DateField()
    end_date = serializers.DateField(required=False, allow_null=True, default=None)
    description = serializers.CharField(max_length=5000, required=False, allow_blank=True, default='')

    def validate(self, attrs):
        end_date = attrs.get('end_date')
        if end_date and end_date < attrs['start_date']:
            raise serializers.ValidationError({'end_date': _('End date must be after start date.')})
        return attrs


class ExperienceSerializer(serializers.Serializer):
    entries = ExperienceEntrySerializer(many=True)


class EducationEntrySerializer(serializers.Serializer):
    degree = serializers.CharField(max_length=200)
    institution = serializers.CharField(max_length=200)
    location = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    graduation_year = serializers.IntegerField(min_value=1900, max_value=2100)


class EducationSerializer(serializers.Serializer):
    entries = EducationEntrySerializer(many=True)


class SkillsSerializer(serializers.Serializer):
    items = serializers.ListField(
        child=serializers.CharField(max_length=100),
        max_length=100,
    )

    def validate_items(self, value):
        # Case-insensitive de-duplication, first spelling wins
        seen = set()
        items = []
        for item in value:
            key = item.strip().lower()
            if key and key not in seen:
                seen.add(key)
                items.append(item.strip())
        return items


class LanguageEntrySerializer(serializers.Serializer):
    PROFICIENCY_CHOICES = ['basic', 'conversational', 'fluent', 'native']

    name = serializers.CharField(max_length=100)
    proficiency = serializers.ChoiceField(choices=PROFICIENCY_CHOICES)


class LanguagesSerializer(serializers.Serializer):
    entries = LanguageEntrySerializer(many=True)


class CertificationEntrySerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    issuer = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    year = serializers.IntegerField(min_value=1900, max_value=2100, required=False, allow_null=True, default=None)


class CertificationsSerializer(serializers.Serializer):
    entries = CertificationEntrySerializer(many=True)


class ProjectEntrySerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(max_length=5000, required=False, allow_blank=True, default='')
    link = serializers.URLField(required=False, allow_blank=True, default='')


class ProjectsSerializer(serializers.Serializer):
    entries = ProjectEntrySerializer(many=True)


class PublicationEntrySerializer(serializers.Serializer):
    title = serializers.CharField(max_length=300)
    venue = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    link = serializers.URLField(required=False, allow_blank=True, default='')


class PublicationsSerializer(serializers.Serializer):
    entries = PublicationEntrySerializer(many=True)


PAYLOAD_SERIALIZERS = {
    SectionType.SUMMARY: SummarySerializer,
    SectionType.EXPERIENCE: ExperienceSerializer,
    SectionType.EDUCATION: EducationSerializer,
    SectionType.SKILLS: SkillsSerializer,
    SectionType.LANGUAGES: LanguagesSerializer,
    SectionType.CERTIFICATIONS: CertificationsSerializer,
    SectionType.PROJECTS: ProjectsSerializer,
    SectionType.PUBLICATIONS: PublicationsSerializer,
}


# =============================================================================
# HELPERS
# =============================================================================

def is_known_type(section_type: Any) -> bool:
    return section_type in SectionType.values


def validate_payload(section_type: str, content: Any) -> Tuple[Optional[Dict], Dict[str, Any]]:
    """
    Validate a section payload.

    Returns:
        ``(normalized_content, {})`` on success, ``(None, errors)`` otherwise.
        The normalized content is plain JSON (dates as ISO strings).
    """
    if not is_known_type(section_type):
        return None, {'section_type': [f'Unknown section type "{section_type}".']}
    if not isinstance(content, dict):
        return None, {'content': ['Section content must be an object.']}

    serializer = PAYLOAD_SERIALIZERS[SectionType(section_type)](data=content)
    if not serializer.is_valid():
        return None, serializer.errors
    return json.loads(json.dumps(serializer.data)), {}


def flatten_search_text(content: Any) -> str:
    """Collect every string in a payload into one lower-cased search string."""
    parts = []

    def _walk(value):
        if isinstance(value, str):
            if value:
                parts.append(value)
        elif isinstance(value, dict):
            for item in value.values():
                _walk(item)
        elif isinstance(value, (list, tuple)):
            for item in value:
                _walk(item)

    _walk(content)
    return ' '.join(parts).lower()


SKILL_DELIMITER = '|'


def normalize_skill(value: str) -> str:
    """Lower-cased, whitespace-collapsed skill with the delimiter removed."""
    return ' '.join(str(value).replace(SKILL_DELIMITER, ' ').split()).lower()


def skill_tokens(content: Optional[Dict]) -> str:
    """
    Delimited skill items, e.g. ``|python|django|``.

    Wrapping every item in delimiters lets search match a whole skill with a
    single ``contains`` lookup, so ``go`` never matches ``django``.
    """
    items = [normalize_skill(item) for item in (content or {}).get('items') or []]
    items = [item for item in items if item]
    if not items:
        return ''
    return SKILL_DELIMITER + SKILL_DELIMITER.join(items) + SKILL_DELIMITER


def section_search_text(section_type: str, content: Any) -> str:
    """Search text stored on a section row."""
    if section_type == SectionType.SKILLS:
        return skill_tokens(content)
    return flatten_search_text(content)


def entry_count(section_type: str, content: Optional[Dict]) -> int:
    """Number of entries in a list-style payload (characters for the summary)."""
    if not content:
        return 0
    if section_type == SectionType.SUMMARY:
        return len((content.get('text') or '').strip())
    if section_type == SectionType.SKILLS:
        return len(content.get('items') or [])
    return len(content.get('entries') or [])

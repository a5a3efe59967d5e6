"""
Jobseeker Filters - django-filter classes for profile search

Supports:
- City (partial, case-insensitive)
- Years of experience and age ranges (age is a filter only, never returned)
- Skills, all of which must match a whole skill item
- Keywords, every term must match name, preferred role, summary or skills
"""

import re

import django_filters
from django.db.models import Q

from .models import CVSection, JobSeekerProfile
from .sections import SKILL_DELIMITER, SectionType, normalize_skill

TERM_SPLIT = re.compile(r'[\s,]+')


def split_skills(value) -> list:
    """Comma separated skills, normalised and de-duplicated in order."""
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(',')
    skills = []
    for item in value:
        skill = normalize_skill(item)
        if skill and skill not in skills:
            skills.append(skill)
    return skills


def split_terms(value) -> list:
    """Keyword terms split on whitespace and commas."""
    return [term for term in TERM_SPLIT.split((value or '').lower()) if term]


class JobSeekerProfileFilter(django_filters.FilterSet):
    """
    Search filters over jobseeker profiles.

    Malformed values (``min_age=abc``) make the filterset invalid rather than
    being dropped, so a bad bound never widens the result set.
    """

    city = django_filters.CharFilter(lookup_expr='icontains')

    min_experience = django_filters.NumberFilter(
        field_name='years_experience',
        lookup_expr='gte',
        min_value=0,
    )
    max_experience = django_filters.NumberFilter(
        field_name='years_experience',
        lookup_expr='lte',
        min_value=0,
    )

    min_age = django_filters.NumberFilter(field_name='age', lookup_expr='gte', min_value=0)
    max_age = django_filters.NumberFilter(field_name='age', lookup_expr='lte', min_value=0)

    skills = django_filters.CharFilter(method='filter_skills')
    keywords = django_filters.CharFilter(method='filter_keywords')

    class Meta:
        model = JobSeekerProfile
        fields = ['city']

    def filter_skills(self, queryset, name, value):
        """Profiles holding ALL of the comma separated skills."""
        for skill in split_skills(value):
            matching = CVSection.objects.filter(
                section_type=SectionType.SKILLS,
                search_text__contains=f'{SKILL_DELIMITER}{skill}{SKILL_DELIMITER}',
            ).values('cv__profile_id')
            queryset = queryset.filter(pk__in=matching)
        return queryset

    def filter_keywords(self, queryset, name, value):
        """Every term must appear in the name, preferred role, summary or skills."""
        for term in split_terms(value):
            in_sections = CVSection.objects.filter(
                section_type__in=[SectionType.SUMMARY, SectionType.SKILLS],
                search_text__contains=term,
            ).values('cv__profile_id')
            queryset = queryset.filter(
                Q(full_name__icontains=term)
                | Q(preferred_role__icontains=term)
                | Q(pk__in=in_sections)
            )
        return queryset

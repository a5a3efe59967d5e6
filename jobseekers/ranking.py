"""
Search ranking for visible jobseeker profiles.

Ranking factors:
1. Keyword relevance (40%) - matches in preferred role, skills and summary
2. Profile completeness (30%) - which CV sections are filled in
3. Recency (20%) - when the CV was last updated
4. Discovery (10%) - profile is open to discovery

There are no paid boosts or promoted profiles.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from django.utils import timezone

from .filters import split_terms
from .models import JobSeekerProfile
from .sections import SectionType

# Percent weights, summing to 100
WEIGHTS = {
    'relevance': 40,
    'completeness': 30,
    'recency': 20,
    'discovery': 10,
}

# Used when the search has no keywords or skills to score against
NEUTRAL_RELEVANCE = 50

ROLE_MATCH = 1.5
SKILL_MATCH = 1.25
SUMMARY_MATCH = 1.0

# (days since update, score); anything older scores STALE_RECENCY
RECENCY_TIERS = ((7, 100), (30, 80), (90, 60), (180, 40), (365, 20))
STALE_RECENCY = 10


def _round(value: float) -> int:
    return int(value + 0.5)


@dataclass
class RankedProfile:
    profile: JobSeekerProfile
    relevance: int
    completeness: int
    recency: int
    discovery: int
    score: int = field(init=False)

    def __post_init__(self):
        weighted = (
            self.relevance * WEIGHTS['relevance']
            + self.completeness * WEIGHTS['completeness']
            + self.recency * WEIGHTS['recency']
            + self.discovery * WEIGHTS['discovery']
        )
        self.score = (weighted + 50) // 100

    @property
    def factors(self) -> List[str]:
        """Human readable reasons for the rank."""
        reasons = []
        if self.relevance >= 70:
            reasons.append('High keyword relevance')
        elif self.relevance >= 40:
            reasons.append('Moderate keyword relevance')
        if self.completeness >= 80:
            reasons.append('Complete profile')
        elif self.completeness >= 50:
            reasons.append('Partially complete profile')
        if self.recency >= 80:
            reasons.append('Recently updated')
        if self.discovery == 100:
            reasons.append('Actively seeking opportunities')
        return reasons or ['Basic profile match']


def ranking_terms(filters: Optional[Dict]) -> List[str]:
    """Keyword and skill terms, split on whitespace and commas."""
    filters = filters or {}
    terms = []
    for key in ('keywords', 'skills'):
        value = filters.get(key)
        if isinstance(value, (list, tuple)):
            value = ','.join(str(item) for item in value)
        terms.extend(split_terms(value))
    return terms


def _sections(profile: JobSeekerProfile) -> Dict[str, Dict]:
    return {
        section_type: section.content or {}
        for section_type, section in profile.cv.sections_by_type().items()
    }


def relevance_score(profile: JobSeekerProfile, terms: List[str]) -> int:
    if not terms:
        return NEUTRAL_RELEVANCE

    sections = _sections(profile)
    role = profile.preferred_role.lower()
    skills = [str(item).lower() for item in sections.get(SectionType.SKILLS, {}).get('items') or []]
    summary = (sections.get(SectionType.SUMMARY, {}).get('text') or '').lower()

    matches = 0.0
    for term in terms:
        if term in role:
            matches += ROLE_MATCH
        matches += SKILL_MATCH * sum(1 for skill in skills if term in skill)
        if term in summary:
            matches += SUMMARY_MATCH

    # Three fields to match against per term
    return min(100, _round(100 * matches / (len(terms) * 3)))


def completeness_score(profile: JobSeekerProfile) -> int:
    """Weighted share of filled profile fields and CV sections (0-100)."""
    sections = _sections(profile)

    def has_entries(section_type):
        return bool(sections.get(section_type, {}).get('entries'))

    weighted = (
        (bool(profile.full_name), 15),
        (bool(profile.city), 10),
        (bool(profile.preferred_role), 15),
        (bool((sections.get(SectionType.SUMMARY, {}).get('text') or '').strip()), 15),
        (bool(sections.get(SectionType.SKILLS, {}).get('items')), 15),
        (has_entries(SectionType.EXPERIENCE), 10),
        (has_entries(SectionType.EDUCATION), 5),
        (has_entries(SectionType.CERTIFICATIONS), 5),
        (has_entries(SectionType.PROJECTS), 5),
        (has_entries(SectionType.PUBLICATIONS), 3),
        (has_entries(SectionType.LANGUAGES), 2),
    )
    return sum(weight for filled, weight in weighted if filled)


def recency_score(updated_at: datetime, now: Optional[datetime] = None) -> int:
    days = ((now or timezone.now()) - updated_at).days
    for max_days, score in RECENCY_TIERS:
        if days <= max_days:
            return score
    return STALE_RECENCY


def discovery_score(profile: JobSeekerProfile) -> int:
    return 100 if profile.is_visible else 0


def rank_profiles(
    profiles: Iterable[JobSeekerProfile],
    filters: Optional[Dict] = None,
    now: Optional[datetime] = None,
) -> List[RankedProfile]:
    """
    Score and sort profiles, highest score first.

    Ties go to the most recently updated CV, then to the profile id so the
    order is stable across pages.
    """
    now = now or timezone.now()
    terms = ranking_terms(filters)
    ranked = [
        RankedProfile(
            profile=profile,
            relevance=relevance_score(profile, terms),
            completeness=completeness_score(profile),
            recency=recency_score(profile.cv.updated_at, now),
            discovery=discovery_score(profile),
        )
        for profile in profiles
    ]
    ranked.sort(key=lambda r: str(r.profile.pk))
    ranked.sort(key=lambda r: (r.score, r.profile.cv.updated_at), reverse=True)
    return ranked

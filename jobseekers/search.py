"""
Profile search for employers.

Only published profiles are ever returned. Filtering is done by
JobSeekerProfileFilter and ordering by the ranking in jobseekers.ranking.
Unverified employers may see a teaser (total count plus a few anonymised
cards); everything else goes through the verification gate.
"""

import logging
from typing import Any, Dict, Optional

from django.utils.translation import gettext_lazy as _

from core.conf import get_setting
from core.pagination import paginate
from core.results import ErrorCode, ServiceResult
from employers.verification import VerificationGate

from .filters import JobSeekerProfileFilter
from .models import JobSeekerProfile
from .ranking import RankedProfile, rank_profiles
from .sections import SectionType

logger = logging.getLogger(__name__)

SUMMARY_PREVIEW_LENGTH = 200


def _summary_preview(text: str) -> str:
    if len(text) <= SUMMARY_PREVIEW_LENGTH:
        return text
    return text[:SUMMARY_PREVIEW_LENGTH] + '...'


def _current_position(experience: Optional[Dict]) -> Optional[Dict[str, str]]:
    """Open-ended experience entry if there is one, else the first entry."""
    entries = (experience or {}).get('entries') or []
    if not entries:
        return None
    current = next((e for e in entries if not e.get('end_date')), entries[0])
    return {'title': current.get('title', ''), 'company': current.get('company', '')}


def _section_content(profile: JobSeekerProfile, section_type: str) -> Dict:
    section = profile.cv.sections_by_type().get(section_type)
    return section.content if section else {}


def search_card(profile: JobSeekerProfile) -> Dict[str, Any]:
    """Result card for verified employers. Never carries age or phone."""
    summary = _section_content(profile, SectionType.SUMMARY).get('text', '')
    return {
        'id': str(profile.pk),
        'full_name': profile.full_name,
        'city': profile.city,
        'preferred_role': profile.preferred_role,
        'years_experience': profile.years_experience,
        'summary': _summary_preview(summary),
        'skills': _section_content(profile, SectionType.SKILLS).get('items', []),
        'current_position': _current_position(_section_content(profile, SectionType.EXPERIENCE)),
        'updated_at': profile.cv.updated_at.isoformat(),
    }


def teaser_card(profile: JobSeekerProfile) -> Dict[str, Any]:
    """Anonymised card: no id, name or summary."""
    return {
        'city': profile.city,
        'preferred_role': profile.preferred_role,
        'years_experience': profile.years_experience,
        'skills': _section_content(profile, SectionType.SKILLS).get('items', [])[:5],
    }


def _filter_data(filters) -> Dict[str, Any]:
    """Plain dict for the filterset; list values are joined with commas."""
    data = {}
    for key in (filters or {}):
        value = filters.get(key)
        if isinstance(value, (list, tuple)):
            value = ','.join(str(item) for item in value)
        data[key] = value
    return data


def _filter_errors(filterset) -> Dict[str, list]:
    return {
        name: [error['message'] for error in errors]
        for name, errors in filterset.errors.get_json_data().items()
    }


def ranked_card(ranked: RankedProfile) -> Dict[str, Any]:
    return {
        **search_card(ranked.profile),
        'score': ranked.score,
        'ranking_factors': ranked.factors,
    }


class ProfileSearchService:
    """Search over visible jobseeker profiles."""

    @staticmethod
    def visible_profiles():
        return (
            JobSeekerProfile.objects
            .filter(publication_state=JobSeekerProfile.PublicationState.PUBLISHED)
            .select_related('cv')
            .prefetch_related('cv__sections')
        )

    @staticmethod
    def filter_profiles(filters: Optional[Dict[str, Any]] = None) -> ServiceResult:
        """
        Apply search filters to the visible profiles.

        Supported keys: ``city``, ``min_experience``, ``max_experience``,
        ``min_age``, ``max_age``, ``skills`` (comma separated, all must
        match a whole skill) and ``keywords`` (every term must match name,
        preferred role, summary or skills). See JobSeekerProfileFilter.

        Returns:
            ServiceResult with the filtered queryset, or ``validation`` when
            a filter value is malformed.
        """
        filterset = JobSeekerProfileFilter(
            _filter_data(filters), queryset=ProfileSearchService.visible_profiles()
        )
        if not filterset.is_valid():
            return ServiceResult.fail(
                ErrorCode.VALIDATION, _('Invalid search filters.'), errors=_filter_errors(filterset)
            )
        return ServiceResult.ok(filterset.qs)

    @staticmethod
    def search(user, filters: Optional[Dict[str, Any]] = None, page: Any = None,
               limit: Any = None, teaser: bool = False) -> ServiceResult:
        """
        Search visible profiles, ranked by relevance, completeness, recency
        and discovery (see ``jobseekers.ranking``).

        Args:
            user: Employer account
            filters: See ``filter_profiles``
            page: 1-based page number
            limit: Page size, clamped to MAX_PAGE_SIZE
            teaser: Return the count and anonymised cards only. Open to
                unverified employers.
        """
        if teaser:
            if getattr(user, 'role', None) != 'employer':
                return ServiceResult.fail(ErrorCode.FORBIDDEN, _('Only employers can search CVs.'))
        else:
            gate = VerificationGate.check(user)
            if not gate:
                return gate

        filtered = ProfileSearchService.filter_profiles(filters)
        if not filtered:
            return filtered
        ranked = rank_profiles(filtered.data, filters)

        if teaser:
            size = get_setting('TEASER_SIZE')
            return ServiceResult.ok({
                'total': len(ranked),
                'results': [teaser_card(r.profile) for r in ranked[:size]],
                'teaser': True,
            })

        data = paginate(ranked, page, limit, transform=ranked_card)
        logger.debug("Profile search: employer=%s total=%s", gate.data.pk, data['pagination']['total'])
        return ServiceResult.ok(data)

    @staticmethod
    def get_visible_cv(user, profile_id) -> ServiceResult:
        """Full CV of a published profile for a verified employer."""
        gate = VerificationGate.check(user)
        if not gate:
            return gate

        profile = (
            JobSeekerProfile.objects
            .select_related('cv')
            .prefetch_related('cv__sections')
            .filter(pk=profile_id)
            .first()
        )
        if profile is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, _('Profile not found.'))
        if not profile.is_visible:
            return ServiceResult.fail(ErrorCode.FORBIDDEN, _('This CV is not currently visible.'))
        return ServiceResult.ok(profile)

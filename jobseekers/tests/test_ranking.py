"""
Tests for search ranking.
"""

from datetime import timedelta

import pytest
from django.utils import timezone

from jobseekers.ranking import (
    NEUTRAL_RELEVANCE,
    RankedProfile,
    completeness_score,
    rank_profiles,
    ranking_terms,
    recency_score,
    relevance_score,
)

pytestmark = pytest.mark.django_db


class TestRecencyScore:

    @pytest.mark.parametrize('days,expected', [
        (0, 100), (7, 100), (8, 80), (30, 80), (90, 60), (180, 40), (365, 20), (366, 10),
    ])
    def test_tiers(self, days, expected):
        now = timezone.now()

        assert recency_score(now - timedelta(days=days), now) == expected


class TestRankingTerms:

    def test_keywords_and_skills_are_split(self):
        assert ranking_terms({'keywords': 'data  engineer,python', 'skills': 'SQL, dbt'}) == [
            'data', 'engineer', 'python', 'sql', 'dbt',
        ]

    def test_no_filters(self):
        assert ranking_terms(None) == []


class TestRelevanceScore:

    def test_neutral_without_terms(self, published_profile):
        assert relevance_score(published_profile, []) == NEUTRAL_RELEVANCE

    def test_role_skill_and_summary_matches(self, published_profile_factory):
        profile = published_profile_factory(preferred_role='Backend Engineer')

        # backend: role 1.5 + summary 1; python: skill 1.25 + summary 1; over 3 possible matches
        assert relevance_score(profile, ['backend']) == 83
        assert relevance_score(profile, ['python']) == 75
        assert relevance_score(profile, ['welding']) == 0

    def test_capped_at_one_hundred(self, published_profile_factory):
        profile = published_profile_factory(
            preferred_role='Python Developer',
            sections={'skills': {'items': ['Python', 'Python 3', 'MicroPython']}},
        )

        assert relevance_score(profile, ['python']) == 100


class TestCompletenessScore:

    def test_core_sections(self, published_profile):
        # name, city, role, summary, skills, experience, education
        assert completeness_score(published_profile) == 85

    def test_optional_sections_add_up_to_one_hundred(self, published_profile_factory):
        profile = published_profile_factory(sections={
            'certifications': {'entries': [{'name': 'AWS SAA', 'issuer': 'AWS', 'year': 2022}]},
            'projects': {'entries': [{'name': 'Ledger', 'description': '', 'link': ''}]},
            'publications': {'entries': [{'title': 'Idempotent payments', 'venue': '', 'link': ''}]},
            'languages': {'entries': [{'name': 'Yoruba', 'proficiency': 'native'}]},
        })

        assert completeness_score(profile) == 100

    def test_missing_city_and_role(self, complete_profile_factory):
        profile = complete_profile_factory(city='', preferred_role='')

        assert completeness_score(profile) == 60


class TestRankProfiles:

    def test_weighted_score(self, published_profile):
        ranked = rank_profiles([published_profile])[0]

        # 50 * 0.4 + 85 * 0.3 + 100 * 0.2 + 100 * 0.1
        assert (ranked.relevance, ranked.completeness, ranked.recency, ranked.discovery) == (50, 85, 100, 100)
        assert ranked.score == 76

    def test_stale_profile_ranks_below_fresh_one(self, published_profile_factory):
        stale = published_profile_factory()
        fresh = published_profile_factory()
        now = timezone.now() + timedelta(days=10)
        stale.cv.updated_at = now - timedelta(days=400)

        ranked = rank_profiles([stale, fresh], now=now)

        assert [r.profile.pk for r in ranked] == [fresh.pk, stale.pk]
        assert ranked[1].recency == 10

    def test_factors_for_a_weak_match(self, published_profile):
        ranked = RankedProfile(profile=published_profile, relevance=0, completeness=10, recency=10, discovery=0)

        assert ranked.factors == ['Basic profile match']

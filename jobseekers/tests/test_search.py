"""
Tests for profile search and the gated CV view.
"""

import pytest

from jobseekers.search import ProfileSearchService

pytestmark = [pytest.mark.django_db, pytest.mark.services]


class TestTeaserSearch:

    def test_unverified_employer_gets_count_and_anonymised_cards(
        self, pending_employer, published_profile_factory
    ):
        published_profile_factory.create_batch(5)

        result = ProfileSearchService.search(pending_employer.user, teaser=True)

        assert result.success
        assert result.data['total'] == 5
        assert len(result.data['results']) == 3
        for card in result.data['results']:
            assert 'full_name' not in card
            assert 'id' not in card
            assert 'summary' not in card
            assert 'age' not in card

    def test_teaser_requires_employer_role(self, published_profile_factory):
        jobseeker = published_profile_factory().user

        assert ProfileSearchService.search(jobseeker, teaser=True).code == 'forbidden'


class TestFullSearch:

    def test_unverified_employer_is_refused(self, pending_employer):
        result = ProfileSearchService.search(pending_employer.user)

        assert result.code == 'not_verified'

    def test_only_published_profiles_are_returned(
        self, verified_employer, published_profile_factory, complete_profile_factory
    ):
        visible = published_profile_factory()
        complete_profile_factory()

        result = ProfileSearchService.search(verified_employer.user)

        ids = [card['id'] for card in result.data['results']]
        assert ids == [str(visible.pk)]
        assert result.data['pagination']['total'] == 1

    def test_cards_never_carry_private_fields(self, verified_employer, published_profile_factory):
        published_profile_factory(age=31, phone='+2348000000000')

        card = ProfileSearchService.search(verified_employer.user).data['results'][0]

        assert 'age' not in card
        assert 'phone' not in card
        assert card['current_position'] == {'title': 'Senior Backend Engineer', 'company': 'Paystack'}
        assert card['skills'] == ['Python', 'Django', 'PostgreSQL']

    def test_long_summary_is_truncated(self, verified_employer, published_profile_factory):
        published_profile_factory(sections={'summary': {'text': 'x' * 250}})

        card = ProfileSearchService.search(verified_employer.user).data['results'][0]

        assert card['summary'] == 'x' * 200 + '...'

    def test_filter_by_city(self, verified_employer, published_profile_factory):
        published_profile_factory(city='Lagos')
        abuja = published_profile_factory(city='Abuja')

        result = ProfileSearchService.search(verified_employer.user, {'city': 'abu'})

        assert [card['id'] for card in result.data['results']] == [str(abuja.pk)]

    def test_all_requested_skills_must_match(self, verified_employer, published_profile_factory):
        published_profile_factory()
        gopher = published_profile_factory(sections={'skills': {'items': ['Go', 'Kubernetes']}})

        result = ProfileSearchService.search(verified_employer.user, {'skills': 'go,kubernetes'})

        assert [card['id'] for card in result.data['results']] == [str(gopher.pk)]

    def test_skill_matches_whole_items_only(self, verified_employer, published_profile_factory):
        published_profile_factory()
        frontend = published_profile_factory(sections={'skills': {'items': ['JavaScript', 'React Native']}})

        by_go = ProfileSearchService.search(verified_employer.user, {'skills': 'go'})
        by_java = ProfileSearchService.search(verified_employer.user, {'skills': 'java'})
        by_javascript = ProfileSearchService.search(verified_employer.user, {'skills': ' JavaScript '})
        by_react_native = ProfileSearchService.search(verified_employer.user, {'skills': 'react  native'})

        assert by_go.data['pagination']['total'] == 0
        assert by_java.data['pagination']['total'] == 0
        assert [card['id'] for card in by_javascript.data['results']] == [str(frontend.pk)]
        assert [card['id'] for card in by_react_native.data['results']] == [str(frontend.pk)]

    def test_skills_may_be_given_as_a_list(self, verified_employer, published_profile_factory):
        gopher = published_profile_factory(sections={'skills': {'items': ['Go', 'Kubernetes']}})

        result = ProfileSearchService.search(verified_employer.user, {'skills': ['Go', 'kubernetes']})

        assert [card['id'] for card in result.data['results']] == [str(gopher.pk)]

    @pytest.mark.parametrize('filters', [
        {'min_age': 'abc'},
        {'max_experience': 'ten'},
        {'min_experience': -1},
    ])
    def test_malformed_filter_is_a_validation_error(self, verified_employer, published_profile, filters):
        result = ProfileSearchService.search(verified_employer.user, filters)

        assert result.code == 'validation'
        assert set(result.errors) == set(filters)

    def test_every_keyword_term_must_match(self, verified_employer, published_profile_factory):
        target = published_profile_factory()

        both = ProfileSearchService.search(verified_employer.user, {'keywords': 'python, logistics'})
        one_missing = ProfileSearchService.search(verified_employer.user, {'keywords': 'python accounting'})

        assert [card['id'] for card in both.data['results']] == [str(target.pk)]
        assert one_missing.data['pagination']['total'] == 0

    def test_keywords_match_name_role_and_summary(self, verified_employer, published_profile_factory):
        published_profile_factory(full_name='Tunde Bakare', preferred_role='Accountant',
                                  sections={'summary': {'text': 'a' * 60}, 'skills': {'items': ['Excel']}})
        target = published_profile_factory(full_name='Amaka Obi')

        by_name = ProfileSearchService.search(verified_employer.user, {'keywords': 'amaka'})
        by_summary = ProfileSearchService.search(verified_employer.user, {'keywords': 'logistics'})

        assert [card['id'] for card in by_name.data['results']] == [str(target.pk)]
        assert [card['id'] for card in by_summary.data['results']] == [str(target.pk)]

    def test_experience_and_age_filters(self, verified_employer, published_profile_factory):
        published_profile_factory(years_experience=2, age=24)
        senior = published_profile_factory(years_experience=10, age=38)

        by_experience = ProfileSearchService.search(verified_employer.user, {'min_experience': 5})
        by_age = ProfileSearchService.search(verified_employer.user, {'min_age': 30, 'max_age': 40})

        assert [card['id'] for card in by_experience.data['results']] == [str(senior.pk)]
        assert [card['id'] for card in by_age.data['results']] == [str(senior.pk)]

    def test_results_are_ranked_by_relevance(self, verified_employer, published_profile_factory):
        python_developer = published_profile_factory(preferred_role='Python Developer')
        backend_engineer = published_profile_factory()

        result = ProfileSearchService.search(verified_employer.user, {'keywords': 'python'})

        cards = result.data['results']
        assert [card['id'] for card in cards] == [str(python_developer.pk), str(backend_engineer.pk)]
        assert cards[0]['score'] > cards[1]['score']
        assert 'High keyword relevance' in cards[0]['ranking_factors']

    def test_pagination_clamps_limit(self, verified_employer, published_profile_factory, settings):
        settings.SEAVITAE = {**settings.SEAVITAE, 'MAX_PAGE_SIZE': 2}
        published_profile_factory.create_batch(3)

        result = ProfileSearchService.search(verified_employer.user, page=2, limit=50)

        assert result.data['pagination'] == {'page': 2, 'limit': 2, 'total': 3, 'total_pages': 2}
        assert len(result.data['results']) == 1


class TestGetVisibleCV:

    def test_verified_employer_reads_published_cv(self, verified_employer, published_profile):
        result = ProfileSearchService.get_visible_cv(verified_employer.user, published_profile.pk)

        assert result.success
        assert result.data.pk == published_profile.pk

    def test_hidden_cv_is_forbidden(self, verified_employer, complete_profile_factory):
        hidden = complete_profile_factory()

        assert ProfileSearchService.get_visible_cv(verified_employer.user, hidden.pk).code == 'forbidden'

    def test_unverified_employer_is_refused(self, pending_employer, published_profile):
        result = ProfileSearchService.get_visible_cv(pending_employer.user, published_profile.pk)

        assert result.code == 'not_verified'

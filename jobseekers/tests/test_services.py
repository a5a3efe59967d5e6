"""
Tests for jobseeker services: profile lifecycle, the visibility lock and CV
section writes.
"""

import pytest

from jobseekers.models import CVSection, JobSeekerProfile
from jobseekers.services import (
    CompletenessPolicy,
    CVService,
    JobSeekerProfileService,
    VisibilityService,
)

pytestmark = [pytest.mark.django_db, pytest.mark.services]


def _reload(profile):
    return JobSeekerProfile.objects.select_related('cv').get(pk=profile.pk)


# ============================================================================
# PROFILE LIFECYCLE
# ============================================================================

class TestCreateProfile:

    def test_creates_draft_profile_with_cv_at_version_one(self, jobseeker_user_factory):
        user = jobseeker_user_factory()

        result = JobSeekerProfileService.create_profile(user, {
            'full_name': 'Amaka Obi', 'city': 'Lagos', 'preferred_role': 'Data Analyst',
            'years_experience': 3, 'age': 27, 'phone': '+2348012345678',
        })

        assert result.success
        profile = result.data
        assert profile.publication_state == JobSeekerProfile.PublicationState.DRAFT
        assert profile.is_visible is False
        assert profile.cv.version == 1
        assert profile.cv.is_locked is False

    def test_second_profile_is_a_conflict(self, jobseeker_profile_factory):
        profile = jobseeker_profile_factory()

        result = JobSeekerProfileService.create_profile(profile.user, {'full_name': 'Again'})

        assert not result.success
        assert result.code == 'conflict'

    def test_employer_account_cannot_create_cv_profile(self, employer_user_factory):
        result = JobSeekerProfileService.create_profile(employer_user_factory(), {'full_name': 'Acme'})

        assert result.code == 'forbidden'

    def test_missing_full_name_is_a_validation_error(self, jobseeker_user_factory):
        result = JobSeekerProfileService.create_profile(jobseeker_user_factory(), {'city': 'Abuja'})

        assert result.code == 'validation'
        assert 'full_name' in result.errors


class TestUpdateProfile:

    def test_update_while_draft_bumps_cv_version(self, jobseeker_profile_factory):
        profile = jobseeker_profile_factory()

        result = JobSeekerProfileService.update_profile(profile.user, {'city': 'Ibadan'})

        assert result.success
        reloaded = _reload(profile)
        assert reloaded.city == 'Ibadan'
        assert reloaded.cv.version == 2

    def test_update_while_visible_is_locked(self, published_profile_factory):
        profile = published_profile_factory(city='Lagos')

        result = JobSeekerProfileService.update_profile(profile.user, {'city': 'Ibadan'})

        assert result.code == 'locked'
        reloaded = _reload(profile)
        assert reloaded.city == 'Lagos'
        assert reloaded.cv.version == 1

    def test_update_without_profile_is_not_found(self, jobseeker_user_factory):
        result = JobSeekerProfileService.update_profile(jobseeker_user_factory(), {'city': 'Ibadan'})

        assert result.code == 'not_found'


# ============================================================================
# VISIBILITY LOCK
# ============================================================================

class TestSetVisibility:

    def test_incomplete_profile_lists_every_violation(self, jobseeker_profile_factory):
        profile = jobseeker_profile_factory()

        result = VisibilityService.set_visibility(profile.user, True)

        assert result.code == 'validation'
        assert set(result.errors) == {'summary', 'skills', 'experience', 'education'}
        assert _reload(profile).is_visible is False

    def test_short_summary_is_the_only_violation(self, complete_profile_factory):
        profile = complete_profile_factory(sections={'summary': {'text': 'Too short.'}})

        result = VisibilityService.set_visibility(profile.user, True)

        assert result.code == 'validation'
        assert list(result.errors) == ['summary']

    def test_complete_profile_is_published_and_cv_locked(self, complete_profile_factory):
        profile = complete_profile_factory()

        result = VisibilityService.set_visibility(profile.user, True)

        assert result.success
        reloaded = _reload(profile)
        assert reloaded.is_visible is True
        assert reloaded.published_at is not None
        assert reloaded.cv.is_locked is True

    def test_hiding_always_succeeds_and_unlocks(self, published_profile_factory):
        profile = published_profile_factory()

        result = VisibilityService.set_visibility(profile.user, False)

        assert result.success
        reloaded = _reload(profile)
        assert reloaded.is_visible is False
        assert reloaded.published_at is None
        assert reloaded.cv.is_locked is False

    def test_hiding_an_incomplete_draft_succeeds(self, jobseeker_profile_factory):
        profile = jobseeker_profile_factory()

        assert VisibilityService.set_visibility(profile.user, False).success

    @pytest.mark.parametrize('target', [True, False, True, False])
    def test_lock_always_mirrors_visibility(self, complete_profile_factory, target):
        profile = complete_profile_factory()

        VisibilityService.set_visibility(profile.user, target)

        reloaded = _reload(profile)
        assert reloaded.cv.is_locked == reloaded.is_visible == target

    def test_get_visibility(self, published_profile_factory):
        profile = published_profile_factory()

        result = VisibilityService.get_visibility(profile.user)

        assert result.data == {'is_visible': True}


# ============================================================================
# CV SECTION WRITES
# ============================================================================

class TestWriteSection:

    def test_write_creates_section_and_bumps_version(self, jobseeker_profile_factory):
        profile = jobseeker_profile_factory()

        result = CVService.write_section(profile.user, 'skills', {'items': ['Excel', 'SQL']})

        assert result.success
        section = CVSection.objects.get(cv=profile.cv, section_type='skills')
        assert section.content == {'items': ['Excel', 'SQL']}
        assert section.position == 3
        assert 'excel' in section.search_text
        assert _reload(profile).cv.version == 2

    def test_write_replaces_section_wholesale(self, complete_profile_factory):
        profile = complete_profile_factory()

        CVService.write_section(profile.user, 'skills', {'items': ['Go']})

        section = CVSection.objects.get(cv=profile.cv, section_type='skills')
        assert section.content == {'items': ['Go']}
        assert CVSection.objects.filter(cv=profile.cv, section_type='skills').count() == 1

    def test_explicit_position_is_stored(self, jobseeker_profile_factory):
        profile = jobseeker_profile_factory()

        CVService.write_section(profile.user, 'languages', {
            'entries': [{'name': 'Igbo', 'proficiency': 'native'}],
        }, position=0)

        assert CVSection.objects.get(cv=profile.cv, section_type='languages').position == 0

    def test_write_while_locked_changes_nothing(self, published_profile_factory):
        profile = published_profile_factory()
        before = CVSection.objects.get(cv=profile.cv, section_type='skills').content

        result = CVService.write_section(profile.user, 'skills', {'items': ['Go']})

        assert result.code == 'locked'
        assert CVSection.objects.get(cv=profile.cv, section_type='skills').content == before
        assert _reload(profile).cv.version == 1

    def test_unknown_type_is_not_stored(self, jobseeker_profile_factory):
        profile = jobseeker_profile_factory()

        result = CVService.write_section(profile.user, 'hobbies', {'items': ['chess']})

        assert result.code == 'validation'
        assert not CVSection.objects.filter(cv=profile.cv).exists()
        assert _reload(profile).cv.version == 1

    def test_invalid_payload_reports_field_errors(self, jobseeker_profile_factory):
        profile = jobseeker_profile_factory()

        result = CVService.write_section(profile.user, 'education', {'entries': [{'degree': 'BSc'}]})

        assert result.code == 'validation'
        assert 'education' in result.errors

    def test_write_without_profile_is_not_found(self, jobseeker_user_factory):
        result = CVService.write_section(jobseeker_user_factory(), 'skills', {'items': ['Go']})

        assert result.code == 'not_found'

    def test_expected_version_mismatch_is_a_conflict(self, jobseeker_profile_factory):
        profile = jobseeker_profile_factory()
        CVService.write_section(profile.user, 'skills', {'items': ['Go']})

        result = CVService.write_section(
            profile.user, 'skills', {'items': ['Rust']}, expected_version=1,
        )

        assert result.code == 'conflict'
        assert CVSection.objects.get(cv=profile.cv, section_type='skills').content == {'items': ['Go']}
        assert _reload(profile).cv.version == 2

    def test_expected_version_match_succeeds(self, jobseeker_profile_factory):
        profile = jobseeker_profile_factory()

        result = CVService.write_section(
            profile.user, 'skills', {'items': ['Rust']}, expected_version=1,
        )

        assert result.success
        assert _reload(profile).cv.version == 2


class TestSaveSections:

    def test_grouped_save_is_one_version_increment(self, jobseeker_profile_factory, sections_payload):
        profile = jobseeker_profile_factory()

        result = CVService.save_sections(profile.user, sections_payload)

        assert result.success
        assert CVSection.objects.filter(cv=profile.cv).count() == 4
        assert _reload(profile).cv.version == 2

    def test_one_invalid_payload_blocks_the_whole_save(self, jobseeker_profile_factory, sections_payload):
        profile = jobseeker_profile_factory()
        sections_payload['education'] = {'entries': [{'degree': 'BSc'}]}

        result = CVService.save_sections(profile.user, sections_payload)

        assert result.code == 'validation'
        assert list(result.errors) == ['education']
        assert not CVSection.objects.filter(cv=profile.cv).exists()

    def test_empty_save_is_a_validation_error(self, jobseeker_profile_factory):
        profile = jobseeker_profile_factory()

        assert CVService.save_sections(profile.user, {}).code == 'validation'


class TestRemoveSection:

    def test_remove_deletes_row_and_bumps_version(self, complete_profile_factory):
        profile = complete_profile_factory()

        result = CVService.remove_section(profile.user, 'skills')

        assert result.success
        assert not CVSection.objects.filter(cv=profile.cv, section_type='skills').exists()
        assert _reload(profile).cv.version == 2

    def test_remove_missing_section_is_not_found(self, jobseeker_profile_factory):
        profile = jobseeker_profile_factory()

        assert CVService.remove_section(profile.user, 'skills').code == 'not_found'

    def test_remove_while_locked(self, published_profile_factory):
        profile = published_profile_factory()

        assert CVService.remove_section(profile.user, 'skills').code == 'locked'
        assert CVSection.objects.filter(cv=profile.cv, section_type='skills').exists()


class TestCompletenessPolicy:

    def test_score_counts_satisfied_rules(self, jobseeker_profile_factory, complete_profile_factory):
        assert CompletenessPolicy.score(jobseeker_profile_factory().cv) == 0
        assert CompletenessPolicy.score(complete_profile_factory().cv) == 100

    def test_profile_completeness_property(self, complete_profile_factory):
        profile = complete_profile_factory(sections={'skills': {'items': []}})

        assert profile.profile_completeness == 75

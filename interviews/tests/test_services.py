"""
Tests for interview request negotiation.
"""

from datetime import timedelta
from unittest.mock import patch

import pytest
from django.db import IntegrityError, transaction
from django.utils import timezone

from interviews.models import InterviewRequest
from interviews.services import InterviewService

pytestmark = [pytest.mark.django_db, pytest.mark.services]


def _video(**extra):
    return {
        'interview_type': 'video',
        'proposed_at': (timezone.now() + timedelta(days=2)).isoformat(),
        'meeting_link': 'https://meet.example.com/xyz',
        'message': 'Are you free for a chat?',
        **extra,
    }


# ============================================================================
# CREATE
# ============================================================================

class TestCreateRequest:

    def test_verified_employer_requests_interview(self, verified_employer, published_profile):
        result = InterviewService.create_request(verified_employer.user, published_profile.pk, _video())

        assert result.success
        interview = result.data
        assert interview.status == 'pending'
        assert interview.employer_message == 'Are you free for a chat?'

    def test_unverified_employer_is_refused(self, pending_employer, published_profile):
        result = InterviewService.create_request(pending_employer.user, published_profile.pk, _video())

        assert result.code == 'not_verified'
        assert not InterviewRequest.objects.exists()

    def test_hidden_cv_is_forbidden(self, verified_employer, complete_profile_factory):
        hidden = complete_profile_factory()

        assert InterviewService.create_request(verified_employer.user, hidden.pk, _video()).code == 'forbidden'

    def test_unknown_jobseeker_is_not_found(self, verified_employer):
        import uuid

        assert InterviewService.create_request(verified_employer.user, uuid.uuid4(), _video()).code == 'not_found'

    def test_second_in_flight_request_is_a_conflict(self, verified_employer, published_profile):
        first = InterviewService.create_request(verified_employer.user, published_profile.pk, _video())

        second = InterviewService.create_request(verified_employer.user, published_profile.pk, _video())

        assert second.code == 'conflict'
        assert second.data == first.data
        assert InterviewRequest.objects.count() == 1

    def test_accepted_request_still_blocks_a_new_one(self, interview_request_factory):
        interview = interview_request_factory(status='accepted')

        result = InterviewService.create_request(interview.employer.user, interview.jobseeker.pk, _video())

        assert result.code == 'conflict'

    @pytest.mark.parametrize('terminal', ['declined', 'cancelled', 'completed'])
    def test_new_request_allowed_after_terminal(self, interview_request_factory, terminal):
        interview = interview_request_factory(status=terminal)

        result = InterviewService.create_request(interview.employer.user, interview.jobseeker.pk, _video())

        assert result.success

    def test_in_person_requires_location(self, verified_employer, published_profile):
        result = InterviewService.create_request(
            verified_employer.user, published_profile.pk, {'interview_type': 'in_person'},
        )

        assert result.code == 'validation'
        assert 'location' in result.errors

    def test_past_proposed_time_is_rejected(self, verified_employer, published_profile):
        past = (timezone.now() - timedelta(hours=1)).isoformat()

        result = InterviewService.create_request(
            verified_employer.user, published_profile.pk, _video(proposed_at=past),
        )

        assert result.code == 'validation'
        assert 'proposed_at' in result.errors

    def test_overlong_message_is_rejected(self, verified_employer, published_profile, settings):
        settings.SEAVITAE = {**settings.SEAVITAE, 'MAX_INTERVIEW_MESSAGE_LENGTH': 10}

        result = InterviewService.create_request(
            verified_employer.user, published_profile.pk, _video(message='x' * 11),
        )

        assert result.code == 'validation'

    def test_database_enforces_single_in_flight_request(self, interview_request_factory):
        interview = interview_request_factory()

        with pytest.raises(IntegrityError), transaction.atomic():
            interview_request_factory(employer=interview.employer, jobseeker=interview.jobseeker)

    def test_lost_insert_race_is_a_conflict(self, verified_employer, published_profile):
        with patch.object(InterviewRequest.objects, 'create', side_effect=IntegrityError):
            result = InterviewService.create_request(verified_employer.user, published_profile.pk, _video())

        assert result.code == 'conflict'

    def test_request_notifies_jobseeker(
        self, verified_employer, published_profile, django_capture_on_commit_callbacks, mailoutbox
    ):
        with django_capture_on_commit_callbacks(execute=True):
            InterviewService.create_request(verified_employer.user, published_profile.pk, _video())

        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == [published_profile.user.email]
        assert verified_employer.display_name in mailoutbox[0].subject


# ============================================================================
# RESPOND / CANCEL / COMPLETE / DELETE
# ============================================================================

class TestRespond:

    def test_accept(self, interview_request_factory):
        interview = interview_request_factory()

        result = InterviewService.respond(interview.jobseeker.user, interview.pk, 'accept', 'See you then')

        assert result.success
        assert result.data.status == 'accepted'
        assert result.data.response_message == 'See you then'
        assert result.data.responded_at is not None
        assert result.data.discloses_contact

    def test_decline(self, interview_request_factory):
        interview = interview_request_factory()

        result = InterviewService.respond(interview.jobseeker.user, interview.pk, 'decline')

        assert result.data.status == 'declined'
        assert result.data.is_terminal

    def test_only_addressed_jobseeker_may_respond(self, interview_request_factory, published_profile):
        interview = interview_request_factory()

        result = InterviewService.respond(published_profile.user, interview.pk, 'accept')

        assert result.code == 'forbidden'

    def test_second_response_is_a_conflict(self, interview_request_factory):
        interview = interview_request_factory()
        InterviewService.respond(interview.jobseeker.user, interview.pk, 'accept')

        result = InterviewService.respond(interview.jobseeker.user, interview.pk, 'decline')

        assert result.code == 'conflict'
        assert InterviewRequest.objects.get(pk=interview.pk).status == 'accepted'

    def test_unknown_decision(self, interview_request_factory):
        interview = interview_request_factory()

        assert InterviewService.respond(interview.jobseeker.user, interview.pk, 'maybe').code == 'validation'

    def test_missing_request(self, jobseeker_user_factory):
        import uuid

        assert InterviewService.respond(jobseeker_user_factory(), uuid.uuid4(), 'accept').code == 'not_found'


class TestCancel:

    def test_employer_cancels_pending(self, interview_request_factory):
        interview = interview_request_factory()

        result = InterviewService.cancel(interview.employer.user, interview.pk)

        assert result.data.status == 'cancelled'
        assert result.data.cancelled_at is not None

    def test_accepted_cannot_be_cancelled(self, interview_request_factory):
        interview = interview_request_factory(status='accepted')

        assert InterviewService.cancel(interview.employer.user, interview.pk).code == 'conflict'

    def test_other_employer_is_forbidden(self, interview_request_factory, verified_employer):
        interview = interview_request_factory()

        assert InterviewService.cancel(verified_employer.user, interview.pk).code == 'forbidden'


class TestComplete:

    @pytest.mark.parametrize('party', ['employer', 'jobseeker'])
    def test_either_party_completes_accepted(self, interview_request_factory, party):
        interview = interview_request_factory(status='accepted')
        user = getattr(interview, party).user

        result = InterviewService.mark_completed(user, interview.pk)

        assert result.data.status == 'completed'
        assert result.data.completed_at is not None

    def test_pending_cannot_be_completed(self, interview_request_factory):
        interview = interview_request_factory()

        assert InterviewService.mark_completed(interview.employer.user, interview.pk).code == 'conflict'

    def test_outsider_is_forbidden(self, interview_request_factory, verified_employer):
        interview = interview_request_factory(status='accepted')

        assert InterviewService.mark_completed(verified_employer.user, interview.pk).code == 'forbidden'


class TestDelete:

    @pytest.mark.parametrize('terminal', ['declined', 'cancelled', 'completed'])
    def test_terminal_requests_can_be_deleted(self, interview_request_factory, terminal):
        interview = interview_request_factory(status=terminal)

        assert InterviewService.delete(interview.employer.user, interview.pk).success
        assert not InterviewRequest.objects.filter(pk=interview.pk).exists()

    @pytest.mark.parametrize('in_flight', ['pending', 'accepted'])
    def test_in_flight_requests_cannot_be_deleted(self, interview_request_factory, in_flight):
        interview = interview_request_factory(status=in_flight)

        assert InterviewService.delete(interview.employer.user, interview.pk).code == 'conflict'
        assert InterviewRequest.objects.filter(pk=interview.pk).exists()

    def test_jobseeker_cannot_delete(self, interview_request_factory):
        interview = interview_request_factory(status='declined')

        assert InterviewService.delete(interview.jobseeker.user, interview.pk).code == 'forbidden'


# ============================================================================
# LISTING
# ============================================================================

class TestListing:

    def test_lists_are_scoped_and_filterable(self, interview_request_factory, published_profile_factory):
        interview = interview_request_factory()
        interview_request_factory(employer=interview.employer, jobseeker=published_profile_factory(),
                                  status='declined')
        interview_request_factory()

        for_employer = InterviewService.list_for_employer(interview.employer.user)
        pending_only = InterviewService.list_for_employer(interview.employer.user, status='pending')
        for_jobseeker = InterviewService.list_for_jobseeker(interview.jobseeker.user)

        assert for_employer.data['pagination']['total'] == 2
        assert [r.pk for r in pending_only.data['results']] == [interview.pk]
        assert [r.pk for r in for_jobseeker.data['results']] == [interview.pk]

    def test_unknown_status_filter(self, interview_request_factory):
        interview = interview_request_factory()

        assert InterviewService.list_for_employer(interview.employer.user, status='lost').code == 'validation'

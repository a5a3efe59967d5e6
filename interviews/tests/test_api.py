"""
API tests for the interviews endpoints, including contact disclosure.
"""

import pytest
from django.urls import reverse

pytestmark = [pytest.mark.django_db, pytest.mark.integration]


class TestCreateEndpoint:

    def test_employer_creates_request(self, client_for, verified_employer, published_profile, future_date):
        response = client_for(verified_employer.user).post(reverse('v1:interviews:list'), {
            'jobseeker_profile_id': str(published_profile.pk),
            'interview_type': 'video',
            'proposed_at': future_date.isoformat(),
            'meeting_link': 'https://meet.example.com/abc',
        }, format='json')

        assert response.status_code == 201
        assert response.data['status'] == 'pending'
        assert 'phone' not in response.data['jobseeker']

    def test_jobseeker_cannot_create(self, client_for, published_profile):
        response = client_for(published_profile.user).post(reverse('v1:interviews:list'), {
            'jobseeker_profile_id': str(published_profile.pk),
            'interview_type': 'video',
        }, format='json')

        assert response.status_code == 403

    def test_duplicate_returns_409(self, client_for, interview_request_factory):
        interview = interview_request_factory()

        response = client_for(interview.employer.user).post(reverse('v1:interviews:list'), {
            'jobseeker_profile_id': str(interview.jobseeker.pk),
            'interview_type': 'phone',
        }, format='json')

        assert response.status_code == 409


class TestContactDisclosure:

    def _employer_view(self, client_for, interview):
        response = client_for(interview.employer.user).get(reverse('v1:interviews:list'))
        return response.data['results'][0]['jobseeker']

    def test_phone_hidden_while_pending(self, client_for, interview_request_factory):
        interview = interview_request_factory()

        assert 'phone' not in self._employer_view(client_for, interview)

    @pytest.mark.parametrize('status', ['accepted', 'completed'])
    def test_phone_shown_once_accepted(self, client_for, interview_request_factory, status):
        interview = interview_request_factory(status=status)

        assert self._employer_view(client_for, interview)['phone'] == interview.jobseeker.phone

    @pytest.mark.parametrize('status', ['declined', 'cancelled'])
    def test_phone_hidden_when_not_accepted(self, client_for, interview_request_factory, status):
        interview = interview_request_factory(status=status)

        assert 'phone' not in self._employer_view(client_for, interview)


class TestLifecycleEndpoints:

    def test_jobseeker_accepts(self, client_for, interview_request_factory):
        interview = interview_request_factory()

        response = client_for(interview.jobseeker.user).post(
            reverse('v1:interviews:respond', args=[interview.pk]),
            {'decision': 'accept', 'message': 'Happy to talk'},
            format='json',
        )

        assert response.status_code == 200
        assert response.data['status'] == 'accepted'
        assert response.data['employer']['display_name'] == interview.employer.display_name

    def test_jobseeker_list_shows_employer(self, client_for, interview_request_factory):
        interview = interview_request_factory()

        response = client_for(interview.jobseeker.user).get(reverse('v1:interviews:list'))

        assert response.status_code == 200
        assert response.data['results'][0]['employer']['is_verified'] is True

    def test_cancel_then_delete(self, client_for, interview_request_factory):
        interview = interview_request_factory()
        client = client_for(interview.employer.user)

        cancelled = client.post(reverse('v1:interviews:cancel', args=[interview.pk]))
        deleted = client.delete(reverse('v1:interviews:detail', args=[interview.pk]))

        assert cancelled.status_code == 200
        assert deleted.status_code == 204

    def test_delete_pending_returns_409(self, client_for, interview_request_factory):
        interview = interview_request_factory()

        response = client_for(interview.employer.user).delete(
            reverse('v1:interviews:detail', args=[interview.pk]),
        )

        assert response.status_code == 409

    def test_complete(self, client_for, interview_request_factory):
        interview = interview_request_factory(status='accepted')

        response = client_for(interview.jobseeker.user).post(
            reverse('v1:interviews:complete', args=[interview.pk]),
        )

        assert response.status_code == 200
        assert response.data['status'] == 'completed'

"""
SeaVitae Test Configuration - pytest fixtures and factories

This module provides:
- pytest-django configuration (see [tool.pytest.ini_options] in pyproject.toml)
- factory_boy factories for accounts, profiles, CVs, employers and interviews
- Shared fixtures for API tests

RUNNING TESTS:
# Run all tests
pytest -v

# Run by app
pytest jobseekers/tests -v
pytest tests/test_workflow.py -v

# Run by marker
pytest -m services -v
pytest -m workflow -v
"""

import uuid
from datetime import date, timedelta

import factory
import pytest
from django.utils import timezone
from factory.django import DjangoModelFactory


# ============================================================================
# USER FACTORIES
# ============================================================================

class UserFactory(DjangoModelFactory):
    """Factory for CustomUser model."""

    class Meta:
        model = 'accounts.CustomUser'
        django_get_or_create = ('email',)

    username = factory.LazyAttribute(lambda o: f"user_{uuid.uuid4().hex[:8]}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    role = 'jobseeker'
    is_active = True

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to handle password properly."""
        password = kwargs.pop('password', 'testpass123')
        user = super()._create(model_class, *args, **kwargs)
        user.set_password(password)
        user.save(update_fields=['password'])
        return user


class JobSeekerUserFactory(UserFactory):
    role = 'jobseeker'


class EmployerUserFactory(UserFactory):
    role = 'employer'


class AdminUserFactory(UserFactory):
    """Reviewer account with the admin role."""

    role = 'admin'
    is_staff = True


# ============================================================================
# JOBSEEKER FACTORIES
# ============================================================================

def complete_sections():
    """Section payloads that satisfy every publication rule."""
    return {
        'summary': {
            'text': (
                'Backend engineer with six years of experience building payment '
                'and logistics platforms in Python and Django.'
            ),
        },
        'skills': {'items': ['Python', 'Django', 'PostgreSQL']},
        'experience': {
            'entries': [
                {
                    'title': 'Senior Backend Engineer',
                    'company': 'Paystack',
                    'location': 'Lagos',
                    'start_date': '2021-03-01',
                    'end_date': None,
                    'description': 'Payments APIs',
                },
            ],
        },
        'education': {
            'entries': [
                {
                    'degree': 'BSc Computer Science',
                    'institution': 'University of Lagos',
                    'location': 'Lagos',
                    'graduation_year': 2017,
                },
            ],
        },
    }


class CVDocumentFactory(DjangoModelFactory):
    """CV document; created through JobSeekerProfileFactory."""

    class Meta:
        model = 'jobseekers.CVDocument'

    version = 1


class JobSeekerProfileFactory(DjangoModelFactory):
    """Draft jobseeker profile with an empty CV at version 1."""

    class Meta:
        model = 'jobseekers.JobSeekerProfile'
        skip_postgeneration_save = True

    user = factory.SubFactory(JobSeekerUserFactory)
    full_name = factory.Faker('name')
    city = 'Lagos'
    preferred_role = 'Backend Engineer'
    years_experience = 6
    age = 29
    phone = '+234 801 234 5678'
    publication_state = 'draft'

    cv = factory.RelatedFactory(CVDocumentFactory, factory_related_name='profile')


class CompleteJobSeekerProfileFactory(JobSeekerProfileFactory):
    """Draft profile whose CV passes the completeness policy."""

    @factory.post_generation
    def sections(obj, create, extracted, **kwargs):
        if not create:
            return
        from jobseekers.models import CVSection
        from jobseekers.sections import default_position, section_search_text

        payloads = complete_sections()
        payloads.update(extracted or {})
        for section_type, content in payloads.items():
            CVSection.objects.create(
                cv=obj.cv,
                section_type=section_type,
                content=content,
                position=default_position(section_type),
                search_text=section_search_text(section_type, content),
            )


class PublishedJobSeekerProfileFactory(CompleteJobSeekerProfileFactory):
    publication_state = 'published'
    published_at = factory.LazyFunction(timezone.now)


# ============================================================================
# EMPLOYER FACTORIES
# ============================================================================

class EmployerProfileFactory(DjangoModelFactory):
    """Company employer awaiting verification."""

    class Meta:
        model = 'employers.EmployerProfile'

    user = factory.SubFactory(EmployerUserFactory)
    employer_type = 'company'
    display_name = factory.Faker('company')
    city = 'Lagos'
    company_name = factory.LazyAttribute(lambda o: o.display_name)
    registration_number = factory.Sequence(lambda n: f"RC{100000 + n}")
    verification_document_id = factory.LazyFunction(lambda: f"docs/{uuid.uuid4().hex}.pdf")
    verification_status = 'pending'


class VerifiedEmployerProfileFactory(EmployerProfileFactory):
    verification_status = 'approved'
    verification_date = factory.LazyFunction(timezone.now)
    verification_notes = 'Approved in tests'


class RejectedEmployerProfileFactory(EmployerProfileFactory):
    verification_status = 'rejected'
    verification_date = factory.LazyFunction(timezone.now)
    verification_notes = 'Registration number could not be matched'


class IndividualEmployerProfileFactory(EmployerProfileFactory):
    employer_type = 'individual'
    company_name = ''
    registration_number = ''
    national_id = factory.Sequence(lambda n: f"NIN{10000000 + n}")


# ============================================================================
# INTERVIEW / MESSAGE FACTORIES
# ============================================================================

class InterviewRequestFactory(DjangoModelFactory):
    class Meta:
        model = 'interviews.InterviewRequest'

    employer = factory.SubFactory(VerifiedEmployerProfileFactory)
    jobseeker = factory.SubFactory(PublishedJobSeekerProfileFactory)
    status = 'pending'
    interview_type = 'video'
    proposed_at = factory.LazyFunction(lambda: timezone.now() + timedelta(days=3))
    meeting_link = 'https://meet.example.com/abc-defg-hij'
    employer_message = 'We would like to discuss a backend role.'


class MessageFactory(DjangoModelFactory):
    class Meta:
        model = 'messages_sys.Message'

    sender = factory.SubFactory(EmployerUserFactory)
    recipient = factory.SubFactory(JobSeekerUserFactory)
    content = factory.Faker('sentence')


# ============================================================================
# PYTEST FIXTURES
# ============================================================================

@pytest.fixture
def user_factory(db):
    """Provide UserFactory for tests."""
    return UserFactory


@pytest.fixture
def jobseeker_user_factory(db):
    return JobSeekerUserFactory


@pytest.fixture
def employer_user_factory(db):
    return EmployerUserFactory


@pytest.fixture
def admin_user_factory(db):
    return AdminUserFactory


@pytest.fixture
def jobseeker_profile_factory(db):
    """Provide JobSeekerProfileFactory (draft, empty CV) for tests."""
    return JobSeekerProfileFactory


@pytest.fixture
def complete_profile_factory(db):
    """Provide CompleteJobSeekerProfileFactory (draft, publishable CV) for tests."""
    return CompleteJobSeekerProfileFactory


@pytest.fixture
def published_profile_factory(db):
    """Provide PublishedJobSeekerProfileFactory for tests."""
    return PublishedJobSeekerProfileFactory


@pytest.fixture
def employer_profile_factory(db):
    """Provide EmployerProfileFactory (pending) for tests."""
    return EmployerProfileFactory


@pytest.fixture
def verified_employer_factory(db):
    return VerifiedEmployerProfileFactory


@pytest.fixture
def rejected_employer_factory(db):
    return RejectedEmployerProfileFactory


@pytest.fixture
def individual_employer_factory(db):
    return IndividualEmployerProfileFactory


@pytest.fixture
def interview_request_factory(db):
    return InterviewRequestFactory


@pytest.fixture
def message_factory(db):
    return MessageFactory


@pytest.fixture
def sections_payload():
    """Fresh copy of a complete set of section payloads."""
    return complete_sections()


@pytest.fixture
def admin_user(db):
    return AdminUserFactory()


@pytest.fixture
def verified_employer(db):
    return VerifiedEmployerProfileFactory()


@pytest.fixture
def pending_employer(db):
    return EmployerProfileFactory()


@pytest.fixture
def published_profile(db):
    return PublishedJobSeekerProfileFactory()


@pytest.fixture
def api_client(db):
    """Provide a DRF API test client."""
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def client_for(api_client):
    """Return the API client authenticated as the given user."""
    def _authenticate(user):
        api_client.force_authenticate(user=user)
        return api_client
    return _authenticate


@pytest.fixture
def future_date():
    return timezone.now() + timedelta(days=7)


@pytest.fixture
def today():
    return date.today()

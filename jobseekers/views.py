"""
Jobseeker API views.

Endpoints (under /api/v1/jobseekers/):
    profile/                    GET, POST, PATCH   own profile and CV
    profile/visibility/         GET, POST          publication toggle
    profile/saved-by/           GET                employers that saved the CV
    cv/sections/                POST               grouped section save
    cv/sections/<type>/         PUT, DELETE        single section write/remove
    search/                     GET                employer search (?teaser=1)
    <uuid>/cv/                  GET                employer view of a visible CV
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from core.api import result_response, validation_response
from core.permissions import IsEmployer, IsJobSeeker
from employers.snapshots import SnapshotService

from .search import ProfileSearchService
from .serializers import (
    OwnerProfileSerializer,
    PublicCVSerializer,
    SearchQuerySerializer,
    SectionsSaveSerializer,
    SectionWriteSerializer,
    VisibilityInputSerializer,
)
from .services import CVService, JobSeekerProfileService, VisibilityService


def _owner_data(profile):
    return OwnerProfileSerializer(profile).data


class ProfileView(APIView):
    """Own jobseeker profile."""

    permission_classes = [IsAuthenticated, IsJobSeeker]

    def get(self, request):
        return result_response(CVService.get_cv(request.user), _owner_data)

    def post(self, request):
        result = JobSeekerProfileService.create_profile(request.user, request.data)
        return result_response(result, _owner_data, success_status=status.HTTP_201_CREATED)

    def patch(self, request):
        result = JobSeekerProfileService.update_profile(request.user, request.data)
        return result_response(result, _owner_data)


class VisibilityView(APIView):
    """
    Publication toggle.

    POST {"is_visible": true} publishes after the completeness check and
    locks the CV; {"is_visible": false} hides and unlocks it.
    """

    permission_classes = [IsAuthenticated, IsJobSeeker]

    def get(self, request):
        return result_response(VisibilityService.get_visibility(request.user))

    def post(self, request):
        serializer = VisibilityInputSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        result = VisibilityService.set_visibility(
            request.user, serializer.validated_data['is_visible']
        )
        return result_response(result, _owner_data)


class SavedByView(APIView):
    """Employers that saved a snapshot of the caller's CV."""

    permission_classes = [IsAuthenticated, IsJobSeeker]

    def get(self, request):
        result = SnapshotService.who_saved_my_cv(
            request.user,
            page=request.query_params.get('page'),
            limit=request.query_params.get('limit'),
        )
        return result_response(result)


class SectionView(APIView):
    permission_classes = [IsAuthenticated, IsJobSeeker]

    def put(self, request, section_type):
        serializer = SectionWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        data = serializer.validated_data
        result = CVService.write_section(
            request.user,
            section_type,
            data['content'],
            position=data.get('position'),
            expected_version=data.get('expected_version'),
        )
        return result_response(result, _owner_data)

    def delete(self, request, section_type):
        expected_version = request.query_params.get('expected_version')
        if expected_version is not None:
            if not expected_version.isdigit():
                return validation_response({'expected_version': ['A valid integer is required.']})
            expected_version = int(expected_version)
        result = CVService.remove_section(request.user, section_type, expected_version=expected_version)
        return result_response(result, _owner_data)


class SectionsView(APIView):
    """Save several sections as one logical save (one version increment)."""

    permission_classes = [IsAuthenticated, IsJobSeeker]

    def post(self, request):
        serializer = SectionsSaveSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        data = serializer.validated_data
        result = CVService.save_sections(
            request.user,
            data['sections'],
            positions=data.get('positions'),
            expected_version=data.get('expected_version'),
        )
        return result_response(result, _owner_data)


class SearchView(APIView):
    """
    Search visible profiles.

    GET /api/v1/jobseekers/search/?city=Lagos&skills=python,django&page=1

    Filter parameters are validated by JobSeekerProfileFilter. Unverified
    employers may pass ``teaser=1`` to get the total count and a few
    anonymised cards.
    """

    permission_classes = [IsAuthenticated, IsEmployer]

    def get(self, request):
        serializer = SearchQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        params = serializer.validated_data
        result = ProfileSearchService.search(
            request.user,
            request.query_params,
            page=params['page'],
            limit=params.get('limit'),
            teaser=params['teaser'],
        )
        return result_response(result)


class VisibleCVView(APIView):
    permission_classes = [IsAuthenticated, IsEmployer]

    def get(self, request, profile_id):
        result = ProfileSearchService.get_visible_cv(request.user, profile_id)
        return result_response(result, lambda profile: PublicCVSerializer(profile).data)

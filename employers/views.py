"""
Employer API views.

Endpoints (under /api/v1/employers/):
    profile/                  GET, POST, PATCH   own employer profile
    snapshots/                GET, POST          saved CV snapshots
    snapshots/<uuid>/         GET, DELETE        one snapshot
    review/                   GET                admin verification queue
    review/<uuid>/            POST               admin decision
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from core.api import result_response, validation_response
from core.permissions import IsAdmin, IsEmployer
from core.results import ErrorCode, ServiceResult

from .serializers import (
    EmployerProfileSerializer,
    ReviewDecisionInputSerializer,
    ReviewEmployerSerializer,
    ReviewQueueQuerySerializer,
    SnapshotCreateSerializer,
    SnapshotSerializer,
)
from .services import EmployerProfileService
from .snapshots import SnapshotService
from .verification import VerificationService


def _profile_data(employer):
    return EmployerProfileSerializer(employer).data


def _paginated(serializer_class):
    def render(data):
        return {**data, 'results': serializer_class(data['results'], many=True).data}
    return render


class EmployerProfileView(APIView):
    permission_classes = [IsAuthenticated, IsEmployer]

    def get(self, request):
        employer = EmployerProfileService.get_profile(request.user)
        if employer is None:
            result = ServiceResult.fail(ErrorCode.NOT_FOUND, 'Employer profile not found.')
        else:
            result = ServiceResult.ok(employer)
        return result_response(result, _profile_data)

    def post(self, request):
        result = EmployerProfileService.create_profile(request.user, request.data)
        return result_response(result, _profile_data, success_status=status.HTTP_201_CREATED)

    def patch(self, request):
        result = EmployerProfileService.update_profile(request.user, request.data)
        return result_response(result, _profile_data)


class SnapshotListView(APIView):
    """
    Saved CV snapshots.

    POST {"jobseeker_profile_id": "<uuid>"} saves the CV at its current
    version. Requires a verified employer.
    """

    permission_classes = [IsAuthenticated, IsEmployer]

    def get(self, request):
        result = SnapshotService.list_snapshots(
            request.user,
            page=request.query_params.get('page'),
            limit=request.query_params.get('limit'),
        )
        return result_response(result, _paginated(SnapshotSerializer))

    def post(self, request):
        serializer = SnapshotCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        result = SnapshotService.save_snapshot(
            request.user, serializer.validated_data['jobseeker_profile_id']
        )
        return result_response(
            result,
            lambda snapshot: SnapshotSerializer(snapshot).data,
            success_status=status.HTTP_201_CREATED,
        )


class SnapshotDetailView(APIView):
    permission_classes = [IsAuthenticated, IsEmployer]

    def get(self, request, snapshot_id):
        result = SnapshotService.get_snapshot(request.user, snapshot_id)
        return result_response(result, lambda snapshot: SnapshotSerializer(snapshot).data)

    def delete(self, request, snapshot_id):
        result = SnapshotService.delete_snapshot(request.user, snapshot_id)
        return result_response(result, success_status=status.HTTP_204_NO_CONTENT)


class ReviewQueueView(APIView):
    """Employer verification queue for admins (?status=pending)."""

    permission_classes = [IsAuthenticated, IsAdmin]

    def get(self, request):
        serializer = ReviewQueueQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        params = serializer.validated_data
        result = VerificationService.review_queue(
            request.user,
            status=params.get('status'),
            page=params.get('page'),
            limit=params.get('limit'),
        )
        return result_response(result, _paginated(ReviewEmployerSerializer))


class ReviewDecisionView(APIView):
    """
    Approve, reject or reset an employer.

    POST {"action": "reject", "notes": "Registration number not found"}
    """

    permission_classes = [IsAuthenticated, IsAdmin]

    def post(self, request, employer_id):
        serializer = ReviewDecisionInputSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        result = VerificationService.decide(
            employer_id,
            serializer.validated_data['action'],
            request.user,
            notes=serializer.validated_data['notes'],
        )
        return result_response(result, lambda employer: ReviewEmployerSerializer(employer).data)

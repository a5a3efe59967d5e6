"""
Interview API views.

Endpoints (under /api/v1/interviews/):
    ''                  GET, POST   list own requests / employer creates one
    <uuid>/             DELETE      employer removes a finished request
    <uuid>/respond/     POST        jobseeker accepts or declines
    <uuid>/cancel/      POST        employer withdraws a pending request
    <uuid>/complete/    POST        either party marks an accepted interview done
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from core.api import result_response, validation_response
from core.permissions import IsEmployer, IsJobSeeker

from .serializers import (
    EmployerInterviewSerializer,
    InterviewCreateSerializer,
    InterviewListQuerySerializer,
    JobseekerInterviewSerializer,
    RespondSerializer,
    serializer_for,
)
from .services import InterviewService


def _single(serializer_class):
    return lambda interview: serializer_class(interview).data


class InterviewListView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = InterviewListQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_response(query.errors)
        params = query.validated_data

        if getattr(request.user, 'role', None) == 'employer':
            list_requests = InterviewService.list_for_employer
        else:
            list_requests = InterviewService.list_for_jobseeker
        result = list_requests(
            request.user,
            status=params.get('status'),
            page=params.get('page'),
            limit=params.get('limit'),
        )
        serializer_class = serializer_for(request.user)
        return result_response(
            result,
            lambda data: {**data, 'results': serializer_class(data['results'], many=True).data},
        )

    def post(self, request):
        if not IsEmployer().has_permission(request, self):
            self.permission_denied(request, message=IsEmployer.message)

        serializer = InterviewCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        details = {
            name: value
            for name, value in serializer.validated_data.items()
            if name != 'jobseeker_profile_id' and value not in (None, '')
        }
        result = InterviewService.create_request(
            request.user, serializer.validated_data['jobseeker_profile_id'], details
        )
        return result_response(
            result,
            _single(EmployerInterviewSerializer),
            success_status=status.HTTP_201_CREATED,
        )


class InterviewDetailView(APIView):
    permission_classes = [IsAuthenticated, IsEmployer]

    def delete(self, request, request_id):
        result = InterviewService.delete(request.user, request_id)
        return result_response(result, success_status=status.HTTP_204_NO_CONTENT)


class RespondView(APIView):
    """POST {"decision": "accept" | "decline", "message": "..."}"""

    permission_classes = [IsAuthenticated, IsJobSeeker]

    def post(self, request, request_id):
        serializer = RespondSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        result = InterviewService.respond(
            request.user,
            request_id,
            serializer.validated_data['decision'],
            message=serializer.validated_data.get('message'),
        )
        return result_response(result, _single(JobseekerInterviewSerializer))


class CancelView(APIView):
    permission_classes = [IsAuthenticated, IsEmployer]

    def post(self, request, request_id):
        result = InterviewService.cancel(request.user, request_id)
        return result_response(result, _single(EmployerInterviewSerializer))


class CompleteView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, request_id):
        result = InterviewService.mark_completed(request.user, request_id)
        return result_response(result, _single(serializer_for(request.user)))

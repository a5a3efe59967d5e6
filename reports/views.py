"""
Report API views.

Endpoints (under /api/v1/reports/):
    ''                 GET, POST   own reports / report a CV, employer or message
    review/            GET         admin moderation queue
    review/<uuid>/     POST        admin resolves a report
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from core.api import result_response, validation_response
from core.permissions import IsAdmin

from .serializers import (
    ReportCreateSerializer,
    ReportQueueQuerySerializer,
    ReportSerializer,
    ResolveInputSerializer,
    ReviewReportSerializer,
)
from .services import ReportService


def _paginated(serializer_class):
    def render(data):
        return {**data, 'results': serializer_class(data['results'], many=True).data}
    return render


class ReportListView(APIView):
    """
    POST {"target_type": "message", "target_id": "<uuid>", "reason": "spam"}

    ``note`` is required when the reason is ``other``.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        result = ReportService.my_reports(
            request.user,
            page=request.query_params.get('page'),
            limit=request.query_params.get('limit'),
        )
        return result_response(result, _paginated(ReportSerializer))

    def post(self, request):
        serializer = ReportCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        data = serializer.validated_data
        result = ReportService.create(
            request.user, data['target_type'], data['target_id'], data['reason'], note=data['note'],
        )
        return result_response(
            result, lambda report: ReportSerializer(report).data, success_status=status.HTTP_201_CREATED,
        )


class ReportQueueView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    def get(self, request):
        serializer = ReportQueueQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        params = serializer.validated_data
        result = ReportService.review_queue(
            request.user,
            status=params.get('status'),
            target_type=params.get('target_type'),
            page=params.get('page'),
            limit=params.get('limit'),
        )
        return result_response(result, _paginated(ReviewReportSerializer))


class ReportResolveView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    def post(self, request, report_id):
        serializer = ResolveInputSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        result = ReportService.resolve(
            report_id,
            serializer.validated_data['status'],
            request.user,
            notes=serializer.validated_data['notes'],
        )
        return result_response(result, lambda report: ReviewReportSerializer(report).data)

"""
Helpers for exposing ServiceResult values through Django REST Framework.
"""

from typing import Callable, Optional

from rest_framework import status
from rest_framework.response import Response

from .results import ErrorCode, ServiceResult

ERROR_STATUS = {
    ErrorCode.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    # Same HTTP status as forbidden; clients tell them apart by ``code``.
    ErrorCode.NOT_VERIFIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.LOCKED: status.HTTP_423_LOCKED,
}


def error_response(result: ServiceResult) -> Response:
    """Render a failed result as ``{"success": false, "code", "message", "errors"}``."""
    return Response(
        {
            'success': False,
            'code': result.code,
            'message': str(result.message),
            'errors': result.errors,
        },
        status=ERROR_STATUS[ErrorCode(result.code)],
    )


def result_response(
    result: ServiceResult,
    serializer: Optional[Callable] = None,
    success_status: int = status.HTTP_200_OK,
) -> Response:
    """
    Turn a ServiceResult into a DRF Response.

    Args:
        result: The service outcome
        serializer: Optional callable applied to ``result.data`` on success
        success_status: HTTP status for the success case
    """
    if not result.success:
        return error_response(result)

    if success_status == status.HTTP_204_NO_CONTENT:
        return Response(status=success_status)

    data = serializer(result.data) if serializer else result.data
    return Response(data, status=success_status)


def validation_response(errors) -> Response:
    """400 response for a request body that failed serializer validation."""
    return error_response(ServiceResult.fail(ErrorCode.VALIDATION, errors=errors))

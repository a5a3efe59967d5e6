"""
Service results - the return type of every workflow operation.

Services never raise for an expected business condition ("already
requested", "profile incomplete", "locked while visible"). They return a
``ServiceResult`` whose ``code`` tells the caller which guided state to
render. Only unexpected faults (database unreachable) propagate as
exceptions.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from django.db import models
from django.utils.translation import gettext_lazy as _


class ErrorCode(models.TextChoices):
    """Failure kinds a service operation can report."""

    VALIDATION = 'validation', _('Validation error')
    NOT_FOUND = 'not_found', _('Not found')
    FORBIDDEN = 'forbidden', _('Forbidden')
    NOT_VERIFIED = 'not_verified', _('Pending verification')
    CONFLICT = 'conflict', _('Conflict')
    LOCKED = 'locked', _('Locked')


DEFAULT_MESSAGES = {
    ErrorCode.VALIDATION: _('The submitted data is invalid.'),
    ErrorCode.NOT_FOUND: _('The requested resource was not found.'),
    ErrorCode.FORBIDDEN: _('You do not have permission to perform this action.'),
    ErrorCode.NOT_VERIFIED: _('Your employer account is pending verification.'),
    ErrorCode.CONFLICT: _('This action conflicts with the current state.'),
    ErrorCode.LOCKED: _('Your CV is locked while visible to employers. Turn off visibility to edit.'),
}


@dataclass
class ServiceResult:
    """Base result class for service operations."""
    success: bool
    message: str = ''
    data: Any = None
    errors: Dict[str, Any] = None
    code: Optional[str] = None

    def __post_init__(self):
        if self.errors is None:
            self.errors = {}

    def __bool__(self):
        return self.success

    @classmethod
    def ok(cls, data: Any = None, message: str = '') -> 'ServiceResult':
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(
        cls,
        code: str,
        message: str = '',
        errors: Optional[Dict[str, Any]] = None,
        data: Any = None,
    ) -> 'ServiceResult':
        """
        Build a failed result.

        Args:
            code: One of ``ErrorCode``
            message: User-facing message; defaults to the code's message
            errors: Field or rule level details
            data: Optional payload (e.g. the existing conflicting row)
        """
        return cls(
            success=False,
            message=message or str(DEFAULT_MESSAGES[ErrorCode(code)]),
            data=data,
            errors=errors,
            code=ErrorCode(code).value,
        )

    @property
    def is_not_verified(self) -> bool:
        return self.code == ErrorCode.NOT_VERIFIED

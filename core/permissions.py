"""
Core Permissions - role checks shared by the SeaVitae API.

The identity provider supplies an authenticated account and its role; these
classes only gate which endpoints a role may reach. Ownership, visibility
and verification are checked inside the services so that the API and any
other caller share one set of rules.
"""

import logging
from typing import Any

from rest_framework import permissions
from rest_framework.request import Request
from rest_framework.views import APIView

logger = logging.getLogger(__name__)


def is_admin(user) -> bool:
    """Admins are users with the admin role, staff or superusers."""
    if user is None or not getattr(user, 'is_authenticated', False):
        return False
    return bool(user.is_superuser or user.is_staff or getattr(user, 'is_admin_role', False))


class HasRole(permissions.BasePermission):
    """
    Require the authenticated user to hold a given role.

    Subclasses set ``role``.
    """

    role = None
    message = "This endpoint is not available for your account type."

    def has_permission(self, request: Request, view: APIView) -> bool:
        user = request.user
        if not user or not user.is_authenticated:
            return False
        allowed = getattr(user, 'role', None) == self.role
        if not allowed:
            logger.warning(
                "Role check failed: user=%s role=%s required=%s view=%s",
                user.pk, getattr(user, 'role', None), self.role, view.__class__.__name__,
            )
        return allowed


class IsJobSeeker(HasRole):
    role = 'jobseeker'


class IsEmployer(HasRole):
    role = 'employer'


class IsAdmin(permissions.BasePermission):
    """Reviewer access for the verification queue."""

    message = "Admin access required."

    def has_permission(self, request: Request, view: APIView) -> bool:
        return is_admin(request.user)

    def has_object_permission(self, request: Request, view: APIView, obj: Any) -> bool:
        return is_admin(request.user)

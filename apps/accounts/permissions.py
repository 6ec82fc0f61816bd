"""
Role-based permission classes shared by every app.

Roles live on ``User.role`` (contributor, reviewer, administrator). These
classes gate the HTTP surface; services repeat the check through
``apps.accounts.services.authorize`` before mutating anything.
"""
from rest_framework.permissions import BasePermission

from .models import UserRole


class HasRole(BasePermission):
    """
    Allow authenticated users whose role is in ``allowed_roles``.

    Usage:
        class IsReviewer(HasRole):
            allowed_roles = (UserRole.REVIEWER,)
    """

    allowed_roles = ()
    message = 'Your role does not allow this action.'
    code = 'not_authorized'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.has_role(*self.allowed_roles)


class IsReviewer(HasRole):
    """Institutional reviewers only."""

    allowed_roles = (UserRole.REVIEWER,)
    message = 'Only reviewers can perform this action.'


class IsAdministrator(HasRole):
    """Platform administrators only."""

    allowed_roles = (UserRole.ADMINISTRATOR,)
    message = 'Only administrators can perform this action.'


class CanSubmitBook(HasRole):
    """Contributors and administrators may donate books."""

    allowed_roles = (UserRole.CONTRIBUTOR, UserRole.ADMINISTRATOR)
    message = 'Only contributors can donate books.'

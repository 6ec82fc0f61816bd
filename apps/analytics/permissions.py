"""
Custom permission classes for analytics app.

Permission Classes:
    CanViewUserSummary - Own summary, or any summary for administrators

Usage:
    from apps.analytics.permissions import CanViewUserSummary

    @api_view(['GET'])
    @permission_classes([IsAuthenticated, CanViewUserSummary])
    def user_summary(request, user_id=None):
        ...
"""

from rest_framework.permissions import BasePermission


class CanViewUserSummary(BasePermission):
    """
    Permission check for per-user analytics.

    Access is allowed if:
    - No user_id is in the URL (the caller's own summary)
    - user_id is the caller's own id
    - The caller is an administrator
    """

    message = 'You can only view your own analytics.'
    code = 'not_authorized'

    def has_permission(self, request, view):
        user_id = view.kwargs.get('user_id')

        if user_id is None or str(user_id) == str(request.user.id):
            return True

        return request.user.is_administrator

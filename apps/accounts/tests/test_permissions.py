"""Tests for the role permission classes."""
from unittest.mock import Mock

import pytest
from django.contrib.auth.models import AnonymousUser
from apps.accounts.permissions import CanSubmitBook, IsAdministrator, IsReviewer


def _allowed(permission_class, user):
    request = Mock()
    request.user = user
    return permission_class().has_permission(request, Mock())


@pytest.mark.django_db
class TestRolePermissions:

    @pytest.mark.parametrize('permission_class,expected', [
        (IsReviewer, {'contributor': False, 'reviewer': True, 'administrator': False}),
        (IsAdministrator, {'contributor': False, 'reviewer': False, 'administrator': True}),
        (CanSubmitBook, {'contributor': True, 'reviewer': False, 'administrator': True}),
    ])
    def test_roles(self, contributor, reviewer, administrator, permission_class, expected):
        users = {'contributor': contributor, 'reviewer': reviewer, 'administrator': administrator}

        allowed = {role: _allowed(permission_class, user) for role, user in users.items()}

        assert allowed == expected

    @pytest.mark.parametrize('permission_class', [IsReviewer, IsAdministrator, CanSubmitBook])
    def test_anonymous_denied(self, permission_class):
        assert _allowed(permission_class, AnonymousUser()) is False

    def test_denial_code(self):
        assert IsReviewer.code == 'not_authorized'

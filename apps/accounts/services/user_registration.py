"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.models import UserRole
from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)

# Administrators are provisioned with createsuperuser, never self-registered.
SELF_REGISTRATION_ROLES = (UserRole.CONTRIBUTOR, UserRole.REVIEWER)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    role: str = UserRole.CONTRIBUTOR,
    display_name: str = "",
    institution: str = ""
) -> User:
    """
    Register a new contributor or reviewer.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        role: 'contributor' or 'reviewer'
        display_name: Optional display name
        institution: Required for reviewers, ignored otherwise

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the role is not allowed, a reviewer has
            no institution, or the email is already registered
    """
    if role not in SELF_REGISTRATION_ROLES:
        raise UserRegistrationError("Invalid role")

    if role == UserRole.REVIEWER and not institution.strip():
        raise UserRegistrationError("Institution is required for reviewers")

    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("User already exists")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            display_name=display_name,
            role=role,
            institution=institution.strip() if role == UserRole.REVIEWER else "",
        )
    except IntegrityError:
        raise UserRegistrationError("User already exists")

    logger.info("Registered %s %s", user.role, user.id)
    return user

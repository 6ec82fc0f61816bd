from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid


# Largest value a PositiveIntegerField holds on every supported backend
MAX_POINTS_BALANCE = 2_147_483_647


class UserRole(models.TextChoices):
    CONTRIBUTOR = 'contributor', 'Contributor'
    REVIEWER = 'reviewer', 'Reviewer'
    ADMINISTRATOR = 'administrator', 'Administrator'


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email).lower()
        extra_fields.setdefault('role', UserRole.CONTRIBUTOR)
        if extra_fields['role'] != UserRole.REVIEWER:
            extra_fields['institution'] = ''
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', UserRole.ADMINISTRATOR)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Custom user model with email authentication and a reward-point balance."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    display_name = models.CharField(max_length=100, blank=True)

    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.CONTRIBUTOR,
        db_index=True,
    )
    # Reviewers only
    institution = models.CharField(max_length=200, blank=True)

    # Cached projection of the ledger, see apps.ledger
    points_balance = models.PositiveIntegerField(default=0)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['email'], name='users_email_idx'),
            models.Index(fields=['role', 'created_at'], name='users_role_created_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(points_balance__gte=0),
                name='users_points_balance_non_negative',
            ),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.email

    def get_display_name(self):
        """Return display name or email prefix."""
        return self.display_name or self.email.split('@')[0]

    def has_role(self, *roles):
        return self.role in roles

    @property
    def is_contributor(self):
        return self.role == UserRole.CONTRIBUTOR

    @property
    def is_reviewer(self):
        return self.role == UserRole.REVIEWER

    @property
    def is_administrator(self):
        return self.role == UserRole.ADMINISTRATOR

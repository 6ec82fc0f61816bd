from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, UserRole


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'role',
            'institution',
            'points_balance',
            'created_at',
            'updated_at',
            'last_login',
        ]
        read_only_fields = [
            'id',
            'email',
            'role',
            'points_balance',
            'created_at',
            'updated_at',
            'last_login',
        ]


class UserRegistrationSerializer(serializers.Serializer):
    """Validate registration input before it reaches the service."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    role = serializers.ChoiceField(
        choices=[UserRole.CONTRIBUTOR, UserRole.REVIEWER],
        default=UserRole.CONTRIBUTOR,
    )
    institution = serializers.CharField(max_length=200, required=False, allow_blank=True)

    def validate(self, attrs):
        """Validate password confirmation and reviewer institution."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        if attrs.get('role') == UserRole.REVIEWER and not attrs.get('institution', '').strip():
            raise serializers.ValidationError({
                'institution': 'Institution is required for reviewers'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class UserFilterSerializer(serializers.Serializer):
    """Validate query parameters for the administrator user listing."""

    role = serializers.ChoiceField(choices=UserRole.choices, required=False)


class UserPublicSerializer(serializers.ModelSerializer):
    """Public user info (donor/reviewer/redeemer references on books)."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'display_name', 'role']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()

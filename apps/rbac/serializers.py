"""
RBAC serializers for REST API endpoints.

Provides serialization for:
- Authentication (signup, login)
- Users and staff accounts
- Owner active-branch selection
"""
from rest_framework import serializers
from apps.branches.serializers import BranchSummarySerializer
from apps.rbac.models import User
from apps.rbac.roles import Role, STAFF_ROLES
from apps.rbac.services import MIN_PASSWORD_LENGTH


# ===== AUTHENTICATION SERIALIZERS =====

class SignupSerializer(serializers.Serializer):
    """Serializer for customer signup."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        min_length=MIN_PASSWORD_LENGTH,
        style={'input_type': 'password'}
    )
    name = serializers.CharField(required=False, allow_blank=True, max_length=150, default='')
    branch_id = serializers.IntegerField(required=True, min_value=1)

    def validate_email(self, value):
        return value.strip().lower()


class LoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )

    def validate_email(self, value):
        return value.strip().lower()


# ===== USER SERIALIZERS =====

class UserSerializer(serializers.ModelSerializer):
    """Public representation of a user. Never exposes the password hash."""

    branch_id = serializers.IntegerField(read_only=True, allow_null=True)
    active_branch_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = User
        fields = [
            'id', 'email', 'name', 'role', 'branch_id', 'active_branch_id',
            'is_active', 'created_at',
        ]
        read_only_fields = fields


class MeSerializer(UserSerializer):
    """Current user with home and active branch details."""

    branch = BranchSummarySerializer(read_only=True, allow_null=True)
    active_branch = BranchSummarySerializer(read_only=True, allow_null=True)

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ['branch', 'active_branch', 'last_login_at']
        read_only_fields = fields


class ActiveBranchSerializer(serializers.Serializer):
    """Body of PATCH users/<id>/active-branch. ``null`` clears the selection."""

    branch_id = serializers.IntegerField(required=True, allow_null=True, min_value=1)


# ===== STAFF SERIALIZERS =====

class StaffCreateSerializer(serializers.Serializer):
    """Serializer for creating a staff member in a branch."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        min_length=MIN_PASSWORD_LENGTH,
        style={'input_type': 'password'}
    )
    name = serializers.CharField(required=False, allow_blank=True, max_length=150, default='')
    role = serializers.CharField(required=True)
    branch_id = serializers.IntegerField(required=True, min_value=1)

    def validate_role(self, value):
        role = value.strip().upper()
        if role not in {r.value for r in STAFF_ROLES}:
            allowed = ', '.join(sorted(r.value for r in STAFF_ROLES))
            raise serializers.ValidationError(f"Invalid role. Must be one of: {allowed}")
        return Role(role)

    def validate_email(self, value):
        return value.strip().lower()


class PasswordResetSerializer(serializers.Serializer):
    """Serializer for an owner resetting a staff password."""

    password = serializers.CharField(
        required=True,
        write_only=True,
        min_length=MIN_PASSWORD_LENGTH,
        style={'input_type': 'password'}
    )

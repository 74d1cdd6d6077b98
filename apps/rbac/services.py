"""
Authentication, active-branch and staff administration services.

Implements:
- AuthService: JWT issue/verify, customer signup, login
- ActiveBranchService: owner active-branch selection
- StaffService: staff accounts per branch
"""
import logging
from typing import Optional, Dict, Any
from datetime import datetime, timedelta, timezone as dt_timezone
from django.conf import settings
from django.db import transaction
from rest_framework.exceptions import ValidationError
import jwt

from apps.branches.models import Branch
from apps.core.exceptions import ResourceNotFound
from apps.core.logging import SecurityLogger
from apps.rbac.branch_scope import parse_branch_id
from apps.rbac.models import User, AuditLog
from apps.rbac.roles import Role, STAFF_ROLES, normalize_role

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 3


def _get_branch(branch_id) -> Branch:
    parsed = parse_branch_id(branch_id)
    if parsed is None:
        raise ValidationError({'branch_id': ['A valid branch id is required.']})
    branch = Branch.objects.filter(pk=parsed).first()
    if branch is None:
        raise ResourceNotFound('Branch not found.')
    return branch


class AuthService:
    """
    Service for authentication operations: JWT, signup, login.
    """

    @classmethod
    def generate_jwt(cls, user: User) -> str:
        """
        Generate JWT token for a user.

        The token only identifies the user. Role and branches are always
        read from the database on each request.
        """
        now = datetime.now(dt_timezone.utc)
        payload = {
            'user_id': str(user.id),
            'email': user.email,
            'exp': now + timedelta(hours=getattr(settings, 'JWT_EXPIRATION_HOURS', 24)),
            'iat': now,
        }

        return jwt.encode(
            payload,
            settings.JWT_SECRET_KEY,
            algorithm=getattr(settings, 'JWT_ALGORITHM', 'HS256')
        )

    @classmethod
    def validate_jwt(cls, token: str) -> Optional[Dict[str, Any]]:
        """
        Validate JWT token and return payload.

        Returns:
            Decoded payload dict or None if invalid
        """
        try:
            return jwt.decode(
                token,
                settings.JWT_SECRET_KEY,
                algorithms=[getattr(settings, 'JWT_ALGORITHM', 'HS256')]
            )
        except jwt.ExpiredSignatureError:
            return None
        except jwt.InvalidTokenError:
            return None

    @classmethod
    def get_user_from_jwt(cls, token: str) -> Optional[User]:
        """
        Extract and return user from JWT token.

        Returns:
            User instance or None if invalid
        """
        payload = cls.validate_jwt(token)
        if not payload:
            return None

        user_id = payload.get('user_id')
        if not user_id or not str(user_id).isdigit():
            return None

        return User.objects.filter(id=int(user_id), is_active=True).first()

    @classmethod
    @transaction.atomic
    def signup(cls, email: str, password: str, branch_id, name: str = '') -> Dict[str, Any]:
        """
        Register a customer in a home branch.

        Signup never grants a staff role; staff accounts are created by the
        owner through StaffService.
        """
        branch = _get_branch(branch_id)
        if User.objects.by_email(email):
            raise ValidationError({'email': ['User with this email already exists.']})

        user = User.objects.create_user(
            email=email,
            password=password,
            name=name,
            role=Role.CUSTOMER,
            branch=branch,
        )

        AuditLog.log_action(
            action='user_signup',
            user=user,
            branch_id=branch.id,
            target_type='User',
            target_id=user.id,
        )
        logger.info("Customer signed up", extra={'user_id': user.id, 'branch_id': branch.id})

        return {'user': user, 'token': cls.generate_jwt(user)}

    @classmethod
    def login(cls, email: str, password: str) -> Optional[Dict[str, Any]]:
        """
        Authenticate user and return JWT token.

        Returns:
            Dict with user and token, or None if authentication failed
        """
        user = User.objects.active().filter(email=User.objects.normalize_email(email)).first()
        if user is None or not user.check_password(password):
            return None

        user.update_last_login()

        AuditLog.log_action(
            action='user_login',
            user=user,
            branch_id=user.branch_id,
            target_type='User',
            target_id=user.id,
        )

        return {'user': user, 'token': cls.generate_jwt(user)}


class ActiveBranchService:
    """
    Owner active-branch selection.

    The active branch only matters for the top role; everybody else is
    pinned to their home branch by the resolver regardless.
    """

    @classmethod
    def get_active_branch(cls, user: User) -> Optional[Branch]:
        return user.active_branch

    @classmethod
    @transaction.atomic
    def set_active_branch(cls, user: User, branch_id, request=None) -> Optional[Branch]:
        """
        Select (or clear, with None) the user's active branch.

        Raises:
            ValidationError: branch_id is present but not a valid id
            ResourceNotFound: no branch with that id
        """
        branch = None if branch_id is None else _get_branch(branch_id)
        previous_branch_id = user.active_branch_id

        user.active_branch = branch
        user.save(update_fields=['active_branch', 'updated_at'])

        AuditLog.log_action(
            action='active_branch_changed',
            user=user,
            branch_id=branch.id if branch else None,
            target_type='User',
            target_id=user.id,
            diff={
                'before': {'active_branch_id': previous_branch_id},
                'after': {'active_branch_id': user.active_branch_id},
            },
            request=request,
        )
        SecurityLogger.log_active_branch_changed(
            user_id=user.id,
            previous_branch_id=previous_branch_id,
            branch_id=user.active_branch_id,
            ip_address=request.META.get('REMOTE_ADDR') if request is not None else None,
        )
        return branch


class StaffService:
    """
    Staff accounts: listing per branch, creation and password resets.
    """

    @classmethod
    def list_staff(cls, branch_id):
        """Managers, chefs and front staff whose home branch is branch_id."""
        return User.objects.for_branch(branch_id).filter(role__in=STAFF_ROLES).order_by('-created_at')

    @classmethod
    @transaction.atomic
    def create_staff(cls, email: str, password: str, role, branch_id, name: str = '',
                     created_by: Optional[User] = None, request=None) -> User:
        """
        Create a staff member in a branch.

        Raises:
            ValidationError: role is not a staff role, or the email is taken
            ResourceNotFound: no branch with that id
        """
        resolved_role = normalize_role(role)
        if resolved_role not in STAFF_ROLES:
            allowed = ', '.join(sorted(r.value for r in STAFF_ROLES))
            raise ValidationError({'role': [f'Invalid role. Must be one of: {allowed}']})

        branch = _get_branch(branch_id)
        if User.objects.by_email(email):
            raise ValidationError({'email': ['User with this email already exists.']})

        user = User.objects.create_user(
            email=email,
            password=password,
            name=name,
            role=resolved_role,
            branch=branch,
        )

        AuditLog.log_action(
            action='staff_created',
            user=created_by,
            branch_id=branch.id,
            target_type='User',
            target_id=user.id,
            metadata={'role': resolved_role.value},
            request=request,
        )
        logger.info(
            "Staff member created",
            extra={'user_id': user.id, 'role': resolved_role.value, 'branch_id': branch.id}
        )
        return user

    @classmethod
    def reset_password(cls, user_id, password: str, reset_by: Optional[User] = None, request=None) -> User:
        """
        Set a new password for a user.

        Raises:
            ValidationError: password shorter than MIN_PASSWORD_LENGTH
            ResourceNotFound: no such user
        """
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                {'password': [f'Password must be at least {MIN_PASSWORD_LENGTH} characters.']}
            )

        user = User.objects.filter(pk=user_id).first()
        if user is None:
            raise ResourceNotFound('User not found.')

        user.set_password(password)
        user.save(update_fields=['password_hash', 'updated_at'])

        AuditLog.log_action(
            action='password_reset',
            user=reset_by,
            branch_id=user.branch_id,
            target_type='User',
            target_id=user.id,
            request=request,
        )
        return user

"""
Users and the audit trail.

A user signs in with an email address, holds exactly one role and (unless
they are the owner) works in or visits exactly one home branch. AuditLog
keeps a row for every mutation staff make through the API.
"""
import logging
from django.db import models
from django.contrib.auth.hashers import make_password, check_password
from apps.core.models import BaseModel
from apps.rbac.roles import Role, TOP_ROLE

logger = logging.getLogger(__name__)


class UserManager(models.Manager):
    """Email-keyed user lookups plus the hooks Django auth and admin expect."""

    def active(self):
        return self.filter(is_active=True)

    def by_email(self, email):
        """Case-insensitive lookup; None when nobody has that address."""
        return self.filter(email=self.normalize_email(email)).first()

    def for_branch(self, branch_id):
        """Users whose home branch is branch_id."""
        return self.filter(branch_id=branch_id)

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email address is required')

        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('is_superuser', False)
        extra_fields.setdefault('role', Role.CUSTOMER)

        user = self.model(email=self.normalize_email(email), **extra_fields)
        if password:
            user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Used by ``createsuperuser``: the owner account with admin-site access."""
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', TOP_ROLE)

        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)

    def normalize_email(self, email):
        return (email or '').strip().lower()

    def get_by_natural_key(self, email):
        return self.get(**{self.model.USERNAME_FIELD: self.normalize_email(email)})


class User(BaseModel):
    """
    Anyone who can sign in: the owner, branch staff or a guest.

    ``branch`` is the home branch that pins every non-owner request.
    ``active_branch`` is only meaningful for the owner, who may pin one
    branch to scope requests that name none.

    Doubles as AUTH_USER_MODEL so the Django admin works for superusers.
    """

    email = models.EmailField(
        unique=True,
        db_index=True,
        help_text="User email address (login name)"
    )
    password_hash = models.CharField(
        max_length=255,
        help_text="Hashed password",
        db_column='password_hash'
    )
    name = models.CharField(
        max_length=150,
        blank=True,
        help_text="Display name"
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.CUSTOMER,
        db_index=True,
        help_text="Single role held by this user"
    )

    branch = models.ForeignKey(
        'branches.Branch',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='users',
        help_text="Home branch"
    )
    active_branch = models.ForeignKey(
        'branches.Branch',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        help_text="Branch currently selected by the owner"
    )

    is_active = models.BooleanField(
        default=True,
        db_index=True,
        help_text="Whether user account is active"
    )
    is_superuser = models.BooleanField(
        default=False,
        help_text="Django admin access (use sparingly in production)"
    )
    last_login_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Last login timestamp"
    )

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        db_table = 'users'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['branch', 'role'], name='users_branch_role_idx'),
            models.Index(fields=['is_active', 'created_at'], name='users_active_created_idx'),
        ]

    def __str__(self):
        return self.email

    # The column is password_hash; Django auth and admin read ``password``.
    @property
    def password(self):
        return self.password_hash

    @password.setter
    def password(self, value):
        self.password_hash = value

    def set_password(self, raw_password):
        self.password_hash = make_password(raw_password)

    def check_password(self, raw_password):
        return check_password(raw_password, self.password_hash)

    def update_last_login(self):
        from django.utils import timezone
        self.last_login_at = timezone.now()
        self.save(update_fields=['last_login_at'])

    @property
    def is_owner(self):
        return self.role == TOP_ROLE

    @property
    def is_authenticated(self):
        return True

    @property
    def is_anonymous(self):
        return False

    @property
    def is_staff(self):
        """Admin-site access, which only superusers get."""
        return self.is_superuser

    def has_perm(self, perm, obj=None):
        return self.is_superuser

    def has_perms(self, perm_list, obj=None):
        return self.is_superuser

    def has_module_perms(self, app_label):
        return self.is_superuser

    def natural_key(self):
        return (self.email,)


class AuditLogManager(models.Manager):

    def for_branch(self, branch_id):
        return self.filter(branch_id=branch_id)

    def by_action(self, action):
        return self.filter(action=action)


class AuditLog(BaseModel):
    """
    One row per state change made through the API.

    Covers order and reservation status changes, inventory adjustments,
    feedback moderation, branch settings, staff accounts and the owner's
    active-branch switches. ``branch_id`` is a plain integer so the trail
    outlives a deleted branch.
    """

    user = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
        db_index=True,
        help_text="User who performed the action (null for system actions)"
    )
    branch_id = models.PositiveIntegerField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Branch the action touched (null for global actions)"
    )

    action = models.CharField(
        max_length=100,
        db_index=True,
        help_text="Action performed (e.g., 'order_status_changed', 'staff_created')"
    )
    target_type = models.CharField(
        max_length=50,
        db_index=True,
        help_text="Type of target entity (e.g., 'Order', 'User')"
    )
    target_id = models.PositiveIntegerField(
        null=True,
        blank=True,
        db_index=True,
        help_text="ID of target entity"
    )
    diff = models.JSONField(
        default=dict,
        blank=True,
        help_text="Before/after changes in JSON format"
    )

    ip_address = models.GenericIPAddressField(
        null=True,
        blank=True,
        help_text="IP address of the request"
    )
    user_agent = models.TextField(
        blank=True,
        help_text="User agent string"
    )
    request_id = models.CharField(
        max_length=64,
        blank=True,
        db_index=True,
        help_text="Request ID for tracing"
    )

    metadata = models.JSONField(
        default=dict,
        blank=True,
        help_text="Additional context metadata"
    )

    objects = AuditLogManager()

    class Meta:
        db_table = 'audit_logs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['branch_id', 'created_at'], name='audit_branch_created_idx'),
            models.Index(fields=['user', 'created_at'], name='audit_user_created_idx'),
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['target_type', 'target_id'], name='audit_target_idx'),
        ]

    def __str__(self):
        actor = self.user.email if self.user else 'System'
        return f"{self.branch_id or 'Global'} - {actor} - {self.action}"

    @classmethod
    def log_action(cls, action, user=None, branch_id=None, target_type=None,
                   target_id=None, diff=None, metadata=None, request=None):
        """
        Write an audit row.

        ``request`` (Django or DRF) contributes the client IP, user agent and
        request id. Anonymous users are recorded as system actions.
        """
        if user is not None and not getattr(user, 'is_authenticated', False):
            user = None

        entry = cls(
            action=action,
            user=user,
            branch_id=branch_id,
            target_type=target_type or '',
            target_id=target_id,
            diff=diff or {},
            metadata=metadata or {},
        )
        if request is not None:
            entry.ip_address = cls.client_ip(request)
            entry.user_agent = request.META.get('HTTP_USER_AGENT', '')
            entry.request_id = getattr(request, 'request_id', None) or ''
        entry.save()
        return entry

    @staticmethod
    def client_ip(request):
        """First hop of X-Forwarded-For, else REMOTE_ADDR."""
        forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
        if forwarded:
            return forwarded.split(',')[0].strip()
        return request.META.get('REMOTE_ADDR')

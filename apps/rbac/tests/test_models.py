"""
Tests for RBAC models.
"""
import pytest
from django.core.exceptions import ValidationError
from rest_framework.test import APIRequestFactory

from apps.inventory.models import MenuItem
from apps.rbac.models import AuditLog, User
from apps.rbac.roles import Role


@pytest.mark.django_db
class TestUserManager:

    def test_create_user_hashes_password(self, branch_a):
        user = User.objects.create_user(email=' Diner@Example.COM ', password='abc', branch=branch_a)

        assert user.email == 'diner@example.com'
        assert user.password_hash != 'abc'
        assert user.check_password('abc')
        assert user.role == Role.CUSTOMER

    def test_create_user_requires_email(self):
        with pytest.raises(ValueError):
            User.objects.create_user(email='', password='abc')

    def test_create_superuser_is_admin(self):
        user = User.objects.create_superuser(email='root@steakz.com', password='abc')

        assert user.role == Role.ADMIN
        assert user.is_superuser
        assert user.is_owner
        assert user.is_staff

    def test_by_email_is_case_insensitive(self, manager):
        assert User.objects.by_email('MANAGER@steakz.com') == manager
        assert User.objects.by_email('nobody@steakz.com') is None

    def test_for_branch(self, manager, other_manager, branch_a):
        assert list(User.objects.for_branch(branch_a.id)) == [manager]

    def test_password_alias(self, manager):
        manager.password = 'raw-hash'
        assert manager.password_hash == 'raw-hash'


@pytest.mark.django_db
class TestAuditLog:

    def test_log_action_captures_request_context(self, manager, branch_a):
        request = APIRequestFactory().patch(
            '/v1/orders/1/status',
            HTTP_USER_AGENT='pytest',
            HTTP_X_FORWARDED_FOR='203.0.113.9, 10.0.0.1',
        )
        request.request_id = 'req-123'

        log = AuditLog.log_action(
            action='order_status_changed',
            user=manager,
            branch_id=branch_a.id,
            target_type='Order',
            target_id=1,
            diff={'before': {'status': 'PENDING'}, 'after': {'status': 'READY'}},
            request=request,
        )

        assert log.ip_address == '203.0.113.9'
        assert log.user_agent == 'pytest'
        assert log.request_id == 'req-123'
        assert AuditLog.objects.for_branch(branch_a.id).by_action('order_status_changed').count() == 1

    def test_system_action_without_user(self):
        log = AuditLog.log_action(action='branches_seeded', target_type='Branch')

        assert log.user is None
        assert str(log).startswith('Global - System')


@pytest.mark.django_db
class TestBranchOwnership:

    def test_owning_branch_is_immutable(self, ribeye, branch_b):
        ribeye.branch = branch_b

        with pytest.raises(ValidationError):
            ribeye.save()

        assert MenuItem.objects.get(pk=ribeye.pk).branch_id != branch_b.id

    def test_other_fields_stay_editable(self, ribeye):
        ribeye.name = 'Dry Aged Ribeye'
        ribeye.save()

        assert MenuItem.objects.get(pk=ribeye.pk).name == 'Dry Aged Ribeye'

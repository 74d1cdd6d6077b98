"""
Tests for staff administration endpoints.
"""
from unittest import mock

import pytest
from rest_framework import status

from apps.core.logging import SecurityLogger
from apps.rbac.models import AuditLog, User
from apps.rbac.roles import Role


@pytest.mark.django_db
class TestStaffList:
    """Test GET /v1/admin/staff/{branch_id}."""

    def test_manager_lists_own_branch(self, auth_client, manager, chef, staff, customer, branch_a):
        response = auth_client(manager).get(f'/v1/admin/staff/{branch_a.id}')

        assert response.status_code == status.HTTP_200_OK
        emails = {row['email'] for row in response.data['results']}
        assert emails == {'manager@steakz.com', 'chef@steakz.com', 'staff@steakz.com'}
        assert response.data['count'] == 3

    def test_manager_cannot_list_other_branch(self, auth_client, manager, other_manager, branch_b):
        """A manager naming another branch in the path is refused."""
        response = auth_client(manager).get(f'/v1/admin/staff/{branch_b.id}')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error']['code'] == 'FORBIDDEN_BRANCH'

    def test_admin_lists_any_branch(self, auth_client, admin_user, other_manager, branch_b):
        response = auth_client(admin_user).get(f'/v1/admin/staff/{branch_b.id}')

        assert response.status_code == status.HTTP_200_OK
        assert [row['email'] for row in response.data['results']] == ['manager.b@steakz.com']

    def test_chef_is_forbidden(self, auth_client, chef, branch_a):
        response = auth_client(chef).get(f'/v1/admin/staff/{branch_a.id}')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error']['code'] == 'FORBIDDEN_ROLE'

    def test_cross_branch_attempt_is_logged(self, auth_client, manager, branch_b):
        with mock.patch.object(SecurityLogger, 'log_event') as log_event:
            auth_client(manager).get(f'/v1/admin/staff/{branch_b.id}')

        event_type = log_event.call_args[0][0]
        assert event_type == 'cross_branch_access_attempt'
        assert log_event.call_args[1]['resource_branch_id'] == branch_b.id



@pytest.mark.django_db
class TestStaffCreate:
    """Test POST /v1/admin/staff."""

    def test_admin_creates_chef(self, auth_client, admin_user, branch_b):
        data = {
            'email': 'New.Chef@Steakz.com',
            'password': 'abc',
            'name': 'New Chef',
            'role': 'chef',
            'branch_id': branch_b.id,
        }

        response = auth_client(admin_user).post('/v1/admin/staff', data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['role'] == Role.CHEF
        assert response.data['branch_id'] == branch_b.id

        user = User.objects.get(email='new.chef@steakz.com')
        assert user.check_password('abc')
        log = AuditLog.objects.get(action='staff_created')
        assert log.user == admin_user
        assert log.branch_id == branch_b.id

    @pytest.mark.parametrize('role', ['ADMIN', 'CUSTOMER', 'OWNER'])
    def test_non_staff_roles_are_rejected(self, auth_client, admin_user, branch_a, role):
        data = {'email': 'x@steakz.com', 'password': 'abc', 'role': role, 'branch_id': branch_a.id}

        response = auth_client(admin_user).post('/v1/admin/staff', data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'role' in response.data['error']['details']

    def test_unknown_branch(self, auth_client, admin_user):
        data = {'email': 'x@steakz.com', 'password': 'abc', 'role': 'STAFF', 'branch_id': 999}

        response = auth_client(admin_user).post('/v1/admin/staff', data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_duplicate_email(self, auth_client, admin_user, staff, branch_a):
        data = {'email': 'staff@steakz.com', 'password': 'abc', 'role': 'STAFF', 'branch_id': branch_a.id}

        response = auth_client(admin_user).post('/v1/admin/staff', data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_manager_cannot_create_staff(self, auth_client, manager, branch_a):
        data = {'email': 'x@steakz.com', 'password': 'abc', 'role': 'STAFF', 'branch_id': branch_a.id}

        response = auth_client(manager).post('/v1/admin/staff', data, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not User.objects.filter(email='x@steakz.com').exists()


@pytest.mark.django_db
class TestStaffResetPassword:
    """Test PATCH /v1/admin/staff/{id}/reset-password."""

    def test_admin_resets_password(self, auth_client, admin_user, chef):
        response = auth_client(admin_user).patch(
            f'/v1/admin/staff/{chef.id}/reset-password', {'password': 'newpass'}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Password reset successfully'
        chef.refresh_from_db()
        assert chef.check_password('newpass')
        assert AuditLog.objects.filter(action='password_reset', target_id=chef.id).exists()

    def test_short_password(self, auth_client, admin_user, chef):
        response = auth_client(admin_user).patch(
            f'/v1/admin/staff/{chef.id}/reset-password', {'password': 'ab'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_user(self, auth_client, admin_user):
        response = auth_client(admin_user).patch(
            '/v1/admin/staff/999/reset-password', {'password': 'newpass'}, format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_manager_cannot_reset(self, auth_client, manager, chef):
        response = auth_client(manager).patch(
            f'/v1/admin/staff/{chef.id}/reset-password', {'password': 'newpass'}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        chef.refresh_from_db()
        assert chef.check_password('password123')

"""
Tests for branch endpoints.
"""
from decimal import Decimal

import pytest
from rest_framework import status

from apps.branches.models import Branch
from apps.feedback.models import Feedback
from apps.orders.models import Order
from apps.rbac.models import AuditLog
from apps.rbac.roles import Role
from apps.reservations.models import Reservation


@pytest.mark.django_db
class TestBranchList:
    """Test GET /v1/branches."""

    def test_admin_sees_every_branch(self, auth_client, admin_user, branch_a, branch_b):
        response = auth_client(admin_user).get('/v1/branches')

        assert response.status_code == status.HTTP_200_OK
        assert [row['name'] for row in response.data] == ['Steakz Downtown', 'Steakz Uptown']

    def test_manager_sees_home_branch_only(self, auth_client, manager, branch_a, branch_b):
        response = auth_client(manager).get('/v1/branches')

        assert response.status_code == status.HTTP_200_OK
        assert [row['id'] for row in response.data] == [branch_a.id]

    def test_customer_is_forbidden(self, auth_client, customer):
        response = auth_client(customer).get('/v1/branches')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error']['code'] == 'FORBIDDEN_ROLE'

    def test_staff_without_branch(self, auth_client, make_user):
        drifter = make_user('drifter@steakz.com', Role.STAFF)

        response = auth_client(drifter).get('/v1/branches')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'BRANCH_REQUIRED'


@pytest.mark.django_db
class TestSeedSample:
    """Test POST /v1/branches/seed-sample."""

    def test_seed_is_idempotent(self, auth_client, admin_user):
        client = auth_client(admin_user)

        first = client.post('/v1/branches/seed-sample')
        second = client.post('/v1/branches/seed-sample')

        assert first.status_code == status.HTTP_200_OK
        assert {entry['status'] for entry in first.data['summary']} == {'created'}
        assert {entry['status'] for entry in second.data['summary']} == {'skipped'}
        assert [entry['id'] for entry in first.data['summary']] == [entry['id'] for entry in second.data['summary']]
        assert Branch.objects.filter(name__in=['Steakz London', 'Steakz Paris', 'Steakz Madrid']).count() == 3

    def test_manager_cannot_seed(self, auth_client, manager):
        response = auth_client(manager).post('/v1/branches/seed-sample')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Branch.objects.filter(name='Steakz London').exists()


@pytest.mark.django_db
class TestBranchAnalytics:
    """Test GET /v1/branches/{id}/analytics."""

    @pytest.fixture
    def activity(self, customer, other_customer, branch_a, branch_b):
        Order.objects.create(branch=branch_a, user=customer, total=Decimal('45.99'))
        Order.objects.create(branch=branch_a, user=customer, total=Decimal('52.99'))
        Order.objects.create(branch=branch_b, user=other_customer, total=Decimal('42.99'))
        Reservation.objects.create(branch=branch_a, user=customer, date='2026-11-20', time='19:30', guests=2)
        Feedback.objects.create(branch=branch_a, user=customer, rating=5, comment='Great', approved=True)
        Feedback.objects.create(branch=branch_a, user=customer, rating=4, comment='Good', approved=True)
        Feedback.objects.create(branch=branch_a, user=customer, rating=1, comment='Pending', approved=False)

    def test_manager_reads_own_branch(self, auth_client, manager, branch_a, activity, ribeye, tbone):
        response = auth_client(manager).get(f'/v1/branches/{branch_a.id}/analytics')

        assert response.status_code == status.HTTP_200_OK
        data = response.data
        assert data['branch_id'] == branch_a.id
        assert data['sales'] == {'count': 2, 'total': Decimal('98.98')}
        assert data['reservations'] == {'count': 1}
        assert data['feedback'] == {'count': 2, 'average_rating': 4.5}
        assert data['inventory'] == {'low_stock_count': 1}

    def test_empty_branch(self, auth_client, admin_user, branch_b):
        response = auth_client(admin_user).get(f'/v1/branches/{branch_b.id}/analytics')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['sales'] == {'count': 0, 'total': Decimal('0.00')}
        assert response.data['feedback'] == {'count': 0, 'average_rating': 0}

    def test_manager_cannot_read_other_branch(self, auth_client, manager, branch_b):
        response = auth_client(manager).get(f'/v1/branches/{branch_b.id}/analytics')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error']['code'] == 'FORBIDDEN_BRANCH'

    def test_staff_is_forbidden(self, auth_client, staff, branch_a):
        response = auth_client(staff).get(f'/v1/branches/{branch_a.id}/analytics')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error']['code'] == 'FORBIDDEN_ROLE'

    def test_admin_unknown_branch(self, auth_client, admin_user):
        response = auth_client(admin_user).get('/v1/branches/999/analytics')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.parametrize('branch_id', ['99999999999999999999', '10000000000000000000', str(2 ** 63)])
    def test_admin_oversized_branch_id(self, auth_client, admin_user, branch_id):
        response = auth_client(admin_user).get(f'/v1/branches/{branch_id}/analytics')

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestBranchSettings:
    """Test GET/PATCH /v1/branches/{id}/settings."""

    def test_get_settings(self, auth_client, manager, branch_a):
        response = auth_client(manager).get(f'/v1/branches/{branch_a.id}/settings')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Steakz Downtown'
        assert response.data['holidays'] == []

    def test_update_hours(self, auth_client, manager, branch_a):
        response = auth_client(manager).patch(
            f'/v1/branches/{branch_a.id}/settings',
            {'opening_time': '10:00', 'closing_time': '23:30', 'holidays': ['2026-12-25']},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        branch_a.refresh_from_db()
        assert branch_a.opening_time == '10:00'
        assert branch_a.holidays == ['2026-12-25']

        log = AuditLog.objects.get(action='branch_settings_updated')
        assert log.branch_id == branch_a.id
        assert log.user == manager

    def test_name_is_read_only(self, auth_client, admin_user, branch_a):
        auth_client(admin_user).patch(f'/v1/branches/{branch_a.id}/settings', {'name': 'Renamed'}, format='json')

        branch_a.refresh_from_db()
        assert branch_a.name == 'Steakz Downtown'

    @pytest.mark.parametrize('payload', [
        {'opening_time': '25:00'},
        {'closing_time': '9pm'},
        {'latitude': 120},
        {'longitude': -200},
        {'holidays': 'christmas'},
    ])
    def test_invalid_values(self, auth_client, manager, branch_a, payload):
        response = auth_client(manager).patch(f'/v1/branches/{branch_a.id}/settings', payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'VALIDATION_ERROR'
        assert not AuditLog.objects.filter(action='branch_settings_updated').exists()

    def test_manager_cannot_update_other_branch(self, auth_client, manager, branch_b):
        response = auth_client(manager).patch(
            f'/v1/branches/{branch_b.id}/settings', {'phone': '+33 1 0000'}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        branch_b.refresh_from_db()
        assert branch_b.phone == ''

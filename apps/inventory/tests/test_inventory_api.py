"""
Tests for inventory endpoints.
"""
from decimal import Decimal

import pytest
from rest_framework import status

from apps.inventory.models import InventoryItem, MenuItem
from apps.rbac.models import AuditLog


@pytest.mark.django_db
class TestInventoryList:
    """Test GET /v1/inventory/."""

    def test_staff_lists_home_branch(self, auth_client, staff, ribeye, tbone, lobster_b):
        response = auth_client(staff).get('/v1/inventory/')

        assert response.status_code == status.HTTP_200_OK
        names = {row['menu_item']['name'] for row in response.data['results']}
        assert names == {'Ribeye Steak', 'T-Bone Steak'}

    def test_branch_hint_ignored_for_staff(self, auth_client, staff, ribeye, lobster_b, branch_b):
        response = auth_client(staff).get('/v1/inventory/', {'branch_id': branch_b.id})

        assert response.status_code == status.HTTP_200_OK
        assert [row['branch_id'] for row in response.data['results']] == [ribeye.branch_id]

    def test_admin_reads_requested_branch(self, auth_client, admin_user, ribeye, lobster_b, branch_b):
        response = auth_client(admin_user).get('/v1/inventory/', {'branch_id': branch_b.id})

        assert response.status_code == status.HTTP_200_OK
        assert [row['menu_item']['name'] for row in response.data['results']] == ['Lobster Tail']

    def test_low_stock_filter(self, auth_client, manager, ribeye, tbone):
        response = auth_client(manager).get('/v1/inventory/', {'low_stock': 'true'})

        assert response.data['count'] == 1
        row = response.data['results'][0]
        assert row['menu_item']['name'] == 'T-Bone Steak'
        assert row['is_low_stock'] is True

    def test_chef_is_forbidden(self, auth_client, chef):
        response = auth_client(chef).get('/v1/inventory/')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error']['code'] == 'FORBIDDEN_ROLE'

    def test_customer_is_forbidden(self, auth_client, customer):
        response = auth_client(customer).get('/v1/inventory/')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error']['code'] == 'FORBIDDEN_ROLE'

    def test_anonymous(self, api_client, db):
        response = api_client.get('/v1/inventory/')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestInventoryCreate:
    """Test POST /v1/inventory/."""

    @pytest.fixture
    def sirloin(self, branch_a):
        return MenuItem.objects.create(branch=branch_a, name='Sirloin', category='Steaks', price=Decimal('39.99'))

    def test_track_existing_menu_item(self, auth_client, manager, sirloin):
        response = auth_client(manager).post(
            '/v1/inventory/', {'menu_item_id': sirloin.id, 'quantity': 20}, format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['quantity'] == 20
        assert response.data['min_quantity'] == 10
        assert response.data['branch_id'] == sirloin.branch_id

    def test_negative_quantity_is_clamped(self, auth_client, manager, sirloin):
        response = auth_client(manager).post(
            '/v1/inventory/', {'menu_item_id': sirloin.id, 'quantity': -5}, format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['quantity'] == 0

    def test_menu_item_of_other_branch(self, auth_client, manager, lobster_b):
        response = auth_client(manager).post('/v1/inventory/', {'menu_item_id': lobster_b.id}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_duplicate_stock_record(self, auth_client, manager, ribeye):
        response = auth_client(manager).post('/v1/inventory/', {'menu_item_id': ribeye.id}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'menu_item_id' in response.data['error']['details']

    def test_staff_cannot_create(self, auth_client, staff, sirloin):
        response = auth_client(staff).post('/v1/inventory/', {'menu_item_id': sirloin.id}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error']['code'] == 'FORBIDDEN_ROLE'

    def test_admin_unknown_branch_is_not_found(self, auth_client, admin_user, sirloin):
        response = auth_client(admin_user).post(
            '/v1/inventory/', {'menu_item_id': sirloin.id, 'branch_id': 999}, format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error']['message'] == 'Branch not found.'
        assert not InventoryItem.objects.filter(menu_item=sirloin).exists()


@pytest.mark.django_db
class TestInventoryWithItem:
    """Test POST /v1/inventory/with-item."""

    def test_creates_menu_item_and_stock(self, auth_client, manager, branch_a):
        response = auth_client(manager).post(
            '/v1/inventory/with-item',
            {'name': '  Sirloin  ', 'price': '39.99', 'quantity': 30},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        menu_item = MenuItem.objects.get(name='Sirloin')
        assert menu_item.branch_id == branch_a.id
        assert menu_item.category == 'Other'
        assert menu_item.description == 'Sirloin inventory item'
        assert InventoryItem.objects.get(menu_item=menu_item).quantity == 30

    def test_blank_name(self, auth_client, manager):
        response = auth_client(manager).post('/v1/inventory/with-item', {'name': '   '}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not MenuItem.objects.exists()

    def test_admin_targets_branch_from_body(self, auth_client, admin_user, branch_b):
        response = auth_client(admin_user).post(
            '/v1/inventory/with-item', {'name': 'Sirloin', 'branch_id': branch_b.id}, format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['branch_id'] == branch_b.id

    def test_admin_unknown_branch_is_not_found(self, auth_client, admin_user):
        response = auth_client(admin_user).post(
            '/v1/inventory/with-item', {'name': 'Sirloin', 'branch_id': 999}, format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error']['code'] == 'NOT_FOUND'
        assert not MenuItem.objects.filter(name='Sirloin').exists()


@pytest.mark.django_db
class TestInventoryUpdate:
    """Test PATCH /v1/inventory/{id}."""

    def test_manager_adjusts_stock(self, auth_client, manager, ribeye):
        item = ribeye.inventory_items.get()

        response = auth_client(manager).patch(f'/v1/inventory/{item.id}', {'quantity': 42}, format='json')

        assert response.status_code == status.HTTP_200_OK
        item.refresh_from_db()
        assert item.quantity == 42
        log = AuditLog.objects.get(action='inventory_updated')
        assert log.diff == {
            'before': {'quantity': 50, 'min_quantity': 10},
            'after': {'quantity': 42, 'min_quantity': 10},
        }

    def test_other_branch_is_forbidden(self, auth_client, manager, lobster_b):
        item = lobster_b.inventory_items.get()

        response = auth_client(manager).patch(f'/v1/inventory/{item.id}', {'quantity': 0}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error']['code'] == 'FORBIDDEN_BRANCH'
        item.refresh_from_db()
        assert item.quantity == 25

    def test_staff_cannot_adjust(self, auth_client, staff, ribeye):
        item = ribeye.inventory_items.get()

        response = auth_client(staff).patch(f'/v1/inventory/{item.id}', {'quantity': 1}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error']['code'] == 'FORBIDDEN_ROLE'

    def test_empty_body(self, auth_client, manager, ribeye):
        item = ribeye.inventory_items.get()

        response = auth_client(manager).patch(f'/v1/inventory/{item.id}', {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_item(self, auth_client, manager):
        response = auth_client(manager).patch('/v1/inventory/999', {'quantity': 1}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

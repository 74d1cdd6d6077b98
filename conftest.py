"""
Pytest configuration and fixtures.
"""
from decimal import Decimal

import pytest
from rest_framework.test import APIClient


DEFAULT_PASSWORD = 'password123'


@pytest.fixture
def api_client():
    """Return DRF API client."""
    return APIClient()


@pytest.fixture
def branch_a(db):
    """Home branch of most test users."""
    from apps.branches.models import Branch
    return Branch.objects.create(name='Steakz Downtown', location='Downtown', city='London', country='UK')


@pytest.fixture
def branch_b(db):
    """A second branch for isolation tests."""
    from apps.branches.models import Branch
    return Branch.objects.create(name='Steakz Uptown', location='Uptown', city='Paris', country='France')


@pytest.fixture
def make_user(db):
    """Factory creating a user with a role and home branch."""
    from apps.rbac.models import User

    def _make_user(email, role, branch=None, password=DEFAULT_PASSWORD, **extra):
        return User.objects.create_user(
            email=email,
            password=password,
            role=role,
            branch=branch,
            **extra
        )

    return _make_user


@pytest.fixture
def admin_user(make_user, branch_a):
    from apps.rbac.roles import Role
    return make_user('admin@steakz.com', Role.ADMIN, branch=branch_a)


@pytest.fixture
def manager(make_user, branch_a):
    from apps.rbac.roles import Role
    return make_user('manager@steakz.com', Role.MANAGER, branch=branch_a)


@pytest.fixture
def chef(make_user, branch_a):
    from apps.rbac.roles import Role
    return make_user('chef@steakz.com', Role.CHEF, branch=branch_a)


@pytest.fixture
def staff(make_user, branch_a):
    from apps.rbac.roles import Role
    return make_user('staff@steakz.com', Role.STAFF, branch=branch_a)


@pytest.fixture
def customer(make_user, branch_a):
    from apps.rbac.roles import Role
    return make_user('customer@email.com', Role.CUSTOMER, branch=branch_a)


@pytest.fixture
def other_manager(make_user, branch_b):
    """Manager of the second branch."""
    from apps.rbac.roles import Role
    return make_user('manager.b@steakz.com', Role.MANAGER, branch=branch_b)


@pytest.fixture
def other_customer(make_user, branch_b):
    from apps.rbac.roles import Role
    return make_user('customer.b@email.com', Role.CUSTOMER, branch=branch_b)


@pytest.fixture
def auth_client():
    """Return a factory producing an API client authenticated as a user."""
    from apps.rbac.services import AuthService

    def _auth_client(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {AuthService.generate_jwt(user)}')
        return client

    return _auth_client


@pytest.fixture
def ribeye(branch_a):
    """Menu item with 50 units in stock at branch A."""
    from apps.inventory.models import InventoryItem, MenuItem
    menu_item = MenuItem.objects.create(
        branch=branch_a, name='Ribeye Steak', category='Steaks', price=Decimal('45.99')
    )
    InventoryItem.objects.create(branch=branch_a, menu_item=menu_item, quantity=50)
    return menu_item


@pytest.fixture
def tbone(branch_a):
    """Menu item with only 8 units in stock at branch A (below the minimum)."""
    from apps.inventory.models import InventoryItem, MenuItem
    menu_item = MenuItem.objects.create(
        branch=branch_a, name='T-Bone Steak', category='Steaks', price=Decimal('48.99')
    )
    InventoryItem.objects.create(branch=branch_a, menu_item=menu_item, quantity=8)
    return menu_item


@pytest.fixture
def lobster_b(branch_b):
    """Menu item stocked at branch B only."""
    from apps.inventory.models import InventoryItem, MenuItem
    menu_item = MenuItem.objects.create(
        branch=branch_b, name='Lobster Tail', category='Seafood', price=Decimal('42.99')
    )
    InventoryItem.objects.create(branch=branch_b, menu_item=menu_item, quantity=25)
    return menu_item

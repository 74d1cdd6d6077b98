"""
Tests for the role enumeration and capability matrix.
"""
import pytest
from apps.rbac.roles import (
    ALL_ROLES, ROLE_CATEGORIES, ResourceCategory, Role,
    is_resource_category_allowed, is_role_allowed, normalize_role,
)


class TestNormalizeRole:

    @pytest.mark.parametrize('value,expected', [
        ('ADMIN', Role.ADMIN),
        ('admin', Role.ADMIN),
        ('  Manager ', Role.MANAGER),
        (Role.CHEF, Role.CHEF),
        ('customer', Role.CUSTOMER),
    ])
    def test_resolves_known_roles(self, value, expected):
        assert normalize_role(value) == expected

    @pytest.mark.parametrize('value', [None, '', '   ', 'OWNER', 'kitchen', 42])
    def test_unknown_roles_resolve_to_none(self, value):
        assert normalize_role(value) is None


class TestIsRoleAllowed:

    def test_role_in_allowed_set(self):
        assert is_role_allowed(Role.MANAGER, {Role.ADMIN, Role.MANAGER})

    def test_role_not_in_allowed_set(self):
        assert not is_role_allowed(Role.STAFF, {Role.ADMIN, Role.MANAGER})

    def test_comparison_is_case_insensitive(self):
        assert is_role_allowed('manager', ['MANAGER'])
        assert is_role_allowed('MANAGER', ['manager'])

    def test_unknown_role_is_denied(self):
        assert not is_role_allowed('OWNER', ALL_ROLES)
        assert not is_role_allowed(None, ALL_ROLES)

    def test_empty_allowed_set_denies_everyone(self):
        for role in Role:
            assert not is_role_allowed(role, [])
            assert not is_role_allowed(role, None)


class TestResourceCategories:

    def test_admin_and_manager_reach_every_category(self):
        for category in ResourceCategory:
            assert is_resource_category_allowed(Role.ADMIN, category)
            assert is_resource_category_allowed(Role.MANAGER, category)

    def test_chef_reaches_orders_only(self):
        assert is_resource_category_allowed(Role.CHEF, ResourceCategory.ORDERS)
        for category in set(ResourceCategory) - {ResourceCategory.ORDERS}:
            assert not is_resource_category_allowed(Role.CHEF, category)

    def test_staff_cannot_manage_staff_or_branch(self):
        assert not is_resource_category_allowed(Role.STAFF, ResourceCategory.STAFF)
        assert not is_resource_category_allowed(Role.STAFF, ResourceCategory.BRANCH)
        assert is_resource_category_allowed(Role.STAFF, ResourceCategory.INVENTORY)

    def test_customer_categories(self):
        assert is_resource_category_allowed(Role.CUSTOMER, ResourceCategory.ORDERS)
        assert is_resource_category_allowed(Role.CUSTOMER, ResourceCategory.RESERVATIONS)
        assert is_resource_category_allowed(Role.CUSTOMER, ResourceCategory.FEEDBACK)
        assert not is_resource_category_allowed(Role.CUSTOMER, ResourceCategory.INVENTORY)

    def test_category_names_are_case_insensitive(self):
        assert is_resource_category_allowed('chef', 'orders')

    def test_unknown_category_or_role_is_denied(self):
        assert not is_resource_category_allowed(Role.ADMIN, 'PAYROLL')
        assert not is_resource_category_allowed(None, ResourceCategory.ORDERS)

    def test_every_role_has_a_row(self):
        assert set(ROLE_CATEGORIES) == set(Role)

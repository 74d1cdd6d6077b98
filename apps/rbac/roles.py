"""
Role model and capability matrix.

Roles are a closed enumeration; every actor has exactly one. Which resource
categories a role may reach is a static table, with the kitchen role
narrowed to orders only.
"""
import logging
from django.db import models

logger = logging.getLogger(__name__)


class Role(models.TextChoices):
    ADMIN = 'ADMIN', 'Owner / Admin'
    MANAGER = 'MANAGER', 'Branch Manager'
    CHEF = 'CHEF', 'Kitchen Staff'
    STAFF = 'STAFF', 'Front Staff'
    CUSTOMER = 'CUSTOMER', 'Customer'


TOP_ROLE = Role.ADMIN

ALL_ROLES = frozenset(Role)
STAFF_ROLES = frozenset({Role.MANAGER, Role.CHEF, Role.STAFF})


class ResourceCategory(models.TextChoices):
    ORDERS = 'ORDERS', 'Orders'
    INVENTORY = 'INVENTORY', 'Inventory'
    RESERVATIONS = 'RESERVATIONS', 'Reservations'
    FEEDBACK = 'FEEDBACK', 'Feedback'
    STAFF = 'STAFF', 'Staff'
    BRANCH = 'BRANCH', 'Branch analytics and settings'


ROLE_CATEGORIES = {
    Role.ADMIN: frozenset(ResourceCategory),
    Role.MANAGER: frozenset(ResourceCategory),
    Role.STAFF: frozenset({
        ResourceCategory.ORDERS,
        ResourceCategory.INVENTORY,
        ResourceCategory.RESERVATIONS,
        ResourceCategory.FEEDBACK,
    }),
    Role.CUSTOMER: frozenset({
        ResourceCategory.ORDERS,
        ResourceCategory.RESERVATIONS,
        ResourceCategory.FEEDBACK,
    }),
    # Kitchen staff view orders and move them through the kitchen; nothing else.
    Role.CHEF: frozenset({ResourceCategory.ORDERS}),
}


def normalize_role(value):
    """
    Resolve a raw role value to a Role, case-insensitively.

    Returns None for empty or unknown values.
    """
    if value is None:
        return None
    text = str(value).strip().upper()
    if not text:
        return None
    try:
        return Role(text)
    except ValueError:
        return None


def _normalize_category(value):
    if value is None:
        return None
    try:
        return ResourceCategory(str(value).strip().upper())
    except ValueError:
        return None


def is_role_allowed(role, required_roles) -> bool:
    """
    Check a role against a route's allowed-role set.

    Comparison is case-insensitive. An unresolvable role is always denied,
    and so is everybody when required_roles is empty.
    """
    resolved = normalize_role(role)
    if resolved is None:
        return False

    allowed = {normalize_role(r) for r in (required_roles or ())}
    allowed.discard(None)
    if not allowed:
        logger.warning(
            "Role check against an empty allowed-role set; denying",
            extra={'role': resolved.value}
        )
        return False

    return resolved in allowed


def is_resource_category_allowed(role, category) -> bool:
    """
    Check whether a role may reach a resource category at all,
    independent of any branch match.
    """
    resolved = normalize_role(role)
    resolved_category = _normalize_category(category)
    if resolved is None or resolved_category is None:
        return False
    return resolved_category in ROLE_CATEGORIES.get(resolved, frozenset())

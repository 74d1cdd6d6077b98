"""
DRF permission classes and decorators for branch-scoped RBAC.

This module provides:
- BranchScopedPermission: DRF permission class that runs the guard pipeline
- @requires_roles: Decorator to declare allowed roles and category on views
"""
import logging

from rest_framework.permissions import BasePermission

from apps.core.logging import SecurityLogger
from apps.rbac.branch_scope import parse_branch_id
from apps.rbac.guards import UNSET, Actor, authorize, enforce_resource_branch

logger = logging.getLogger(__name__)


def get_allowed_roles(view, method):
    """
    Allowed roles for a view and HTTP method.

    ``allowed_roles`` is either one collection of roles for every method or
    a mapping of HTTP method to roles. Unlisted methods admit nobody.
    """
    allowed = getattr(view, 'allowed_roles', None)
    if isinstance(allowed, dict):
        return allowed.get(method.upper(), frozenset())
    return allowed or frozenset()


def get_requested_branch_id(request, view):
    """
    Branch hint carried by the request.

    Looked up in the path kwarg named by ``view.branch_url_kwarg``, then the
    ``branch_id`` query parameter, then ``branch_id`` in the request body.
    """
    kwarg = getattr(view, 'branch_url_kwarg', None)
    if kwarg and kwarg in getattr(view, 'kwargs', {}):
        return view.kwargs[kwarg]

    requested = request.query_params.get('branch_id')
    if requested is not None:
        return requested

    if request.method not in ('GET', 'HEAD', 'OPTIONS') and isinstance(request.data, dict):
        return request.data.get('branch_id')
    return None


class BranchScopedPermission(BasePermission):
    """
    Run the branch-scoped guard pipeline for every request.

    View attributes:
        allowed_roles: roles (or {method: roles}) admitted by the route
        resource_category: ResourceCategory, or None for uncategorized routes
        branch_scoped: False for routes that touch no branch-owned data
        branch_url_kwarg: path kwarg carrying a branch id
        branch_is_resource: True when that path branch is itself the protected
            resource (branch settings, analytics, staff roster) rather than a
            hint for scoping a query

    On success the request carries ``actor`` and ``effective_branch_id``.

    Usage in views:
        class OrderListView(APIView):
            permission_classes = [BranchScopedPermission]
            allowed_roles = ALL_ROLES
            resource_category = ResourceCategory.ORDERS
    """

    def has_permission(self, request, view):
        actor = Actor.from_user(getattr(request, 'user', None))
        request.actor = actor

        requested_branch_id = get_requested_branch_id(request, view)
        resource_branch_id = UNSET
        if getattr(view, 'branch_is_resource', False):
            resource_branch_id = parse_branch_id(requested_branch_id)

        result = authorize(
            actor,
            get_allowed_roles(view, request.method),
            category=getattr(view, 'resource_category', None),
            requested_branch_id=requested_branch_id,
            resource_branch_id=resource_branch_id,
            branch_scoped=getattr(view, 'branch_scoped', True),
        )
        request.effective_branch_id = result.effective_branch_id

        if not result.allowed:
            self._deny(request, view, actor, result)

        logger.debug(
            "Access granted",
            extra={
                'view': view.__class__.__name__,
                'method': request.method,
                'effective_branch_id': result.effective_branch_id,
            }
        )
        return True

    def has_object_permission(self, request, view, obj):
        """
        Compare the loaded resource's owning branch against the actor.

        Applies to every operation keyed by resource id, including status
        transitions whose route carries no branch parameter.
        """
        actor = getattr(request, 'actor', None)
        result = enforce_resource_branch(
            actor,
            getattr(request, 'effective_branch_id', None),
            getattr(obj, 'branch_id', None),
        )
        if not result.allowed:
            self._deny(request, view, actor, result, obj=obj)
        return True

    def _deny(self, request, view, actor, result, obj=None):
        SecurityLogger.log_access_denied(
            result,
            actor=actor,
            ip_address=request.META.get('REMOTE_ADDR'),
            path=request.path,
        )
        logger.warning(
            f"Access denied: {result.kind.value}",
            extra={
                'view': view.__class__.__name__,
                'method': request.method,
                'object_type': obj.__class__.__name__ if obj is not None else None,
                'object_id': getattr(obj, 'pk', None),
            }
        )
        result.raise_for_denial()


def requires_roles(*roles, category=None, methods=None):
    """
    Class decorator declaring which roles may call a view.

    Usage:
        @requires_roles(Role.ADMIN, Role.MANAGER, category=ResourceCategory.INVENTORY)
        class InventoryUpdateView(APIView):
            permission_classes = [BranchScopedPermission]

        @requires_roles(Role.ADMIN, methods=['POST'])
        class StaffView(APIView):
            ...

    Args:
        *roles: roles admitted by the view
        category: ResourceCategory enforced in addition to the role check
        methods: restrict the declaration to these HTTP methods

    Returns:
        Decorator function that sets allowed_roles (and resource_category)
    """
    def decorator(view_class):
        role_set = frozenset(roles)
        if methods:
            current = getattr(view_class, 'allowed_roles', None)
            mapping = dict(current) if isinstance(current, dict) else {}
            for method in methods:
                mapping[method.upper()] = role_set
            view_class.allowed_roles = mapping
        else:
            view_class.allowed_roles = role_set
        if category is not None:
            view_class.resource_category = category
        return view_class

    return decorator

"""
Ordered guard pipeline for branch-scoped operations.

A protected operation is evaluated in a fixed order and stops at the first
failing step:

1. authenticated actor with a resolvable role
2. role is in the route's allowed-role set
3. role may reach the resource category
4. an effective branch can be resolved
5. the resource's owning branch is reachable from that branch
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from apps.core.exceptions import (
    AuthenticationRequired, BranchForbidden, BranchRequired,
    CategoryForbidden, RoleForbidden,
)
from apps.rbac.branch_scope import (
    BRANCH_CONTEXT_REQUIRED, check_branch_access, resolve_effective_branch,
)
from apps.rbac.roles import (
    is_resource_category_allowed, is_role_allowed, normalize_role,
)

UNSET = object()


@dataclass(frozen=True)
class Actor:
    """The authenticated identity making a request."""
    id: Optional[int]
    role: Optional[str]
    home_branch_id: Optional[int]
    active_branch_id: Optional[int] = None

    @classmethod
    def from_user(cls, user):
        if user is None or not getattr(user, 'is_authenticated', False):
            return None
        return cls(
            id=user.pk,
            role=normalize_role(getattr(user, 'role', None)),
            home_branch_id=getattr(user, 'branch_id', None),
            active_branch_id=getattr(user, 'active_branch_id', None),
        )


class AccessKind(str, Enum):
    ALLOW = 'ALLOW'
    UNAUTHENTICATED = 'UNAUTHENTICATED'
    FORBIDDEN_ROLE = 'FORBIDDEN_ROLE'
    FORBIDDEN_CATEGORY = 'FORBIDDEN_CATEGORY'
    FORBIDDEN_BRANCH = 'FORBIDDEN_BRANCH'
    BRANCH_REQUIRED = 'BRANCH_REQUIRED'


_EXCEPTIONS = {
    AccessKind.UNAUTHENTICATED: AuthenticationRequired,
    AccessKind.FORBIDDEN_ROLE: RoleForbidden,
    AccessKind.FORBIDDEN_CATEGORY: CategoryForbidden,
    AccessKind.FORBIDDEN_BRANCH: BranchForbidden,
    AccessKind.BRANCH_REQUIRED: BranchRequired,
}


@dataclass(frozen=True)
class AccessResult:
    kind: AccessKind
    reason: Optional[str] = None
    effective_branch_id: Optional[int] = None
    resource_branch_id: Optional[int] = None

    @property
    def allowed(self):
        return self.kind is AccessKind.ALLOW

    def __bool__(self):
        return self.allowed

    def raise_for_denial(self):
        """Raise the API exception matching a denial; no-op when allowed."""
        if self.allowed:
            return
        exc_class = _EXCEPTIONS[self.kind]
        if self.kind is AccessKind.UNAUTHENTICATED:
            raise exc_class()
        raise exc_class(detail=self.reason or exc_class.default_detail)


def enforce_resource_branch(actor, effective_branch_id, resource_branch_id) -> AccessResult:
    """Step 5 on its own, for resources loaded after the route-level checks."""
    decision = check_branch_access(actor, effective_branch_id, resource_branch_id)
    if decision.allowed:
        return AccessResult(
            AccessKind.ALLOW,
            effective_branch_id=effective_branch_id,
            resource_branch_id=resource_branch_id,
        )
    kind = AccessKind.BRANCH_REQUIRED if decision.reason == BRANCH_CONTEXT_REQUIRED else AccessKind.FORBIDDEN_BRANCH
    return AccessResult(
        kind,
        reason=decision.reason,
        effective_branch_id=effective_branch_id,
        resource_branch_id=resource_branch_id,
    )


def authorize(actor, allowed_roles, category=None, requested_branch_id=None,
              resource_branch_id=UNSET, branch_scoped=True) -> AccessResult:
    """
    Run the guard pipeline for one operation.

    Args:
        actor: Actor or None for an anonymous request
        allowed_roles: roles the route admits
        category: ResourceCategory of the route, or None for routes that
            are not category-restricted
        requested_branch_id: branch hint from the request (path, query or body)
        resource_branch_id: owning branch of the target resource; UNSET when
            the route acts on the effective branch itself
        branch_scoped: False for routes that touch no branch-owned data
            (steps 4 and 5 are skipped)

    Returns:
        AccessResult; when allowed, effective_branch_id is the branch the
        caller must use to scope its query.
    """
    if actor is None or normalize_role(actor.role) is None:
        return AccessResult(AccessKind.UNAUTHENTICATED, reason='authentication required')

    if not is_role_allowed(actor.role, allowed_roles):
        return AccessResult(AccessKind.FORBIDDEN_ROLE, reason=f"role {normalize_role(actor.role).value} not permitted")

    if category is not None and not is_resource_category_allowed(actor.role, category):
        return AccessResult(AccessKind.FORBIDDEN_CATEGORY, reason='role category restriction')

    if not branch_scoped:
        return AccessResult(AccessKind.ALLOW)

    effective_branch_id = resolve_effective_branch(actor, requested_branch_id)
    if effective_branch_id is None:
        return AccessResult(AccessKind.BRANCH_REQUIRED, reason=BRANCH_CONTEXT_REQUIRED)

    if resource_branch_id is UNSET:
        resource_branch_id = effective_branch_id

    return enforce_resource_branch(actor, effective_branch_id, resource_branch_id)

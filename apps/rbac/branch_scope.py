"""
Branch resolution and branch access enforcement.

Both functions are pure: they read the actor and the supplied ids and
never touch the database or mutate the actor.
"""
import re
from dataclasses import dataclass
from typing import Optional

from apps.core.converters import MAX_PRIMARY_KEY
from apps.rbac.roles import TOP_ROLE, normalize_role

BRANCH_MISMATCH = 'branch mismatch'
BRANCH_CONTEXT_REQUIRED = 'branch context required'

_DIGITS = re.compile(r"^\d+$")

MAX_BRANCH_ID = MAX_PRIMARY_KEY
_MAX_DIGITS = len(str(MAX_BRANCH_ID))


def parse_branch_id(value) -> Optional[int]:
    """
    Parse a branch id arriving from the outside world.

    Accepts positive ints and strings of digits up to MAX_BRANCH_ID.
    Everything else, including non-numeric text, booleans, zero, negative
    numbers and ids no database row can carry, means "not defined" and
    returns None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        parsed = int(value)
    elif isinstance(value, (str, bytes)):
        try:
            text = value.decode() if isinstance(value, bytes) else value
        except UnicodeDecodeError:
            return None
        text = text.strip()
        if len(text) > _MAX_DIGITS or not _DIGITS.match(text):
            return None
        parsed = int(text)
    else:
        return None
    return parsed if 0 < parsed <= MAX_BRANCH_ID else None


def resolve_effective_branch(actor, requested_branch_id=None) -> Optional[int]:
    """
    Compute the branch id that scopes an operation.

    Non-top roles are pinned to their home branch; a requested branch is
    ignored for them. The top role takes the first defined value of the
    requested branch, its active branch and its home branch.
    """
    if normalize_role(actor.role) != TOP_ROLE:
        return parse_branch_id(actor.home_branch_id)

    for candidate in (requested_branch_id, actor.active_branch_id, actor.home_branch_id):
        branch_id = parse_branch_id(candidate)
        if branch_id is not None:
            return branch_id
    return None


@dataclass(frozen=True)
class Decision:
    allowed: bool
    branch_id: Optional[int] = None
    reason: Optional[str] = None

    def __bool__(self):
        return self.allowed


def allow(branch_id=None) -> Decision:
    return Decision(allowed=True, branch_id=branch_id)


def deny(reason: str) -> Decision:
    return Decision(allowed=False, reason=reason)


def check_branch_access(actor, effective_branch_id, resource_branch_id) -> Decision:
    """
    Decide whether an actor may touch a resource owned by a branch.

    The top role is branch-unconstrained. Everyone else must own the
    resource's branch; a missing id on either side is never a wildcard.
    """
    if normalize_role(actor.role) == TOP_ROLE:
        return allow(parse_branch_id(effective_branch_id))

    home_branch_id = parse_branch_id(actor.home_branch_id)
    resource_branch_id = parse_branch_id(resource_branch_id)
    if home_branch_id is None or resource_branch_id is None:
        return deny(BRANCH_CONTEXT_REQUIRED)
    if resource_branch_id != home_branch_id:
        return deny(BRANCH_MISMATCH)
    return allow(home_branch_id)

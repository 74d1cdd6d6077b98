"""
RBAC (Role-Based Access Control) application.

Provides branch-scoped access control with:
- Users holding exactly one role and a home branch
- Owner active-branch selection
- Ordered guard pipeline (role, category, branch)
- Audit logging
"""

"""
RBAC API URLs.

Provides endpoints for:
- Owner active-branch selection
- Staff administration
"""
from django.urls import path
from apps.rbac.views import (
    ActiveBranchView,
    StaffCreateView,
    StaffListView,
    StaffResetPasswordView,
)

app_name = 'rbac'

urlpatterns = [
    # Active branch
    path('users/<id:user_id>/active-branch', ActiveBranchView.as_view(), name='active-branch'),

    # Staff administration
    path('admin/staff', StaffCreateView.as_view(), name='staff-create'),
    path('admin/staff/<id:branch_id>', StaffListView.as_view(), name='staff-list'),
    path('admin/staff/<id:user_id>/reset-password', StaffResetPasswordView.as_view(), name='staff-reset-password'),
]

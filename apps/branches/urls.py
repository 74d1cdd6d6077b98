"""
Branch API URLs.
"""
from django.urls import path
from apps.branches.views import (
    BranchAnalyticsView,
    BranchListView,
    BranchSeedSampleView,
    BranchSettingsView,
)

app_name = 'branches'

urlpatterns = [
    path('branches', BranchListView.as_view(), name='branch-list'),
    path('branches/seed-sample', BranchSeedSampleView.as_view(), name='branch-seed-sample'),
    path('branches/<id:branch_id>/analytics', BranchAnalyticsView.as_view(), name='branch-analytics'),
    path('branches/<id:branch_id>/settings', BranchSettingsView.as_view(), name='branch-settings'),
]

"""
Feedback API URLs.
"""
from django.urls import path
from apps.feedback.views import (
    FeedbackApproveView,
    FeedbackDetailView,
    FeedbackListView,
    FeedbackReplyView,
)

app_name = 'feedback'

urlpatterns = [
    path('feedback/', FeedbackListView.as_view(), name='feedback-list'),
    path('feedback/<id:feedback_id>', FeedbackDetailView.as_view(), name='feedback-detail'),
    path('feedback/<id:feedback_id>/reply', FeedbackReplyView.as_view(), name='feedback-reply'),
    path('feedback/<id:feedback_id>/approve', FeedbackApproveView.as_view(), name='feedback-approve'),
]

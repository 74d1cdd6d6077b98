"""
Django admin configuration for feedback.
"""
from django.contrib import admin
from .models import Feedback


@admin.register(Feedback)
class FeedbackAdmin(admin.ModelAdmin):
    list_display = ['id', 'branch', 'user', 'rating', 'approved', 'created_at']
    list_filter = ['branch', 'approved', 'rating']
    search_fields = ['comment', 'reply', 'user__email']

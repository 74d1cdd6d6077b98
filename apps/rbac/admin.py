"""
Django admin configuration for RBAC app.
"""
from django.contrib import admin
from .models import AuditLog, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """
    Admin for the User model.

    Passwords are never edited here; staff passwords are reset through the API.
    """
    list_display = ['email', 'name', 'role', 'branch', 'active_branch', 'is_active', 'created_at']
    list_filter = ['role', 'branch', 'is_active', 'created_at']
    search_fields = ['email', 'name']
    ordering = ['-created_at']

    fieldsets = (
        (None, {
            'fields': ('email', 'name', 'role')
        }),
        ('Branches', {
            'fields': ('branch', 'active_branch')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_superuser')
        }),
        ('Activity', {
            'fields': ('last_login_at', 'created_at', 'updated_at')
        }),
    )

    readonly_fields = ['created_at', 'updated_at', 'last_login_at']


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ['action', 'user', 'branch_id', 'target_type', 'target_id', 'created_at']
    list_filter = ['action', 'target_type', 'created_at']
    search_fields = ['user__email', 'action', 'request_id']
    readonly_fields = [f.name for f in AuditLog._meta.fields]

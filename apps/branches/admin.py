"""
Django admin configuration for branches.
"""
from django.contrib import admin
from .models import Branch


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ['name', 'city', 'country', 'timezone', 'opening_time', 'closing_time']
    search_fields = ['name', 'city', 'country']
    list_filter = ['country']

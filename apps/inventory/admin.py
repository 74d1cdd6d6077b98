"""
Django admin configuration for menus and stock.
"""
from django.contrib import admin
from .models import InventoryItem, MenuItem


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'price', 'branch', 'created_at']
    list_filter = ['branch', 'category']
    search_fields = ['name', 'description']


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ['menu_item', 'branch', 'quantity', 'min_quantity', 'updated_at']
    list_filter = ['branch']
    search_fields = ['menu_item__name']
    list_select_related = ['menu_item', 'branch']

"""
Django admin configuration for orders.
"""
from django.contrib import admin
from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ['menu_item', 'quantity', 'price']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['id', 'branch', 'user', 'status', 'total', 'created_at']
    list_filter = ['branch', 'status', 'created_at']
    search_fields = ['user__email']
    inlines = [OrderItemInline]

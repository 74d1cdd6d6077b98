"""
Inventory API URLs.
"""
from django.urls import path
from apps.inventory.views import (
    InventoryDetailView,
    InventoryListView,
    InventoryWithItemCreateView,
)

app_name = 'inventory'

urlpatterns = [
    path('inventory/', InventoryListView.as_view(), name='inventory-list'),
    path('inventory/with-item', InventoryWithItemCreateView.as_view(), name='inventory-with-item'),
    path('inventory/<id:pk>', InventoryDetailView.as_view(), name='inventory-detail'),
]
